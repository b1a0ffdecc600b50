# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structural invariant checks on generated IR.

Violations raise AssertionError; they indicate a codegen bug (or a hand-built
or decoded module that codegen could not have produced), never a user error.
"""

from __future__ import annotations

from typing import Dict, List, Set

from lamc.stage2 import ir_nodes as I


def successors(term: I.ITerminator) -> List[I.Label]:
	if isinstance(term, I.Br):
		return [term.label]
	if isinstance(term, I.CondBr):
		return [term.then_label, term.else_label]
	return []


def predecessor_map(func: I.Function) -> Dict[I.Label, Set[I.Label]]:
	"""Map each block label to the labels of the blocks that branch to it."""
	preds: Dict[I.Label, Set[I.Label]] = {b.label: set() for b in func.blocks}
	for block in func.blocks:
		for succ in successors(block.terminator):
			preds.setdefault(succ, set()).add(block.label)
	return preds


def validate_function(func: I.Function) -> None:
	"""Ensure one function's CFG is well formed and its phis name real predecessors."""
	where = f"function {func.name!r}"
	if not func.blocks:
		raise AssertionError(f"IR invariant violation: {where} has no blocks")

	labels: Set[I.Label] = set()
	for block in func.blocks:
		if block.label in labels:
			raise AssertionError(f"IR invariant violation: duplicate label L{block.label} in {where}")
		labels.add(block.label)
		if not isinstance(block.terminator, I.ITerminator):
			raise AssertionError(f"IR invariant violation: block L{block.label} in {where} has no terminator")

	for block in func.blocks:
		for succ in successors(block.terminator):
			if succ not in labels:
				raise AssertionError(
					f"IR invariant violation: block L{block.label} in {where} branches to missing L{succ}"
				)

	# Reachability from the entry block.
	by_label = {b.label: b for b in func.blocks}
	seen: Set[I.Label] = set()
	worklist = [func.entry.label]
	while worklist:
		label = worklist.pop()
		if label in seen:
			continue
		seen.add(label)
		worklist.extend(successors(by_label[label].terminator))
	unreachable = sorted(labels - seen)
	if unreachable:
		raise AssertionError(f"IR invariant violation: unreachable blocks {unreachable} in {where}")

	preds = predecessor_map(func)
	for block in func.blocks:
		for instr in block.instructions:
			if not isinstance(instr, I.Phi):
				continue
			for incoming in (instr.then_label, instr.else_label):
				if incoming not in preds[block.label]:
					raise AssertionError(
						f"IR invariant violation: phi {instr.name!r} in L{block.label} of {where} "
						f"names L{incoming}, which is not a predecessor"
					)


def validate_module(module: I.Module) -> None:
	for func in module.functions:
		validate_function(func)


__all__ = ["successors", "predecessor_map", "validate_function", "validate_module"]
