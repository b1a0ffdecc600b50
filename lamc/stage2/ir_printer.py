# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Plain-text rendering of IR modules, for debugging and `--emit-text`."""

from __future__ import annotations

from typing import List

from . import ir_nodes as I


def format_name(name: I.Name) -> str:
	return f"%{name}"


def format_value(value: I.Value) -> str:
	if isinstance(value, I.Const):
		return str(value.value)
	return format_name(value.name)


def format_instr(instr: I.IInstr) -> str:
	dest = format_name(instr.name)
	if isinstance(instr, I.Binary):
		return f"  {dest} = {format_value(instr.lhs)} {instr.op} {format_value(instr.rhs)}"
	if isinstance(instr, I.Call):
		return f"  {dest} = call {format_value(instr.callee)}({format_value(instr.arg)})"
	if isinstance(instr, I.Phi):
		return (
			f"  {dest} = phi [{format_value(instr.then_value)}, L{instr.then_label}], "
			f"[{format_value(instr.else_value)}, L{instr.else_label}]"
		)
	if isinstance(instr, I.Struct):
		values = ", ".join(format_value(v) for v in instr.values)
		return f"  {dest} = struct {{{values}}}"
	return f"  {dest} = <invalid instruction>"


def format_term(term: I.ITerminator) -> str:
	if isinstance(term, I.Ret):
		return f"  ret {format_value(term.value)}"
	if isinstance(term, I.CondBr):
		return f"  condbr {format_value(term.cond)}, L{term.then_label}, L{term.else_label}"
	if isinstance(term, I.Br):
		return f"  br L{term.label}"
	return "  <invalid terminator>"


def format_function(func: I.Function) -> str:
	param = "" if func.param == "" else f"{format_name(func.param)}: {func.param_type.value}"
	lines: List[str] = [f"fn {func.name}({param}) -> {func.ret_type.value} {{"]
	for block in func.blocks:
		lines.append(f"L{block.label}:")
		for instr in block.instructions:
			lines.append(format_instr(instr))
		lines.append(format_term(block.terminator))
	lines.append("}")
	return "\n".join(lines)


def format_module(module: I.Module) -> str:
	header = f"module {module.name}"
	return "\n\n".join([header] + [format_function(f) for f in module.functions]) + "\n"


__all__ = ["format_value", "format_instr", "format_term", "format_function", "format_module"]
