# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
SSA control-flow-graph IR (the output of codegen).

This file is a reference for what the IR can express. There are **no
semantics** baked in here; it is just a typed tree of values, instructions,
terminators, blocks and functions.

Names are either synthetic integers (anonymous SSA values) or strings (names
requested by the source, function names and parameters). A `Ref` value means
"the SSA value defined under that name".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Union


Name = Union[int, str]
Label = int  # block id, unique within one function


# Values

@dataclass(frozen=True)
class Const:
	"""Integer constant operand."""
	value: int


@dataclass(frozen=True)
class Ref:
	"""Reference to the value named `name`."""
	name: Name


Value = Union[Const, Ref]


class IrType(Enum):
	INT32 = "i32"
	VOID = "void"


# Instructions

class IInstr:
	"""Base class for instructions (non-terminators); each defines `name`."""
	pass


class ITerminator:
	"""Base class for terminators (end of a basic block)."""
	pass


@dataclass(frozen=True)
class Binary(IInstr):
	"""name = lhs op rhs"""
	name: Name
	op: str
	lhs: Value
	rhs: Value


@dataclass(frozen=True)
class Call(IInstr):
	"""name = callee(arg)"""
	name: Name
	callee: Value
	arg: Value


@dataclass(frozen=True)
class Phi(IInstr):
	"""name = then_value if control came from then_label, else else_value."""
	name: Name
	then_value: Value
	then_label: Label
	else_value: Value
	else_label: Label


@dataclass(frozen=True)
class Struct(IInstr):
	"""name = {values...}; part of the format, never emitted by codegen."""
	name: Name
	values: List[Value]


# Terminators

@dataclass(frozen=True)
class Ret(ITerminator):
	value: Value


@dataclass(frozen=True)
class CondBr(ITerminator):
	cond: Value
	then_label: Label
	else_label: Label


@dataclass(frozen=True)
class Br(ITerminator):
	label: Label


# Containers

@dataclass(frozen=True)
class Block:
	"""
	Basic block: a list of instructions followed by a single terminator.

	No control flow leaves this block except via the terminator.
	"""
	label: Label
	instructions: List[IInstr]
	terminator: ITerminator


@dataclass(frozen=True)
class Function:
	"""
	IR function: one parameter and its blocks in append order; blocks[0] is
	the entry block.
	"""
	name: Name
	ret_type: IrType
	param: Name
	param_type: IrType
	blocks: List[Block]

	@property
	def entry(self) -> Block:
		return self.blocks[0]


@dataclass(frozen=True)
class Module:
	name: str
	functions: List[Function]


__all__ = [
	"Name", "Label", "Value",
	"Const", "Ref", "IrType",
	"IInstr", "ITerminator",
	"Binary", "Call", "Phi", "Struct",
	"Ret", "CondBr", "Br",
	"Block", "Function", "Module",
]
