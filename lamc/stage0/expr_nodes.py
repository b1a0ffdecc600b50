# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Expression tree (the input of both passes).

Pure data: no behavior lives here. Trees are built once and never mutated;
passes build new trees (or IR) from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Identifier:
	"""
	A binding or reference name. Two identifiers denote the same binding iff
	both fields match. Raw trees carry `id=0` until name resolution runs.
	"""

	name: str
	id: int = 0


class Expr:
	"""Base class for all expression nodes."""
	pass


@dataclass(frozen=True)
class EBody(Expr):
	"""Sequence of expressions; the value is the last one's."""
	items: List[Expr]


@dataclass(frozen=True)
class EName(Expr):
	"""Bind `binder` to the value of `body` for the rest of the enclosing body."""
	binder: Identifier
	body: Expr


@dataclass(frozen=True)
class EFunction(Expr):
	"""Single-parameter function literal."""
	param: Identifier
	body: Expr


@dataclass(frozen=True)
class EBinaryOp(Expr):
	op: str
	lhs: Expr
	rhs: Expr


@dataclass(frozen=True)
class EReference(Expr):
	ident: Identifier


@dataclass(frozen=True)
class ELiteral(Expr):
	value: int


@dataclass(frozen=True)
class ECall(Expr):
	callee: Expr
	arg: Expr


@dataclass(frozen=True)
class EIf(Expr):
	cond: Expr
	then_expr: Expr
	else_expr: Expr


__all__ = [
	"Identifier", "Expr",
	"EBody", "EName", "EFunction", "EBinaryOp",
	"EReference", "ELiteral", "ECall", "EIf",
]
