# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage 1: name resolution.

Pipeline placement:
  stage0 (expression tree) → stage1 (this file) → stage2 (IR codegen)

Stamps every binder and reference with a disambiguator so shadowed bindings
of the same name can be told apart:
  - a binder (`EName.binder`, `EFunction.param`) takes the name's current
    counter (0 if unseen) and advances the counter in the live scope, so the
    advance is visible to later siblings;
  - a reference takes the id of the most recent visible binder of its name;
  - every sub-expression evaluated under a binding runs on a snapshot of the
    scope, restored afterwards, so bindings made inside it are rolled back;
  - an `EBody` accumulates bindings across its items and restores the scope
    once the whole body is done.

Codegen does not read these ids; it looks names up by string and gets its
shadowing behavior from its own scope save/restore.
"""

from __future__ import annotations

from typing import Dict

from lamc.core.errors import UnresolvedReference
from lamc.stage0 import expr_nodes as E


class NameResolver:
	"""
	Resolve identifiers using per-node visitors.

	Entry point: `resolve(expr)`. `scope` maps a name to the next id to hand
	out for it; it is mutated in place and snapshotted around sub-scopes.
	"""

	def __init__(self) -> None:
		self.scope: Dict[str, int] = {}

	def resolve(self, expr: E.Expr) -> E.Expr:
		method = getattr(self, f"_visit_{type(expr).__name__}", None)
		if method is None:
			raise NotImplementedError(f"No name resolution for expr {type(expr).__name__}")
		return method(expr)

	def _resolve_scoped(self, expr: E.Expr) -> E.Expr:
		"""Resolve `expr` on a snapshot of the scope; its bindings do not survive."""
		saved = dict(self.scope)
		result = self.resolve(expr)
		self.scope = saved
		return result

	def _bind(self, ident: E.Identifier) -> E.Identifier:
		next_id = self.scope.get(ident.name, 0)
		self.scope[ident.name] = next_id + 1
		return E.Identifier(name=ident.name, id=next_id)

	def _visit_EBody(self, expr: E.EBody) -> E.Expr:
		saved = dict(self.scope)
		items = [self.resolve(item) for item in expr.items]
		self.scope = saved
		return E.EBody(items=items)

	def _visit_EName(self, expr: E.EName) -> E.Expr:
		binder = self._bind(expr.binder)
		body = self._resolve_scoped(expr.body)
		return E.EName(binder=binder, body=body)

	def _visit_EFunction(self, expr: E.EFunction) -> E.Expr:
		param = self._bind(expr.param)
		body = self._resolve_scoped(expr.body)
		return E.EFunction(param=param, body=body)

	def _visit_EBinaryOp(self, expr: E.EBinaryOp) -> E.Expr:
		lhs = self._resolve_scoped(expr.lhs)
		rhs = self._resolve_scoped(expr.rhs)
		return E.EBinaryOp(op=expr.op, lhs=lhs, rhs=rhs)

	def _visit_EReference(self, expr: E.EReference) -> E.Expr:
		name = expr.ident.name
		if name not in self.scope:
			raise UnresolvedReference(name)
		# The scope holds the next id to assign; the visible binder got the one before.
		return E.EReference(ident=E.Identifier(name=name, id=self.scope[name] - 1))

	def _visit_ELiteral(self, expr: E.ELiteral) -> E.Expr:
		return expr

	def _visit_ECall(self, expr: E.ECall) -> E.Expr:
		callee = self._resolve_scoped(expr.callee)
		arg = self._resolve_scoped(expr.arg)
		return E.ECall(callee=callee, arg=arg)

	def _visit_EIf(self, expr: E.EIf) -> E.Expr:
		cond = self._resolve_scoped(expr.cond)
		then_expr = self._resolve_scoped(expr.then_expr)
		else_expr = self._resolve_scoped(expr.else_expr)
		return E.EIf(cond=cond, then_expr=then_expr, else_expr=else_expr)


def resolve_names(expr: E.Expr) -> E.Expr:
	"""Return a copy of `expr` with every identifier disambiguated."""
	return NameResolver().resolve(expr)


__all__ = ["NameResolver", "resolve_names"]
