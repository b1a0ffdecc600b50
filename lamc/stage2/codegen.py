# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Expression tree → SSA IR lowering.

Pipeline placement:
  stage0 (expression tree) → stage1 (name resolution) → stage2 (this file)

Every function literal, plus the implicit top-level `main` wrapped around the
whole tree, is lowered by its own FunctionBuilder. Values are SSA from the
start: a binding never copies a value, it maps the source name to the IR value
in the builder's scope. An `if` splits the current block into then/else arms
and joins them in a merge block whose phi names the blocks each arm actually
ended in.

Naming: `EName` leaves a requested name on the builder; the next instruction
emitted under it (binary op, call, phi) or function literal takes that name
instead of a fresh synthetic one. Literals and references emit nothing, so
they leave the request for `EName` to drop.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from lamc.core.errors import EmptyBody, UnresolvedReference
from lamc.stage0 import expr_nodes as E
from . import ir_nodes as I

MODULE_NAME = "module"
ENTRY_FUNCTION = "main"


class FunctionBuilder:
	"""
	Helper to construct one IR function incrementally.

	Manages:
	- the scope (source name -> IR value) and the pending requested name
	- synthetic name and label counters
	- the open block (label + instructions) and the closed blocks
	- functions produced by nested function literals

	The entry block has label 0; fresh labels start at 1.
	"""

	def __init__(self, name: I.Name, param: str):
		self.name = name
		self.param = param
		self.scope: Dict[str, I.Value] = {}
		self.requested_name: Optional[str] = None
		self.functions: List[I.Function] = []
		self.label: I.Label = 0
		self.blocks: List[I.Block] = []
		self.instructions: List[I.IInstr] = []
		self._next_label: I.Label = 1
		self._next_name = 0

	def take_requested_name(self) -> Optional[str]:
		"""Consume the pending requested name, if any."""
		requested = self.requested_name
		self.requested_name = None
		return requested

	def new_name(self, requested: Optional[str] = None) -> I.Name:
		"""Return `requested` if given, else a fresh synthetic integer name."""
		if requested is not None:
			return requested
		name = self._next_name
		self._next_name += 1
		return name

	def new_label(self) -> I.Label:
		label = self._next_label
		self._next_label += 1
		return label

	def emit(self, instr: I.IInstr) -> I.Value:
		"""Append an instruction to the open block and return a reference to it."""
		self.instructions.append(instr)
		return I.Ref(name=instr.name)

	def terminate(self, terminator: I.ITerminator, next_label: I.Label) -> None:
		"""Close the open block with `terminator` and open a new one at `next_label`."""
		self.blocks.append(I.Block(label=self.label, instructions=self.instructions, terminator=terminator))
		self.label = next_label
		self.instructions = []

	def finish(self, value: I.Value) -> List[I.Function]:
		"""
		Close the last block with `Ret(value)` and return the nested functions
		followed by this one.
		"""
		last = I.Block(label=self.label, instructions=self.instructions, terminator=I.Ret(value=value))
		func = I.Function(
			name=self.name,
			ret_type=I.IrType.INT32,
			param=self.param,
			param_type=I.IrType.VOID if self.param == "" else I.IrType.INT32,
			blocks=self.blocks + [last],
		)
		return self.functions + [func]


class ExprToIR:
	"""
	Lower an expression tree into the builder's function using per-node
	visitors.

	Entry point: `lower_expr`, which returns the IR value of the expression.
	Helper visitors are prefixed with an underscore.
	"""

	def __init__(self, builder: FunctionBuilder):
		self.b = builder

	def lower_expr(self, expr: E.Expr) -> I.Value:
		method = getattr(self, f"_visit_{type(expr).__name__}", None)
		if method is None:
			raise NotImplementedError(f"No IR lowering for expr {type(expr).__name__}")
		return method(expr)

	def _lower_scoped(self, expr: E.Expr) -> I.Value:
		"""Lower `expr`, then drop whatever bindings it made."""
		saved = dict(self.b.scope)
		value = self.lower_expr(expr)
		self.b.scope = saved
		return value

	def _visit_EBody(self, expr: E.EBody) -> I.Value:
		if not expr.items:
			raise EmptyBody()
		saved = dict(self.b.scope)
		# Only the last item's value is the body's value, so only it may take
		# the requested name.
		requested = self.b.take_requested_name()
		for item in expr.items[:-1]:
			self.lower_expr(item)
		self.b.requested_name = requested
		value = self.lower_expr(expr.items[-1])
		self.b.scope = saved
		return value

	def _visit_EName(self, expr: E.EName) -> I.Value:
		self.b.take_requested_name()
		self.b.requested_name = expr.binder.name
		value = self._lower_scoped(expr.body)
		self.b.requested_name = None
		self.b.scope[expr.binder.name] = value
		return value

	def _visit_EFunction(self, expr: E.EFunction) -> I.Value:
		name = self.b.new_name(self.b.take_requested_name())
		self.b.functions.extend(lower_function(name, expr.param.name, expr.body))
		return I.Ref(name=name)

	def _visit_EBinaryOp(self, expr: E.EBinaryOp) -> I.Value:
		requested = self.b.take_requested_name()
		lhs = self._lower_scoped(expr.lhs)
		rhs = self._lower_scoped(expr.rhs)
		return self.b.emit(I.Binary(name=self.b.new_name(requested), op=expr.op, lhs=lhs, rhs=rhs))

	def _visit_EReference(self, expr: E.EReference) -> I.Value:
		# Lookup is by name only; the resolved id is not consulted.
		value = self.b.scope.get(expr.ident.name)
		if value is None:
			raise UnresolvedReference(expr.ident.name)
		return value

	def _visit_ELiteral(self, expr: E.ELiteral) -> I.Value:
		return I.Const(value=expr.value)

	def _visit_ECall(self, expr: E.ECall) -> I.Value:
		requested = self.b.take_requested_name()
		# The argument is lowered before the callee.
		arg = self._lower_scoped(expr.arg)
		callee = self._lower_scoped(expr.callee)
		return self.b.emit(I.Call(name=self.b.new_name(requested), callee=callee, arg=arg))

	def _visit_EIf(self, expr: E.EIf) -> I.Value:
		requested = self.b.take_requested_name()

		# 1) Condition in the current block, then branch to fresh then/else blocks.
		cond = self._lower_scoped(expr.cond)
		then_label = self.b.new_label()
		else_label = self.b.new_label()
		self.b.terminate(I.CondBr(cond=cond, then_label=then_label, else_label=else_label), then_label)

		# 2) Then arm. It may have split into more blocks; the phi edge comes
		# from whichever block is open when it finishes.
		then_value = self._lower_scoped(expr.then_expr)
		then_pred = self.b.label
		merge_label = self.b.new_label()
		self.b.terminate(I.Br(label=merge_label), else_label)

		# 3) Else arm, same rule.
		else_value = self._lower_scoped(expr.else_expr)
		else_pred = self.b.label
		self.b.terminate(I.Br(label=merge_label), merge_label)

		# 4) Merge.
		return self.b.emit(
			I.Phi(
				name=self.b.new_name(requested),
				then_value=then_value,
				then_label=then_pred,
				else_value=else_value,
				else_label=else_pred,
			)
		)


def lower_function(name: I.Name, param: str, body: E.Expr) -> List[I.Function]:
	"""
	Lower one function with a fresh builder. Only the parameter is in scope.

	Returns the functions nested inside `body` followed by the function itself.
	"""
	builder = FunctionBuilder(name=name, param=param)
	builder.scope[param] = I.Ref(name=param)
	value = ExprToIR(builder).lower_expr(body)
	return builder.finish(value)


def generate_code(expr: E.Expr, *, module_name: str = MODULE_NAME) -> I.Module:
	"""Lower a whole tree as the body of the parameterless `main` function."""
	return I.Module(name=module_name, functions=lower_function(ENTRY_FUNCTION, "", expr))


__all__ = ["FunctionBuilder", "ExprToIR", "lower_function", "generate_code", "MODULE_NAME", "ENTRY_FUNCTION"]
