# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage 2 package: expression tree → SSA IR.

Public API:
  - generate_code: lower a tree into an IR Module
  - FunctionBuilder / ExprToIR: per-function builder and lowering visitors
  - IR node classes (re-exported from ir_nodes)
  - format_module: text dump of a Module
"""

from .ir_nodes import (
	Name,
	Label,
	Value,
	Const,
	Ref,
	IrType,
	IInstr,
	ITerminator,
	Binary,
	Call,
	Phi,
	Struct,
	Ret,
	CondBr,
	Br,
	Block,
	Function,
	Module,
)
from .codegen import FunctionBuilder, ExprToIR, lower_function, generate_code, MODULE_NAME, ENTRY_FUNCTION
from .ir_printer import format_module

__all__ = [
	"Name", "Label", "Value",
	"Const", "Ref", "IrType",
	"IInstr", "ITerminator",
	"Binary", "Call", "Phi", "Struct",
	"Ret", "CondBr", "Br",
	"Block", "Function", "Module",
	"FunctionBuilder", "ExprToIR", "lower_function", "generate_code",
	"MODULE_NAME", "ENTRY_FUNCTION",
	"format_module",
]
