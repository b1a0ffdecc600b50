# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage 0 package: the expression tree.

Pipeline placement:
  stage0 (expression tree) → stage1 (name resolution) → stage2 (IR codegen)
"""

from .expr_nodes import (
	Identifier,
	Expr,
	EBody,
	EName,
	EFunction,
	EBinaryOp,
	EReference,
	ELiteral,
	ECall,
	EIf,
)

__all__ = [
	"Identifier", "Expr",
	"EBody", "EName", "EFunction", "EBinaryOp",
	"EReference", "ELiteral", "ECall", "EIf",
]
