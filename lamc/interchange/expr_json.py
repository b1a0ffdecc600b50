# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSON interchange for expression trees.

Every node is an object with a `tag` discriminator:

  {"tag": "body", "body": [...]}
  {"tag": "name", "name": {"name": "x", "id": 0}, "body": ...}
  {"tag": "function", "param": {"name": "x", "id": 0}, "body": ...}
  {"tag": "op", "op": "+", "lhs": ..., "rhs": ...}
  {"tag": "reference", "name": "x", "id": 0}
  {"tag": "literal", "value": 1}
  {"tag": "call", "caller": ..., "arg": ...}
  {"tag": "if", "cond": ..., "then": ..., "else": ...}

Identifier `id` defaults to 0 when absent.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from lamc.stage0 import expr_nodes as E


def _is_int(obj: Any) -> bool:
	return isinstance(obj, int) and not isinstance(obj, bool)


def encode_identifier(ident: E.Identifier) -> dict[str, Any]:
	return {"name": ident.name, "id": ident.id}


def encode_expr(expr: E.Expr) -> dict[str, Any]:
	"""Convert an expression tree into JSON-able dicts."""
	if isinstance(expr, E.EBody):
		return {"tag": "body", "body": [encode_expr(e) for e in expr.items]}
	if isinstance(expr, E.EName):
		return {"tag": "name", "name": encode_identifier(expr.binder), "body": encode_expr(expr.body)}
	if isinstance(expr, E.EFunction):
		return {"tag": "function", "param": encode_identifier(expr.param), "body": encode_expr(expr.body)}
	if isinstance(expr, E.EBinaryOp):
		return {"tag": "op", "op": expr.op, "lhs": encode_expr(expr.lhs), "rhs": encode_expr(expr.rhs)}
	if isinstance(expr, E.EReference):
		return {"tag": "reference", **encode_identifier(expr.ident)}
	if isinstance(expr, E.ELiteral):
		return {"tag": "literal", "value": expr.value}
	if isinstance(expr, E.ECall):
		return {"tag": "call", "caller": encode_expr(expr.callee), "arg": encode_expr(expr.arg)}
	if isinstance(expr, E.EIf):
		return {
			"tag": "if",
			"cond": encode_expr(expr.cond),
			"then": encode_expr(expr.then_expr),
			"else": encode_expr(expr.else_expr),
		}
	raise TypeError(f"cannot encode expression node {type(expr).__name__}")


def _field(obj: Mapping[str, Any], key: str, tag: str) -> Any:
	if key not in obj:
		raise ValueError(f"expression '{tag}' is missing field '{key}'")
	return obj[key]


def decode_identifier(obj: Any) -> E.Identifier:
	if not isinstance(obj, dict):
		raise ValueError(f"identifier must be an object, got {type(obj).__name__}")
	name = obj.get("name")
	if not isinstance(name, str):
		raise ValueError("identifier 'name' must be a string")
	ident_id = obj.get("id", 0)
	if not _is_int(ident_id) or ident_id < 0:
		raise ValueError(f"identifier {name!r} has invalid id {ident_id!r}")
	return E.Identifier(name=name, id=ident_id)


def decode_expr(obj: Any) -> E.Expr:
	"""Reconstruct an expression tree encoded by `encode_expr`."""
	if not isinstance(obj, dict):
		raise ValueError(f"expression must be an object, got {type(obj).__name__}")
	tag = obj.get("tag")
	if tag == "body":
		items = _field(obj, "body", tag)
		if not isinstance(items, list):
			raise ValueError("expression 'body' field 'body' must be a list")
		return E.EBody(items=[decode_expr(e) for e in items])
	if tag == "name":
		return E.EName(binder=decode_identifier(_field(obj, "name", tag)), body=decode_expr(_field(obj, "body", tag)))
	if tag == "function":
		return E.EFunction(param=decode_identifier(_field(obj, "param", tag)), body=decode_expr(_field(obj, "body", tag)))
	if tag == "op":
		op = _field(obj, "op", tag)
		if not isinstance(op, str):
			raise ValueError("expression 'op' field 'op' must be a string")
		return E.EBinaryOp(op=op, lhs=decode_expr(_field(obj, "lhs", tag)), rhs=decode_expr(_field(obj, "rhs", tag)))
	if tag == "reference":
		return E.EReference(ident=decode_identifier(obj))
	if tag == "literal":
		value = _field(obj, "value", tag)
		if not _is_int(value):
			raise ValueError(f"literal value must be an integer, got {value!r}")
		return E.ELiteral(value=value)
	if tag == "call":
		return E.ECall(callee=decode_expr(_field(obj, "caller", tag)), arg=decode_expr(_field(obj, "arg", tag)))
	if tag == "if":
		return E.EIf(
			cond=decode_expr(_field(obj, "cond", tag)),
			then_expr=decode_expr(_field(obj, "then", tag)),
			else_expr=decode_expr(_field(obj, "else", tag)),
		)
	raise ValueError(f"unknown expression tag {tag!r}")


def loads_expr(text: str) -> E.Expr:
	return decode_expr(json.loads(text))


def dumps_expr(expr: E.Expr, *, indent: int | None = 2) -> str:
	return json.dumps(encode_expr(expr), indent=indent)


__all__ = ["encode_identifier", "encode_expr", "decode_identifier", "decode_expr", "loads_expr", "dumps_expr"]
