# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Interchange tests: exact JSON shapes for trees and modules, untagged
name/value decoding, and module round trips.
"""

from __future__ import annotations

import json

import pytest

from lamc.interchange import decode_expr, decode_module, dumps_module, encode_expr, encode_module, loads_expr, loads_module
from lamc.interchange.ir_json import decode_name, decode_value, encode_instr, encode_term
from lamc.stage0 import Identifier, EBody, EName, EFunction, EBinaryOp, EReference, ELiteral, ECall, EIf
from lamc.stage1 import resolve_names
from lamc.stage2 import Binary, Call, CondBr, Const, IrType, Phi, Ref, Struct, generate_code


SAMPLE_TREE = """
{
  "tag": "body",
  "body": [
    {
      "tag": "name",
      "name": {"name": "id"},
      "body": {"tag": "function", "param": {"name": "x"}, "body": {"tag": "reference", "name": "x"}}
    },
    {
      "tag": "name",
      "name": {"name": "y"},
      "body": {
        "tag": "if",
        "cond": {"tag": "op", "op": "<", "lhs": {"tag": "literal", "value": 1}, "rhs": {"tag": "literal", "value": 2}},
        "then": {"tag": "call", "caller": {"tag": "reference", "name": "id"}, "arg": {"tag": "literal", "value": 3}},
        "else": {"tag": "literal", "value": 4}
      }
    },
    {"tag": "reference", "name": "y", "id": 0}
  ]
}
"""


def test_decode_sample_tree():
	tree = loads_expr(SAMPLE_TREE)
	assert tree == EBody([
		EName(Identifier("id"), EFunction(Identifier("x"), EReference(Identifier("x")))),
		EName(
			Identifier("y"),
			EIf(
				cond=EBinaryOp("<", ELiteral(1), ELiteral(2)),
				then_expr=ECall(callee=EReference(Identifier("id")), arg=ELiteral(3)),
				else_expr=ELiteral(4),
			),
		),
		EReference(Identifier("y")),
	])


def test_expr_encoding_shape():
	tree = EIf(EReference(Identifier("c", 2)), ECall(ELiteral(1), ELiteral(2)), EBody([ELiteral(3)]))
	assert encode_expr(tree) == {
		"tag": "if",
		"cond": {"tag": "reference", "name": "c", "id": 2},
		"then": {"tag": "call", "caller": {"tag": "literal", "value": 1}, "arg": {"tag": "literal", "value": 2}},
		"else": {"tag": "body", "body": [{"tag": "literal", "value": 3}]},
	}
	assert encode_expr(EName(Identifier("x"), ELiteral(1))) == {
		"tag": "name",
		"name": {"name": "x", "id": 0},
		"body": {"tag": "literal", "value": 1},
	}


def test_resolved_tree_round_trips():
	tree = resolve_names(loads_expr(SAMPLE_TREE))
	assert decode_expr(json.loads(json.dumps(encode_expr(tree)))) == tree


@pytest.mark.parametrize(
	"payload",
	[
		{"tag": "nope"},
		{"tag": "literal"},
		{"tag": "literal", "value": True},
		{"tag": "op", "op": "+", "lhs": {"tag": "literal", "value": 1}},
		{"tag": "reference", "name": "x", "id": -1},
		[1, 2],
	],
)
def test_decode_expr_rejects_malformed(payload):
	with pytest.raises(ValueError):
		decode_expr(payload)


def test_instruction_encoding_is_flat():
	assert encode_instr(Binary(name="r", op="+", lhs=Const(1), rhs=Ref(0))) == {
		"name": "r",
		"tag": "binary",
		"op": "+",
		"lhs": 1,
		"rhs": {"name": 0},
	}
	assert list(encode_instr(Call(name=3, callee=Ref("f"), arg=Const(2)))) == ["name", "tag", "caller", "arg"]
	assert encode_instr(Phi(name=0, then_value=Const(2), then_label=1, else_value=Ref("x"), else_label=2)) == {
		"name": 0,
		"tag": "phi",
		"then": 2,
		"then_label": 1,
		"else": {"name": "x"},
		"else_label": 2,
	}
	assert encode_instr(Struct(name=1, values=[Const(1), Ref(0)])) == {"name": 1, "tag": "struct", "values": [1, {"name": 0}]}


def test_terminator_encoding():
	assert encode_term(CondBr(cond=Ref(0), then_label=1, else_label=2)) == {
		"tag": "cond_br",
		"cond": {"name": 0},
		"then": 1,
		"else": 2,
	}


def test_module_encoding_shape():
	module = generate_code(EIf(ELiteral(1), ELiteral(2), ELiteral(3)))
	assert encode_module(module) == {
		"name": "module",
		"functions": [
			{
				"name": "main",
				"ret_type": "i32",
				"param": "",
				"param_type": "void",
				"blocks": [
					{"label": 0, "instructions": [], "terminator": {"tag": "cond_br", "cond": 1, "then": 1, "else": 2}},
					{"label": 1, "instructions": [], "terminator": {"tag": "br", "label": 3}},
					{"label": 2, "instructions": [], "terminator": {"tag": "br", "label": 3}},
					{
						"label": 3,
						"instructions": [
							{"name": 0, "tag": "phi", "then": 2, "then_label": 1, "else": 3, "else_label": 2}
						],
						"terminator": {"tag": "ret", "value": {"name": 0}},
					},
				],
			}
		],
	}


def test_untagged_names_and_values():
	assert decode_name(4) == 4
	assert decode_name("x") == "x"
	assert decode_value(5) == Const(5)
	assert decode_value({"name": 3}) == Ref(3)
	assert decode_value({"name": "x"}) == Ref("x")
	for bad in (True, "5", {"value": 1}, None):
		with pytest.raises(ValueError):
			decode_value(bad)


def test_generated_module_round_trips():
	module = generate_code(resolve_names(loads_expr(SAMPLE_TREE)))
	assert [f.name for f in module.functions] == ["id", "main"]
	assert loads_module(dumps_module(module)) == module
	assert decode_module(encode_module(module)) == module


def test_struct_and_types_round_trip():
	payload = {
		"name": "m",
		"functions": [
			{
				"name": 7,
				"ret_type": "i32",
				"param": "p",
				"param_type": "i32",
				"blocks": [
					{
						"label": 0,
						"instructions": [{"name": 0, "tag": "struct", "values": [1, {"name": "p"}]}],
						"terminator": {"tag": "ret", "value": {"name": 0}},
					}
				],
			}
		],
	}
	module = decode_module(payload)
	func = module.functions[0]
	assert func.name == 7
	assert func.param_type is IrType.INT32
	assert func.entry.instructions == [Struct(name=0, values=[Const(1), Ref("p")])]
	assert encode_module(module) == payload


@pytest.mark.parametrize(
	"payload",
	[
		{"name": "m"},
		{"name": "m", "functions": [{"name": "f", "ret_type": "i64", "param": "", "param_type": "void", "blocks": []}]},
		{"name": 1, "functions": []},
	],
)
def test_decode_module_rejects_malformed(payload):
	with pytest.raises(ValueError):
		decode_module(payload)
