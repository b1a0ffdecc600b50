# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSON interchange for IR modules.

Shape:
  - Name: bare number (synthetic) or bare string.
  - Label: bare number.
  - Value: bare number (constant) or {"name": Name} (reference).
  - Type: "i32" | "void".
  - Instruction: {"name": Name, "tag": "binary"|"call"|"phi"|"struct", ...fields}
      binary: op, lhs, rhs; call: caller, arg;
      phi: then, then_label, else, else_label; struct: values
  - Terminator: {"tag": "ret"|"cond_br"|"br", ...fields}
      ret: value; cond_br: cond, then, else; br: label
  - Block: {label, instructions, terminator}
  - Function: {name, ret_type, param, param_type, blocks}
  - Module: {name, functions}

Names and values are untagged: decoding tries the number form first.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from lamc.stage2 import ir_nodes as I


def _is_int(obj: Any) -> bool:
	return isinstance(obj, int) and not isinstance(obj, bool)


# --- Encoding ---

def encode_value(value: I.Value) -> Any:
	if isinstance(value, I.Const):
		return value.value
	if isinstance(value, I.Ref):
		return {"name": value.name}
	raise TypeError(f"cannot encode IR value {type(value).__name__}")


def encode_instr(instr: I.IInstr) -> dict[str, Any]:
	if isinstance(instr, I.Binary):
		return {
			"name": instr.name,
			"tag": "binary",
			"op": instr.op,
			"lhs": encode_value(instr.lhs),
			"rhs": encode_value(instr.rhs),
		}
	if isinstance(instr, I.Call):
		return {"name": instr.name, "tag": "call", "caller": encode_value(instr.callee), "arg": encode_value(instr.arg)}
	if isinstance(instr, I.Phi):
		return {
			"name": instr.name,
			"tag": "phi",
			"then": encode_value(instr.then_value),
			"then_label": instr.then_label,
			"else": encode_value(instr.else_value),
			"else_label": instr.else_label,
		}
	if isinstance(instr, I.Struct):
		return {"name": instr.name, "tag": "struct", "values": [encode_value(v) for v in instr.values]}
	raise TypeError(f"cannot encode IR instruction {type(instr).__name__}")


def encode_term(term: I.ITerminator) -> dict[str, Any]:
	if isinstance(term, I.Ret):
		return {"tag": "ret", "value": encode_value(term.value)}
	if isinstance(term, I.CondBr):
		return {"tag": "cond_br", "cond": encode_value(term.cond), "then": term.then_label, "else": term.else_label}
	if isinstance(term, I.Br):
		return {"tag": "br", "label": term.label}
	raise TypeError(f"cannot encode IR terminator {type(term).__name__}")


def encode_block(block: I.Block) -> dict[str, Any]:
	return {
		"label": block.label,
		"instructions": [encode_instr(i) for i in block.instructions],
		"terminator": encode_term(block.terminator),
	}


def encode_function(func: I.Function) -> dict[str, Any]:
	return {
		"name": func.name,
		"ret_type": func.ret_type.value,
		"param": func.param,
		"param_type": func.param_type.value,
		"blocks": [encode_block(b) for b in func.blocks],
	}


def encode_module(module: I.Module) -> dict[str, Any]:
	"""Convert an IR module into JSON-able dicts."""
	return {"name": module.name, "functions": [encode_function(f) for f in module.functions]}


# --- Decoding ---

def _field(obj: Mapping[str, Any], key: str, what: str) -> Any:
	if key not in obj:
		raise ValueError(f"{what} is missing field '{key}'")
	return obj[key]


def decode_name(obj: Any) -> I.Name:
	if _is_int(obj) or isinstance(obj, str):
		return obj
	raise ValueError(f"IR name must be a number or a string, got {obj!r}")


def decode_label(obj: Any) -> I.Label:
	if not _is_int(obj):
		raise ValueError(f"IR label must be a number, got {obj!r}")
	return obj


def decode_value(obj: Any) -> I.Value:
	if _is_int(obj):
		return I.Const(value=obj)
	if isinstance(obj, dict) and "name" in obj:
		return I.Ref(name=decode_name(obj["name"]))
	raise ValueError(f"IR value must be a number or {{\"name\": ...}}, got {obj!r}")


def decode_type(obj: Any) -> I.IrType:
	try:
		return I.IrType(obj)
	except ValueError:
		raise ValueError(f"unknown IR type {obj!r}") from None


def decode_instr(obj: Any) -> I.IInstr:
	if not isinstance(obj, dict):
		raise ValueError(f"IR instruction must be an object, got {type(obj).__name__}")
	tag = obj.get("tag")
	what = f"instruction '{tag}'"
	name = decode_name(_field(obj, "name", what))
	if tag == "binary":
		op = _field(obj, "op", what)
		if not isinstance(op, str):
			raise ValueError("binary instruction 'op' must be a string")
		return I.Binary(
			name=name,
			op=op,
			lhs=decode_value(_field(obj, "lhs", what)),
			rhs=decode_value(_field(obj, "rhs", what)),
		)
	if tag == "call":
		return I.Call(
			name=name,
			callee=decode_value(_field(obj, "caller", what)),
			arg=decode_value(_field(obj, "arg", what)),
		)
	if tag == "phi":
		return I.Phi(
			name=name,
			then_value=decode_value(_field(obj, "then", what)),
			then_label=decode_label(_field(obj, "then_label", what)),
			else_value=decode_value(_field(obj, "else", what)),
			else_label=decode_label(_field(obj, "else_label", what)),
		)
	if tag == "struct":
		values = _field(obj, "values", what)
		if not isinstance(values, list):
			raise ValueError("struct instruction 'values' must be a list")
		return I.Struct(name=name, values=[decode_value(v) for v in values])
	raise ValueError(f"unknown IR instruction tag {tag!r}")


def decode_term(obj: Any) -> I.ITerminator:
	if not isinstance(obj, dict):
		raise ValueError(f"IR terminator must be an object, got {type(obj).__name__}")
	tag = obj.get("tag")
	what = f"terminator '{tag}'"
	if tag == "ret":
		return I.Ret(value=decode_value(_field(obj, "value", what)))
	if tag == "cond_br":
		return I.CondBr(
			cond=decode_value(_field(obj, "cond", what)),
			then_label=decode_label(_field(obj, "then", what)),
			else_label=decode_label(_field(obj, "else", what)),
		)
	if tag == "br":
		return I.Br(label=decode_label(_field(obj, "label", what)))
	raise ValueError(f"unknown IR terminator tag {tag!r}")


def decode_block(obj: Any) -> I.Block:
	if not isinstance(obj, dict):
		raise ValueError(f"IR block must be an object, got {type(obj).__name__}")
	instrs = _field(obj, "instructions", "block")
	if not isinstance(instrs, list):
		raise ValueError("block 'instructions' must be a list")
	return I.Block(
		label=decode_label(_field(obj, "label", "block")),
		instructions=[decode_instr(i) for i in instrs],
		terminator=decode_term(_field(obj, "terminator", "block")),
	)


def decode_function(obj: Any) -> I.Function:
	if not isinstance(obj, dict):
		raise ValueError(f"IR function must be an object, got {type(obj).__name__}")
	blocks = _field(obj, "blocks", "function")
	if not isinstance(blocks, list) or not blocks:
		raise ValueError("function 'blocks' must be a non-empty list")
	return I.Function(
		name=decode_name(_field(obj, "name", "function")),
		ret_type=decode_type(_field(obj, "ret_type", "function")),
		param=decode_name(_field(obj, "param", "function")),
		param_type=decode_type(_field(obj, "param_type", "function")),
		blocks=[decode_block(b) for b in blocks],
	)


def decode_module(obj: Any) -> I.Module:
	"""Reconstruct an IR module encoded by `encode_module`."""
	if not isinstance(obj, dict):
		raise ValueError(f"IR module must be an object, got {type(obj).__name__}")
	name = _field(obj, "name", "module")
	if not isinstance(name, str):
		raise ValueError("module 'name' must be a string")
	functions = _field(obj, "functions", "module")
	if not isinstance(functions, list):
		raise ValueError("module 'functions' must be a list")
	return I.Module(name=name, functions=[decode_function(f) for f in functions])


def loads_module(text: str) -> I.Module:
	return decode_module(json.loads(text))


def dumps_module(module: I.Module, *, indent: int | None = 2) -> str:
	return json.dumps(encode_module(module), indent=indent)


__all__ = [
	"encode_value", "encode_instr", "encode_term", "encode_block", "encode_function", "encode_module",
	"decode_name", "decode_label", "decode_value", "decode_type",
	"decode_instr", "decode_term", "decode_block", "decode_function", "decode_module",
	"loads_module", "dumps_module",
]
