# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Driver tests: run `main()` on tree files written to tmp_path and check the
emitted module, side outputs and diagnostics.
"""

from __future__ import annotations

import json
from pathlib import Path

from lamc.driver import main
from lamc.interchange import dumps_expr, loads_expr, loads_module
from lamc.stage0 import Identifier, EBody, EName, EBinaryOp, EReference, ELiteral, EIf
from lamc.stage1 import resolve_names
from lamc.stage2 import generate_code


TREE = EBody([
	EName(Identifier("x"), ELiteral(1)),
	EName(Identifier("x"), EIf(EReference(Identifier("x")), EBinaryOp("+", EReference(Identifier("x")), ELiteral(2)), ELiteral(0))),
	EReference(Identifier("x")),
])


def _write(tmp_path: Path, text: str) -> Path:
	src = tmp_path / "tree.json"
	src.write_text(text, encoding="utf-8")
	return src


def test_compile_to_output_file(tmp_path: Path) -> None:
	src = _write(tmp_path, dumps_expr(TREE))
	out = tmp_path / "out.json"
	assert main([str(src), "-o", str(out)]) == 0
	assert loads_module(out.read_text(encoding="utf-8")) == generate_code(resolve_names(TREE))


def test_compile_to_stdout(tmp_path: Path, capsys) -> None:
	src = _write(tmp_path, dumps_expr(TREE))
	assert main([str(src), "--module-name", "demo"]) == 0
	module = loads_module(capsys.readouterr().out)
	assert module.name == "demo"
	assert module.functions[-1].name == "main"


def test_side_outputs(tmp_path: Path) -> None:
	src = _write(tmp_path, dumps_expr(TREE))
	text_path = tmp_path / "out.txt"
	resolved_path = tmp_path / "resolved.json"
	out = tmp_path / "out.json"
	rc = main([str(src), "-o", str(out), "--emit-text", str(text_path), "--emit-resolved", str(resolved_path)])
	assert rc == 0
	assert "fn main() -> i32 {" in text_path.read_text(encoding="utf-8")
	resolved = loads_expr(resolved_path.read_text(encoding="utf-8"))
	assert resolved.items[1].binder == Identifier("x", 1)
	assert resolved.items[2].ident == Identifier("x", 1)


def test_unresolved_reference_reported(tmp_path: Path, capsys) -> None:
	src = _write(tmp_path, json.dumps({"tag": "reference", "name": "z"}))
	assert main([str(src)]) == 1
	err = capsys.readouterr().err
	assert f"{src}:?:?: error: Can't find name 'z'" in err


def test_json_diagnostics(tmp_path: Path, capsys) -> None:
	src = _write(tmp_path, json.dumps({"tag": "reference", "name": "z"}))
	assert main([str(src), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	diag = payload["diagnostics"][0]
	assert diag["phase"] == "resolve"
	assert diag["code"] == "unresolved-reference"
	assert diag["file"] == str(src)
	assert diag["notes"] == ["name: z"]


def test_codegen_phase_errors(tmp_path: Path, capsys) -> None:
	src = _write(tmp_path, json.dumps({"tag": "reference", "name": "z"}))
	assert main([str(src), "--json", "--no-resolve"]) == 1
	assert json.loads(capsys.readouterr().out)["diagnostics"][0]["phase"] == "codegen"

	empty = _write(tmp_path, json.dumps({"tag": "body", "body": []}))
	assert main([str(empty), "--json"]) == 1
	diag = json.loads(capsys.readouterr().out)["diagnostics"][0]
	assert diag["phase"] == "codegen"
	assert diag["code"] == "empty-body"


def test_bad_input_reported(tmp_path: Path, capsys) -> None:
	src = _write(tmp_path, "{not json")
	assert main([str(src), "--json"]) == 1
	assert json.loads(capsys.readouterr().out)["diagnostics"][0]["phase"] == "decode"

	missing = tmp_path / "missing.json"
	assert main([str(missing)]) == 1
	assert "error:" in capsys.readouterr().err
