# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lamc driver: read an expression tree, resolve names, generate IR, write it.

  JSON tree -> decode -> resolve_names (stage1) -> generate_code (stage2)
    -> validate_module -> JSON module (stdout or -o)

Failures are reported as diagnostics: `file:?:?: error: message` on stderr,
or, with --json, a `{"exit_code": ..., "diagnostics": [...]}` object on stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from lamc.core.diagnostics import Diagnostic
from lamc.core.errors import LamcError
from lamc.interchange import dumps_expr, dumps_module, loads_expr
from lamc.ir_validate import validate_module
from lamc.stage1 import resolve_names
from lamc.stage2 import MODULE_NAME, format_module, generate_code


def _report(diags: list[Diagnostic], source: Path, as_json: bool) -> int:
	if as_json:
		print(json.dumps({"exit_code": 1, "diagnostics": [d.to_dict(file=str(source)) for d in diags]}))
	else:
		for diag in diags:
			print(f"{source}:?:?: {diag.severity}: {diag.message}", file=sys.stderr)
	return 1


def main(argv: list[str] | None = None) -> int:
	"""
	Minimal CLI around the two passes. Exit code 0 on success, 1 when any
	phase reports a diagnostic.
	"""
	parser = argparse.ArgumentParser(description="lower an expression tree (JSON) into an SSA IR module (JSON)")
	parser.add_argument("source", type=Path, help="Path to the expression tree JSON")
	parser.add_argument("-o", "--output", type=Path, help="Write the IR module JSON here instead of stdout")
	parser.add_argument(
		"--no-resolve",
		dest="resolve",
		action="store_false",
		help="Skip name resolution and generate code from the raw tree",
	)
	parser.add_argument("--module-name", default=MODULE_NAME, help=f"Name of the emitted module (default: {MODULE_NAME})")
	parser.add_argument("--emit-text", type=Path, help="Also write a plain-text dump of the IR to the given path")
	parser.add_argument("--emit-resolved", type=Path, help="Also write the name-resolved tree JSON to the given path")
	parser.add_argument(
		"--no-validate",
		dest="validate",
		action="store_false",
		help="Skip structural validation of the generated IR",
	)
	parser.add_argument("--json", action="store_true", help="Emit diagnostics as JSON")
	args = parser.parse_args(argv)

	source: Path = args.source
	try:
		tree = loads_expr(source.read_text(encoding="utf-8"))
	except (OSError, ValueError) as err:
		return _report([Diagnostic(message=str(err), code="bad-input", phase="decode")], source, args.json)

	if args.resolve:
		try:
			tree = resolve_names(tree)
		except LamcError as err:
			return _report([err.to_diagnostic("resolve")], source, args.json)
		if args.emit_resolved is not None:
			args.emit_resolved.write_text(dumps_expr(tree) + "\n", encoding="utf-8")

	try:
		module = generate_code(tree, module_name=args.module_name)
	except LamcError as err:
		return _report([err.to_diagnostic("codegen")], source, args.json)

	if args.validate:
		try:
			validate_module(module)
		except AssertionError as err:
			return _report([Diagnostic(message=str(err), code="invalid-ir", phase="validate")], source, args.json)

	if args.emit_text is not None:
		args.emit_text.write_text(format_module(module), encoding="utf-8")

	out = dumps_module(module)
	if args.output is not None:
		args.output.write_text(out + "\n", encoding="utf-8")
	else:
		print(out)
	return 0


__all__ = ["main"]
