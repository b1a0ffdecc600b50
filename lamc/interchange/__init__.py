# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSON interchange for expression trees (input) and IR modules (output).

Encoders return JSON-able dicts; `loads_*`/`dumps_*` wrap the stdlib `json`
module. Decoders raise ValueError on malformed input.
"""

from .expr_json import encode_expr, decode_expr, loads_expr, dumps_expr
from .ir_json import encode_module, decode_module, loads_module, dumps_module

__all__ = [
	"encode_expr", "decode_expr", "loads_expr", "dumps_expr",
	"encode_module", "decode_module", "loads_module", "dumps_module",
]
