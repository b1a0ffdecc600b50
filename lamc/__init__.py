# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lamc: lowers a small let/function/if expression language into an SSA
control-flow-graph IR.

Pipeline placement:
  interchange (JSON) → stage0 (expression tree) → stage1 (name resolution)
    → stage2 (IR codegen) → ir_validate → interchange (JSON)
"""

from lamc.stage1 import resolve_names
from lamc.stage2 import generate_code

__all__ = ["resolve_names", "generate_code"]
