# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage 1 package: name resolution.

Public API:
  - resolve_names: disambiguate shadowed bindings in an expression tree
  - NameResolver: the visitor behind it
"""

from .resolve_names import NameResolver, resolve_names

__all__ = ["NameResolver", "resolve_names"]
