# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared error and diagnostic types used by every stage."""

from .diagnostics import Diagnostic
from .errors import LamcError, UnresolvedReference, EmptyBody

__all__ = ["Diagnostic", "LamcError", "UnresolvedReference", "EmptyBody"]
