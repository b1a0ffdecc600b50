# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .diagnostics import Diagnostic


@dataclass(eq=False)
class LamcError(Exception):
	"""
	A structured, fatal error raised by the name resolution and codegen passes.

	There is no recovery: the pass that raises it produces no output.
	"""

	reason_code: str
	message: str
	name: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {"reason_code": self.reason_code, "message": self.message, "name": self.name}

	def format_human(self) -> str:
		return f"[{self.reason_code}] {self.message}"

	def to_diagnostic(self, phase: str) -> Diagnostic:
		notes = [f"name: {self.name}"] if self.name is not None else []
		return Diagnostic(message=self.message, code=self.reason_code, phase=phase, notes=notes)


class UnresolvedReference(LamcError):
	"""A reference to a name with no visible binding."""

	def __init__(self, name: str) -> None:
		super().__init__(
			reason_code="unresolved-reference",
			message=f"Can't find name '{name}'",
			name=name,
		)


class EmptyBody(LamcError):
	"""A body expression with no elements (it would have no value)."""

	def __init__(self) -> None:
		super().__init__(reason_code="empty-body", message="Unexpected empty body")


__all__ = ["LamcError", "UnresolvedReference", "EmptyBody"]
