"""
Common diagnostic structure for the driver.

The passes themselves raise `LamcError`; the driver turns those (and codec or
validation failures) into Diagnostics for human or JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic: decode, resolve, codegen, validate.
	phase: str | None = None
	severity: str = "error"
	notes: list[str] = field(default_factory=list)

	def to_dict(self, file: str | None = None) -> dict:
		# Trees carry no source positions, so line/column are always unknown.
		return {
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"code": self.code,
			"file": file,
			"line": None,
			"column": None,
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
