"""
Diagnostic record produced by the lexer/parser and reported by the driver.

There is only ever one error per invocation (first error wins), but the
driver and the public API still traffic in lists so that callers can treat
"no diagnostics" uniformly as success.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown location.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self, default_file: str | None = None) -> str:
		"""Human-readable single line: `file:line:col: severity: message`."""
		span = self.span.with_file(default_file) if self.span.file is None else self.span
		return f"{span.describe()}: {self.severity}: {self.message}"

	def to_json(self, default_file: str | None = None) -> dict:
		"""Structured JSON-friendly dict (phase/message/severity/file/line/column/notes)."""
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file or default_file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
