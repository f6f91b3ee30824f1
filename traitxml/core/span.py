# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation used by tokens and diagnostics.

Spans are best-effort: tokens produced by the lark lexer carry full
line/column/end information, while tokens built by hand (tests, other
producers) may leave everything unset.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (file/line/column plus the raw lexer object)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a lark token / exception or an existing Span.

		Unknown objects contribute whatever `line`/`column`/`end_*` attributes
		they expose; the object itself is kept in `raw`.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc if file is None or loc.file else replace(loc, file=file)
		return cls(
			file=file,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	@property
	def known(self) -> bool:
		return self.line is not None

	def with_file(self, file: Optional[str]) -> "Span":
		if file is None or self.file == file:
			return self
		return replace(self, file=file)

	def describe(self) -> str:
		"""`file:line:col` with `?` for whatever is unknown."""
		line = "?" if self.line is None else str(self.line)
		col = "?" if self.column is None else str(self.column)
		return f"{self.file or '<input>'}:{line}:{col}"


__all__ = ["Span"]
