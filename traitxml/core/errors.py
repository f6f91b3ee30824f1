# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for TDL compilation.

Every failure is fatal to the whole invocation, so these are plain exceptions
rather than accumulated diagnostics. Like the parser errors of a conventional
front-end they subclass `ValueError` and carry a best-effort location so the
driver can turn them into a `Diagnostic` instead of crashing.

Kinds:
- structural: unknown/unmatched tag, unexpected token, premature end of input
- duplication: a single-occurrence field seen twice
- omission: a required field absent when its section closes
- malformed-leaf: an identifier/lifetime/visibility/literal leaf that is
  empty or does not reduce to the expected atomic token
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, Optional

from .diagnostics import Diagnostic
from .span import Span


class TdlError(ValueError):
	"""Base class for every TDL lexing/parsing failure."""

	kind: ClassVar[str] = "error"
	code: ClassVar[str] = "TDL-ERROR"

	def __init__(
		self,
		message: str,
		*,
		rule: str,
		token: Any = None,
		span: Optional[Span] = None,
		callers: Iterable[str] = (),
	) -> None:
		super().__init__(message)
		self.message = message
		self.rule = rule
		self.token = token
		if span is None:
			span = getattr(token, "span", None) or Span()
		self.span = span
		# Innermost caller first; the last entry is the top-level production.
		self.callers = tuple(callers)

	@property
	def caller(self) -> Optional[str]:
		"""The production that invoked the failing one (None at top level)."""
		return self.callers[0] if self.callers else None

	@property
	def origin(self) -> Optional[str]:
		"""The outermost production on the caller chain."""
		return self.callers[-1] if self.callers else None

	def to_diagnostic(self, file: Optional[str] = None) -> Diagnostic:
		notes = [f"while parsing `<{name}>`" for name in self.callers]
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase="parser",
			severity="error",
			span=self.span.with_file(file),
			notes=notes,
		)


class StructuralError(TdlError):
	kind = "structural"
	code = "TDL-STRUCTURAL"


class RedefinitionError(TdlError):
	"""A single-occurrence field was given a second time."""

	kind = "duplication"
	code = "TDL-DUPLICATION"

	def __init__(self, message: str, *, prior: Any = None, **kwargs: Any) -> None:
		super().__init__(message, **kwargs)
		self.prior = prior


class MissingFieldError(TdlError):
	"""A section closed while required fields were still absent."""

	kind = "omission"
	code = "TDL-OMISSION"

	def __init__(self, message: str, *, missing: Iterable[str] = (), **kwargs: Any) -> None:
		super().__init__(message, **kwargs)
		self.missing = tuple(missing)


class MalformedLeafError(TdlError):
	kind = "malformed-leaf"
	code = "TDL-MALFORMED-LEAF"


__all__ = [
	"TdlError",
	"StructuralError",
	"RedefinitionError",
	"MissingFieldError",
	"MalformedLeafError",
]
