"""
traitxml.core: shared span/diagnostic/error types used by every stage.

Modules:
  - span: best-effort source locations
  - diagnostics: Diagnostic record handed to drivers
  - errors: TDL error taxonomy raised by the lexer and parser
"""

__all__ = [
	"span",
	"diagnostics",
	"errors",
]
