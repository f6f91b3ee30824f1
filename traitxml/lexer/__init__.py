"""
traitxml.lexer: TDL text -> generic token stream.
"""

from .lexer import tokenize
from .tokens import Token, TokenKind, TokenSpan, render_span

__all__ = ["tokenize", "Token", "TokenKind", "TokenSpan", "render_span"]
