# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Continuation-driven parser engine.

Every grammar production is a small state machine. Instead of returning to
its caller, a production finishing its section hands its fragment to the
continuation it was given; a production that needs a sub-section parsed
hands control to the sub-production together with a continuation naming
itself, the step to resume at, and the state it had built so far.

Control transfer is reified as two step values:

- `Enter(production, cursor, k)`: start `production` on `cursor`.
- `Deliver(k, cursor, fragment)`: resume `k` with `fragment`.

`run` is the trampoline that dispatches them, so nesting depth never grows
the Python stack. A `Deliver` to `k=None` ends the run; this is also how a
single production is exercised in isolation (stub continuation).

Production-local state and caller context are kept apart: the state object
belongs to the production, the continuation belongs to its caller. Both are
immutable; each step builds new ones with `dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, ClassVar, Dict, Mapping, NoReturn, Optional, Sequence, Tuple, Union

from traitxml.core.errors import MalformedLeafError, MissingFieldError, RedefinitionError, StructuralError
from traitxml.lexer.tokens import Token, TokenKind, TokenSpan, render_span

# Every tag the grammar knows about, in any context.
VOCABULARY = frozenset(
	{
		"trait",
		"name",
		"vis",
		"unsafe",
		"bounds",
		"lifetime",
		"lifetime-bound",
		"type",
		"type-bound",
		"for-bound",
		"const",
		"req",
		"where",
		"lifetime-clause",
		"type-clause",
		"for-clause",
		"assoctype",
		"assocconst",
		"assocfn",
		"default-value",
		"extern",
		"gparams",
		"params",
		"param",
		"pat",
		"ret",
		"rust",
	}
)


@dataclass(frozen=True)
class Cursor:
	"""Immutable read position over a token tuple."""

	tokens: Tuple[Token, ...]
	pos: int = 0

	@property
	def at_end(self) -> bool:
		return self.pos >= len(self.tokens)

	def peek(self) -> Optional[Token]:
		if self.pos < len(self.tokens):
			return self.tokens[self.pos]
		return None

	def advance(self, n: int = 1) -> "Cursor":
		return Cursor(self.tokens, min(self.pos + n, len(self.tokens)))

	@property
	def rest(self) -> Tuple[Token, ...]:
		return self.tokens[self.pos :]

	@property
	def last(self) -> Optional[Token]:
		"""Most recently consumed token (used to locate end-of-input errors)."""
		if self.pos == 0 or not self.tokens:
			return None
		return self.tokens[min(self.pos, len(self.tokens)) - 1]


@dataclass(frozen=True)
class Continuation:
	"""
	What to do once a sub-production has produced its fragment.

	`target` names the production to resume, `resume` the step within it (the
	tag whose section just closed), `state` the target's own state captured
	when it made the call, and `outer` the target's caller.
	"""

	target: str
	resume: str
	state: Any = None
	outer: Optional["Continuation"] = None

	def chain(self) -> Tuple[str, ...]:
		"""Production ids from this continuation outwards."""
		out = []
		k: Optional[Continuation] = self
		while k is not None:
			out.append(k.target)
			k = k.outer
		return tuple(out)


@dataclass(frozen=True)
class Enter:
	production: str
	cursor: Cursor
	k: Optional[Continuation]


@dataclass(frozen=True)
class Deliver:
	k: Optional[Continuation]
	cursor: Cursor
	fragment: Any


Step = Union[Enter, Deliver]

_PRODUCTIONS: Dict[str, "Production"] = {}


def register(production: "Production") -> "Production":
	if production.id in _PRODUCTIONS:
		raise ValueError(f"production `{production.id}` registered twice")
	_PRODUCTIONS[production.id] = production
	return production


def production(production_id: str) -> "Production":
	try:
		return _PRODUCTIONS[production_id]
	except KeyError:
		raise KeyError(f"unknown production `{production_id}`") from None


def run(step: Step) -> Tuple[Any, Cursor]:
	"""Drive steps until a fragment is delivered to the empty continuation."""
	while True:
		if isinstance(step, Enter):
			step = production(step.production).start(step.cursor, step.k)
			continue
		k = step.k
		if k is None:
			return step.fragment, step.cursor
		step = production(k.target).resume(k, step.cursor, step.fragment)


def run_production(production_id: str, tokens: Sequence[Token]) -> Tuple[Any, Tuple[Token, ...]]:
	"""
	Run one production over `tokens` with a stub continuation.

	`tokens` is the section interior (the opening tag already consumed) up to
	and including the section's closing tag; returns the fragment and
	whatever tokens follow the closing tag.
	"""
	fragment, cursor = run(Enter(production_id, Cursor(tuple(tokens)), None))
	return fragment, cursor.rest


def describe(value: Any) -> Optional[str]:
	"""Source-ish spelling of a field value for diagnostics (None if not printable)."""
	if value == ():
		return None
	if isinstance(value, Token):
		return value.text
	if isinstance(value, tuple) and all(isinstance(item, Token) for item in value):
		return render_span(value)
	return None


class Production:
	"""
	Base class for grammar productions.

	Subclasses set `id` (registry key), `rule` (name used in diagnostics) and
	`close_tag`, and implement `step`. The base class provides continuation
	plumbing and the uniform diagnostics every production shares.
	"""

	id: ClassVar[str]
	rule: ClassVar[str]
	close_tag: ClassVar[str]

	def initial(self) -> Any:
		return None

	def start(self, cur: Cursor, k: Optional[Continuation]) -> Step:
		return self.step(cur, self.initial(), k)

	def step(self, cur: Cursor, state: Any, k: Optional[Continuation]) -> Step:
		raise NotImplementedError

	def resume(self, k: Continuation, cur: Cursor, fragment: Any) -> Step:
		raise NotImplementedError(f"production `{self.id}` has no resumption steps")

	def call(self, target: str, cur: Cursor, resume: str, state: Any, k: Optional[Continuation]) -> Enter:
		return Enter(target, cur, Continuation(self.id, resume, state, k))

	# --- diagnostics ----------------------------------------------------

	@staticmethod
	def callers(k: Optional[Continuation]) -> Tuple[str, ...]:
		return k.chain() if k is not None else ()

	def _msg(self, text: str, k: Optional[Continuation]) -> str:
		if k is None:
			return f"error parsing {self.rule}: {text}"
		return f"error parsing {self.rule}: {text}. caller: `{k.target}`"

	def fail_eof(self, cur: Cursor, k: Optional[Continuation]) -> NoReturn:
		last = cur.last
		raise StructuralError(
			self._msg(f"ran out of tokens before `</{self.close_tag}>`", k),
			rule=self.rule,
			span=last.span if last is not None else None,
			callers=self.callers(k),
		)

	def fail_unexpected(self, tok: Token, k: Optional[Continuation]) -> NoReturn:
		if tok.kind is TokenKind.OPEN_TAG:
			known = "unexpected" if tok.tag in VOCABULARY else "unknown"
			what = f"{known} start tag `{tok.text}` inside `<{self.close_tag}>`"
		elif tok.kind is TokenKind.CLOSE_TAG:
			known = "unexpected" if tok.tag in VOCABULARY else "unknown"
			what = f"{known} end tag `{tok.text}`, expected `</{self.close_tag}>`"
		elif tok.kind is TokenKind.EMPTY_TAG:
			what = f"unexpected tag `{tok.text}` inside `<{self.close_tag}>`"
		else:
			what = f"unexpected token `{tok.text}`"
		raise StructuralError(self._msg(what, k), rule=self.rule, token=tok, callers=self.callers(k))

	def fail_redefined(self, label: str, prior: Any, tok: Token, k: Optional[Continuation]) -> NoReturn:
		shown = describe(prior)
		if shown is None:
			what = f"encountered more than one `{tok.text}`"
		else:
			what = f"{label} already defined as `{shown}`, but encountered another `{tok.text}`"
		raise RedefinitionError(
			self._msg(what, k),
			rule=self.rule,
			token=tok,
			prior=prior,
			callers=self.callers(k),
		)

	def fail_missing(self, what: str, missing: Sequence[str], tok: Token, k: Optional[Continuation]) -> NoReturn:
		raise MissingFieldError(
			self._msg(what, k),
			rule=self.rule,
			token=tok,
			missing=missing,
			callers=self.callers(k),
		)

	def fail_malformed(self, what: str, tok: Optional[Token], k: Optional[Continuation]) -> NoReturn:
		raise MalformedLeafError(self._msg(what, k), rule=self.rule, token=tok, callers=self.callers(k))


class SpanLeaf(Production):
	"""
	Leaf production accumulating every token up to its closing tag.

	Opening tags are accumulated like any other token (`Vec<u8>` lexes its
	`<u8>` as a tag marker). A foreign closing tag or a self-closing tag can
	never be part of a Rust type, path, pattern or expression, so it ends
	the section with an error instead of being swallowed.
	"""

	allow_empty: ClassVar[bool] = False
	empty_message: ClassVar[str] = "empty section"

	def step(self, cur: Cursor, state: Any, k: Optional[Continuation]) -> Step:
		acc: list[Token] = []
		while True:
			tok = cur.peek()
			if tok is None:
				self.fail_eof(cur, k)
			if tok.closes(self.close_tag):
				break
			if tok.kind in (TokenKind.CLOSE_TAG, TokenKind.EMPTY_TAG):
				self.fail_unexpected(tok, k)
			acc.append(tok)
			cur = cur.advance()
		span = tuple(acc)
		if not span and not self.allow_empty:
			self.fail_malformed(self.empty_message, tok, k)
		return Deliver(k, cur.advance(), self.build(span, tok, k))

	def build(self, span: TokenSpan, close: Token, k: Optional[Continuation]) -> Any:
		return span


@dataclass(frozen=True)
class Sub:
	"""
	How a section production handles one child tag.

	`field` is the state attribute the child's fragment lands in; `many`
	appends instead of setting once; `convert` adapts the fragment first;
	`extra` are additional state updates applied alongside.
	"""

	production: str
	field: str
	many: bool = False
	label: Optional[str] = None
	convert: Optional[Callable[[Any], Any]] = None
	extra: Mapping[str, Any] = None  # type: ignore[assignment]


class Section(Production):
	"""
	Production for a tag section whose interior is made of child sections.

	The dispatch loop is the same for every section: recurse on a known
	child tag, set a flag on a known self-closing tag, finish on the own
	closing tag, and fail on anything else.
	"""

	children: ClassVar[Mapping[str, Sub]] = {}
	# Self-closing tags that set a boolean state field.
	flags: ClassVar[Mapping[str, str]] = {}
	State: ClassVar[type]

	def initial(self) -> Any:
		return self.State()

	def step(self, cur: Cursor, state: Any, k: Optional[Continuation]) -> Step:
		while True:
			tok = cur.peek()
			if tok is None:
				self.fail_eof(cur, k)
			if tok.closes(self.close_tag):
				return Deliver(k, cur.advance(), self.finish(state, tok, k))
			if tok.kind is TokenKind.OPEN_TAG and tok.tag in self.children:
				sub = self.children[tok.tag]
				if not sub.many:
					prior = getattr(state, sub.field)
					if prior is not None:
						self.fail_redefined(sub.label or sub.field, prior, tok, k)
				return self.call(sub.production, cur.advance(), tok.tag, state, k)
			if tok.kind is TokenKind.EMPTY_TAG and tok.tag in self.flags:
				field = self.flags[tok.tag]
				if getattr(state, field):
					self.fail_redefined(field, None, tok, k)
				state = replace(state, **{field: True})
				cur = cur.advance()
				continue
			self.fail_unexpected(tok, k)

	def resume(self, k: Continuation, cur: Cursor, fragment: Any) -> Step:
		sub = self.children[k.resume]
		value = sub.convert(fragment) if sub.convert is not None else fragment
		state = k.state
		if sub.many:
			updates = {sub.field: getattr(state, sub.field) + (value,)}
		else:
			updates = {sub.field: value}
		if sub.extra:
			updates.update(sub.extra)
		return self.step(cur, replace(state, **updates), k.outer)

	def finish(self, state: Any, close: Token, k: Optional[Continuation]) -> Any:
		raise NotImplementedError


__all__ = [
	"VOCABULARY",
	"Cursor",
	"Continuation",
	"Enter",
	"Deliver",
	"Step",
	"Production",
	"SpanLeaf",
	"Section",
	"Sub",
	"register",
	"production",
	"run",
	"run_production",
	"describe",
]
