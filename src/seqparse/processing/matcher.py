"""
Matching a filename against a compiled pattern.

Matching runs in two passes. First every literal token must be found, in
order, at increasing positions. Then the filename is walked left to right,
counting the literal characters consumed so far; a digit run or a view name
found exactly where the pattern expects its next variable is validated as
that variable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..core.constants import DEFAULT_FRAME_NUMBER, LONG_VIEW_NAMES, NO_VIEW, SHORT_VIEW_NAMES, VIEW_PREFIX
from ..core.types import MatchResult, VariableKind, VariableToken
from ..output.logger import get_logger
from ..utils.strings import starts_with
from .pattern import CompiledPattern
from .variables import check_variable

logger = get_logger(__name__)

_DIGIT_RUN = re.compile(r"[0-9]+")
_NUMBERED_VIEW = re.compile(r"view[0-9]+", re.IGNORECASE)


class MonotonicCursor:
    """A search position in a string that can only move forward."""

    __slots__ = ("_position",)

    def __init__(self, position: int = 0) -> None:
        self._position = position

    @property
    def position(self) -> int:
        return self._position

    def advance_to(self, position: int) -> None:
        if position < self._position:
            raise ValueError(f"Cursor cannot move backwards from {self._position} to {position}")
        self._position = position

    def find(self, haystack: str, needle: str) -> int:
        """Find `needle` at or after the cursor and move the cursor past it.

        Returns the index of the match, or -1 (cursor unchanged).
        """
        index = haystack.find(needle, self._position)
        if index != -1:
            self.advance_to(index + len(needle))
        return index


def contains_literals_in_order(filename: str, compiled: CompiledPattern) -> bool:
    """Return True if every literal of `compiled` occurs in `filename`, in order.

    Matching is case-sensitive. A literal may sit inside a longer word
    (`marleen` is found in `marleenBG`).
    """
    cursor = MonotonicCursor()
    return all(cursor.find(filename, literal.text) != -1 for literal in compiled.literals)


@dataclass
class _Extraction:
    """Running state of the left-to-right variable walk over one filename."""

    variables: tuple[VariableToken, ...]
    literal_text: str
    next_index: int = 0
    literal_seen: int = 0
    frame_number: int | None = None
    view_number: int | None = None

    def expected(self) -> VariableToken | None:
        """The next variable, if it is expected at the current literal offset."""
        if self.next_index >= len(self.variables):
            return None
        token = self.variables[self.next_index]
        if token.preceding_literal_count != self.literal_seen:
            return None
        return token

    def consume_literal(self, text: str) -> bool:
        """Accept `text` as literal only where the pattern spells exactly that."""
        if not self.literal_text.startswith(text, self.literal_seen):
            return False
        self.literal_seen += len(text)
        return True

    def resolve(self, token: VariableToken, value: str, kind: VariableKind) -> bool:
        number = check_variable(token, value, kind)
        if number is None:
            logger.debug("%r does not fit %s at pattern offset %d", value, token.source, token.offset)
            return False
        if kind is VariableKind.FRAME_NUMBER:
            if self.frame_number is not None and self.frame_number != number:
                return False
            self.frame_number = number
        else:
            if self.view_number is not None and self.view_number != number:
                return False
            self.view_number = number
        self.next_index += 1
        return True

    @property
    def complete(self) -> bool:
        return self.next_index == len(self.variables)

    def result(self) -> MatchResult:
        frame = DEFAULT_FRAME_NUMBER if self.frame_number is None else self.frame_number
        view = NO_VIEW if self.view_number is None else self.view_number
        return MatchResult(frame, view)


def _view_kind(token: VariableToken) -> VariableKind:
    """Kind a view word is read as; a frame field expected here still rejects it."""
    return VariableKind.SHORT_VIEW if token.kind is VariableKind.SHORT_VIEW else VariableKind.LONG_VIEW


def extract_variables(filename: str, compiled: CompiledPattern) -> MatchResult | None:
    """Walk `filename` and resolve every variable of `compiled`, in order.

    Returns None as soon as a variable does not fit, two frame fields (or two
    view fields) disagree, or a digit run appears where neither a variable nor
    the same literal digits are expected.
    """
    state = _Extraction(compiled.variables, compiled.literal_text)
    n = len(filename)
    i = 0

    while i < n:
        digits = _DIGIT_RUN.match(filename, i)
        if digits:
            run = digits.group(0)
            token = state.expected()
            if token is not None:
                if not state.resolve(token, run, VariableKind.FRAME_NUMBER):
                    return None
            elif not state.consume_literal(run):
                return None
            i = digits.end()
            continue

        rest = filename[i:]
        word = next((name for name in LONG_VIEW_NAMES if starts_with(rest, name)), None)
        if word is None:
            numbered = _NUMBERED_VIEW.match(filename, i)
            if numbered:
                word = numbered.group(0).lower()
        if word is not None:
            token = state.expected()
            spelled = filename[i : i + len(word)]
            if token is not None:
                # a numbered view is written the same way for %v and %V
                kind = _view_kind(token) if starts_with(word, VIEW_PREFIX) else VariableKind.LONG_VIEW
                if not state.resolve(token, word, kind):
                    return None
            elif not state.consume_literal(spelled):
                if not starts_with(word, VIEW_PREFIX):
                    return None
                # "preview0001": only the word is literal, the digits are read on their own
                state.literal_seen += len(VIEW_PREFIX)
                i += len(VIEW_PREFIX)
                continue
            i += len(word)
            continue

        letter = filename[i].lower()
        if letter in SHORT_VIEW_NAMES:
            token = state.expected()
            # a lone l/r is only a view when a %v is expected right here
            if token is not None and token.kind is VariableKind.SHORT_VIEW:
                if not state.resolve(token, letter, VariableKind.SHORT_VIEW):
                    return None
                i += 1
                continue

        state.literal_seen += 1
        i += 1

    if not state.complete:
        return None
    return state.result()


def match_filename(filename: str, compiled: CompiledPattern) -> MatchResult | None:
    """Test whether `filename` instantiates `compiled`.

    Args:
        filename: A filename without its directory.
        compiled: The compiled pattern.

    Returns:
        The (frame_number, view_number) pair, with view_number -1 when the
        pattern has no view field, or None when the filename does not match.
    """
    if not contains_literals_in_order(filename, compiled):
        return None
    if not compiled.has_variables:
        return MatchResult(DEFAULT_FRAME_NUMBER, NO_VIEW)
    result = extract_variables(filename, compiled)
    if result is None:
        logger.debug("%s does not instantiate %s", filename, compiled.pattern)
    return result
