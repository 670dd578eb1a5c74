"""
Pattern compilation and rendering for seqparse.

A pattern is a filename template such as `/renders/shot_####.exr`,
`plate.%04d.dpx` or `stereo_%v.%d.png`. Compiling it yields an ordered tuple
of position-tagged tokens: literal text that must appear verbatim in a
filename, and variables (frame fields and view fields) that are resolved per
file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from ..core.constants import (
    HASH_CHAR,
    LONG_VIEW_NAMES,
    PRINTF_CHAR,
    PRINTF_TERMINATORS,
    SHORT_VIEW_NAMES,
    VIEW_PREFIX,
)
from ..core.errors import CompileError, UnrecognizedVariableError
from ..core.types import (
    VARIABLE_TOKEN_TYPES,
    FrameField,
    LiteralToken,
    LongView,
    LooseFrameField,
    ShortView,
    Token,
    VariableToken,
)
from ..utils.strings import split_extension, split_path, zero_pad

_PADDED_PRINTF = re.compile(r"%0([0-9]*)d")


class _CompilerState(Enum):
    IDLE = auto()
    IN_HASH_FIELD = auto()
    IN_PRINTF_FIELD = auto()


class _TokenBuilder:
    """Accumulates literal and variable buffers while scanning a pattern."""

    def __init__(self) -> None:
        self.tokens: list[Token] = []
        self.literal_count = 0
        self._text: list[str] = []
        self._source: list[str] = []
        self._literal_offset = 0
        self.field: list[str] = []
        self.field_offset = 0

    def add_literal(self, text: str, source: str, offset: int) -> None:
        if not self._source:
            self._literal_offset = offset
        self._text.append(text)
        self._source.append(source)

    def flush_literal(self) -> None:
        if not self._source:
            return
        text = "".join(self._text)
        self.tokens.append(
            LiteralToken(
                text=text,
                source="".join(self._source),
                offset=self._literal_offset,
                preceding_literal_count=self.literal_count,
            )
        )
        self.literal_count += len(text)
        self._text.clear()
        self._source.clear()

    def start_field(self, char: str, offset: int) -> None:
        self.flush_literal()
        self.field = [char]
        self.field_offset = offset

    def field_as_literal(self) -> None:
        """Turn the pending field into literal text (unsupported printf syntax)."""
        spelled = "".join(self.field)
        self.add_literal(spelled, spelled, self.field_offset)
        self.field = []

    def flush_hash_field(self) -> None:
        source = "".join(self.field)
        self.tokens.append(FrameField(len(source), source, self.field_offset, self.literal_count))
        self.field = []

    def flush_printf_field(self) -> None:
        source = "".join(self.field)
        token = _printf_token(source, self.field_offset, self.literal_count)
        if token is None:
            self.field_as_literal()
            return
        self.tokens.append(token)
        self.field = []


def _printf_token(source: str, offset: int, preceding: int) -> VariableToken | None:
    """Map a closed printf field to its token, or None if the syntax is unsupported."""
    if source == "%d":
        return LooseFrameField(source, offset, preceding)
    if source == "%v":
        return ShortView(source, offset, preceding)
    if source == "%V":
        return LongView(source, offset, preceding)
    match = _PADDED_PRINTF.fullmatch(source)
    if match:
        return FrameField(int(match.group(1) or 0), source, offset, preceding)
    return None


def compile_tokens(pattern: str, extension: str = "") -> tuple[Token, ...]:
    """Compile a path-free, extension-free pattern into ordered tokens.

    `#` runs become frame fields. `%0<N>d`, `%d`, `%v` and `%V` become printf
    fields; `%%` is a literal `%`. A printf field with unsupported syntax
    (another letter, or a non-zero digit right after `%`) is kept as literal
    text. When `extension` is given it is appended as a trailing literal
    `.<extension>`.

    Raises:
        CompileError: If a printf field is opened while another one is open.
    """
    builder = _TokenBuilder()
    state = _CompilerState.IDLE
    n = len(pattern)
    i = 0

    while i < n:
        c = pattern[i]

        if state is _CompilerState.IN_PRINTF_FIELD:
            if c in PRINTF_TERMINATORS:
                builder.field.append(c)
                builder.flush_printf_field()
                state = _CompilerState.IDLE
            elif c == PRINTF_CHAR:
                following = pattern[i + 1] if i + 1 < n else ""
                if following not in ("", PRINTF_CHAR):
                    raise CompileError(pattern, i)
                # an escape or a trailing %, the open field was never a variable
                builder.field_as_literal()
                state = _CompilerState.IDLE
                continue
            elif "0" <= c <= "9":
                builder.field.append(c)
                if len(builder.field) == 2 and c != "0":
                    builder.field_as_literal()
                    state = _CompilerState.IDLE
            else:
                builder.field.append(c)
                builder.field_as_literal()
                state = _CompilerState.IDLE
            i += 1
            continue

        if c == HASH_CHAR:
            if state is not _CompilerState.IN_HASH_FIELD:
                builder.start_field(c, i)
                state = _CompilerState.IN_HASH_FIELD
            else:
                builder.field.append(c)
            i += 1
            continue

        if state is _CompilerState.IN_HASH_FIELD:
            builder.flush_hash_field()
            state = _CompilerState.IDLE

        if c == PRINTF_CHAR:
            following = pattern[i + 1] if i + 1 < n else ""
            if following == PRINTF_CHAR:
                builder.add_literal(PRINTF_CHAR, PRINTF_CHAR * 2, i)
                i += 2
                continue
            if following == "":
                builder.add_literal(c, c, i)
            else:
                builder.start_field(c, i)
                state = _CompilerState.IN_PRINTF_FIELD
            i += 1
            continue

        builder.add_literal(c, c, i)
        i += 1

    if state is _CompilerState.IN_HASH_FIELD:
        builder.flush_hash_field()
    elif state is _CompilerState.IN_PRINTF_FIELD:
        builder.field_as_literal()
    builder.flush_literal()

    if extension:
        dotted = "." + extension
        builder.add_literal(dotted, dotted, n)
        builder.flush_literal()

    return tuple(builder.tokens)


@dataclass(frozen=True)
class CompiledPattern:
    """A pattern split into its directory and its compiled tokens."""

    pattern: str
    path: str
    stem: str
    extension: str
    tokens: tuple[Token, ...]
    literals: tuple[LiteralToken, ...] = field(init=False)
    variables: tuple[VariableToken, ...] = field(init=False)
    literal_text: str = field(init=False)

    def __post_init__(self) -> None:
        literals = tuple(t for t in self.tokens if isinstance(t, LiteralToken))
        variables = tuple(t for t in self.tokens if isinstance(t, VARIABLE_TOKEN_TYPES))
        object.__setattr__(self, "literals", literals)
        object.__setattr__(self, "variables", variables)
        object.__setattr__(self, "literal_text", "".join(t.text for t in literals))

    @classmethod
    def parse(cls, pattern: str) -> CompiledPattern:
        """Split `pattern` into path, stem and extension, then compile the stem."""
        path, stem, extension = split_pattern(pattern)
        return cls(pattern=pattern, path=path, stem=stem, extension=extension, tokens=compile_tokens(stem, extension))

    @property
    def has_variables(self) -> bool:
        return bool(self.variables)


def split_pattern(pattern: str) -> tuple[str, str, str]:
    """Split a pattern into (directory, stem, extension)."""
    path, name = split_path(pattern)
    stem, extension = split_extension(name)
    return path, stem, extension


def view_name(view_number: int, long_form: bool) -> str:
    """Render a view index the way `%v` (short) or `%V` (long) spells it."""
    names = LONG_VIEW_NAMES if long_form else SHORT_VIEW_NAMES
    if 0 <= view_number < len(names):
        return names[view_number]
    return f"{VIEW_PREFIX}{view_number}"


def render_token(token: Token, frame_number: int, view_number: int) -> str:
    """Render one token for a concrete frame and view."""
    if isinstance(token, LiteralToken):
        return token.source
    if isinstance(token, FrameField):
        return zero_pad(frame_number, token.width)
    if isinstance(token, LooseFrameField):
        return str(frame_number)
    if isinstance(token, ShortView):
        return view_name(view_number, long_form=False)
    if isinstance(token, LongView):
        return view_name(view_number, long_form=True)
    raise UnrecognizedVariableError(f"Variable token unrecognized: {token!r}")


def render_file_name(pattern: str, frame_number: int, view_number: int) -> str:
    """Substitute every variable of `pattern` with its concrete rendering.

    Examples:
        ("file.####.jpg", 7, -1) -> "file.0007.jpg"
        ("cam_%V.%03d.exr", 12, 1) -> "cam_right.012.exr"
    """
    compiled = CompiledPattern.parse(pattern)
    return compiled.path + "".join(render_token(t, frame_number, view_number) for t in compiled.tokens)
