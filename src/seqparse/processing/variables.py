"""Validation of one matched substring against one variable token."""

from __future__ import annotations

import re

from ..core.constants import LONG_VIEW_NAMES, SHORT_VIEW_NAMES
from ..core.errors import UnrecognizedVariableError
from ..core.types import VARIABLE_TOKEN_TYPES, FrameField, Token, VariableKind
from ..utils.strings import string_to_int

_NUMBERED_VIEW = re.compile(r"view([0-9]+)", re.IGNORECASE)


def _view_number(value: str, names: tuple[str, ...]) -> int | None:
    if value in names:
        return names.index(value)
    match = _NUMBERED_VIEW.fullmatch(value)
    if match:
        return string_to_int(match.group(1))
    return None


def _padded_frame_number(value: str, width: int) -> int | None:
    if len(value) < width:
        return None
    # extra padding on numbers wider than the field is not a valid rendering
    if len(value) > width and value.startswith("0"):
        return None
    return string_to_int(value)


def check_variable(token: Token, value: str, kind: VariableKind) -> int | None:
    """Check that `value` is a valid instance of `token` read as `kind`.

    Returns the frame number or view index the value stands for, or None when
    the value does not fit the token. A token read with a kind it cannot have
    (a `%v` read as a frame number, for instance) never fits.

    Raises:
        UnrecognizedVariableError: If `token` is not a variable token.
    """
    if not isinstance(token, VARIABLE_TOKEN_TYPES):
        raise UnrecognizedVariableError(f"Variable token unrecognized: {token!r}")
    if token.kind is not kind:
        return None
    if isinstance(token, FrameField):
        return _padded_frame_number(value, token.width)
    if kind is VariableKind.FRAME_NUMBER:
        return string_to_int(value)
    names = SHORT_VIEW_NAMES if kind is VariableKind.SHORT_VIEW else LONG_VIEW_NAMES
    return _view_number(value, names)
