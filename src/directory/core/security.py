"""Input hygiene for values that may be echoed back to browsers."""

import re

_MARKUP_CHARS = re.compile(r"[<>]")


def sanitize_input(value: str) -> str:
    """Trim surrounding whitespace and strip angle brackets.

    This blocks markup injection into anything that later echoes the value.
    It does not make a value safe for SQL; queries always bind parameters.

    Args:
        value: Raw user-supplied text

    Returns:
        The cleaned text
    """
    return _MARKUP_CHARS.sub("", value.strip())
