# -*- coding: utf-8 -*-
"""
src/glyphcodes/core/errors.py

Exceptions raised by the codepoint allocation engine.

Both concrete errors describe states that should be unreachable when the
editor is wired correctly. They are never retried: they propagate to whatever
user action triggered the allocation.
"""


class CodeAllocationError(Exception):
    """Base class for all codepoint allocation failures."""


class AllocationSpaceExhausted(CodeAllocationError):
    """
    Raised when the Private Use Area working range has no free codepoint left.

    Attributes:
        min_code (int): Lower bound of the exhausted range.
        max_code (int): Upper bound of the exhausted range.
    """

    def __init__(self, min_code: int, max_code: int):
        self.min_code = min_code
        self.max_code = max_code
        super().__init__(
            f"Free codepoints in the Private Use Area "
            f"(U+{min_code:04X}..U+{max_code:04X}) are run out."
        )


class UnknownEncodingStrategy(CodeAllocationError, ValueError):
    """
    Raised when the active encoding setting is not 'pua', 'ascii' or 'unicode'.

    Attributes:
        value: The offending setting value, as received.
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown glyph encoding strategy: {value!r}")
