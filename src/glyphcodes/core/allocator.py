# -*- coding: utf-8 -*-
"""
src/glyphcodes/core/allocator.py

Chooses a codepoint for a glyph according to the active encoding strategy
and commits it.

Strategies:
- 'pua':     always take the first free Private Use Area code.
- 'ascii':   keep or pick a printable ASCII code, else fall back to the PUA.
- 'unicode': restore the glyph's original code, else fall back to the PUA.
"""

import logging
from enum import Enum

from .codepoints import (
    find_ascii,
    find_private_use_area,
    find_unicode,
    format_codepoint,
)
from .errors import UnknownEncodingStrategy

logger = logging.getLogger(__name__)


class EncodingStrategy(str, Enum):
    """The glyph encoding modes offered by the editor."""

    PUA = "pua"
    ASCII = "ascii"
    UNICODE = "unicode"

    @classmethod
    def parse(cls, value) -> "EncodingStrategy":
        """
        Converts a setting value into an EncodingStrategy.

        Args:
            value: An EncodingStrategy or its string value. Strings are
                   matched case-insensitively, ignoring surrounding spaces.

        Raises:
            UnknownEncodingStrategy: If the value is not a known strategy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        logger.error(f"Unrecognized encoding strategy: {value!r}")
        raise UnknownEncodingStrategy(value)


def choose_code(glyph, strategy, registry) -> int:
    """
    Picks a code for `glyph` without changing anything.

    Args:
        glyph: Object with `code` and `original_code` attributes.
        strategy: An EncodingStrategy or its string value.
        registry: The used codes registry.

    Returns:
        int: A legal code that is free in the registry.

    Raises:
        UnknownEncodingStrategy: For an unsupported strategy value.
        AllocationSpaceExhausted: If the PUA fallback has nothing left.
    """
    strategy = EncodingStrategy.parse(strategy)

    if strategy is EncodingStrategy.PUA:
        return find_private_use_area(registry)
    if strategy is EncodingStrategy.ASCII:
        return find_ascii(glyph.code, registry)
    return find_unicode(glyph.original_code, registry)


def allocate(glyph, strategy, registry) -> int:
    """
    Sets a new glyph code using the given encoding strategy.

    The code is written to `glyph.code` and then marked as owned by the glyph.
    The explicit claim matters when the chosen code equals the glyph's current
    one: the write is then not a change and nothing else would record it.

    Returns:
        int: The allocated code.
    """
    strategy = EncodingStrategy.parse(strategy)
    new_code = choose_code(glyph, strategy, registry)
    logger.debug(f"Allocating {format_codepoint(new_code)} to {glyph!r} ({strategy.value}).")

    glyph.code = new_code
    registry.claim(new_code, glyph)
    return new_code
