# -*- coding: utf-8 -*-
"""
src/glyphcodes/core/codepoints.py

The validity oracle for glyph codepoints.

Every function here is pure: it decides whether a codepoint is a legal
allocation target and, given a registry of used codes, whether it is still
free. The registry argument may be a `CodeRegistry` or any mapping that
supports `.get(code)`; a missing entry or a `None` value means "free".
"""

import logging
import re
from typing import Optional

from .errors import AllocationSpaceExhausted

logger = logging.getLogger(__name__)

# --- Ranges ---
UNICODE_CODES_MIN = 0x0
UNICODE_CODES_MAX = 0x10FFFF

UNICODE_SURROGATE_BLOCK_MIN = 0xD800
UNICODE_SURROGATE_BLOCK_MAX = 0xDFFF

# Working subset of the PUA. Starts above the standard 0xE000 bound and is the
# point where fallback allocation runs out, so keep it as is.
UNICODE_PRIVATE_USE_AREA_MIN = 0xE800
UNICODE_PRIVATE_USE_AREA_MAX = 0xF8FF

ASCII_PRINTABLE_MIN = 0x21
ASCII_PRINTABLE_MAX = 0x7E


def _build_restricted_codes() -> frozenset:
    """
    Collects the codepoints that XML 1.1 documents may not contain.

    See http://www.w3.org/TR/xml11/#charsets
    """
    codes = set(range(0x0, 0x9))             # C0 controls before TAB
    codes.update((0xB, 0xC))                 # VT, FF
    codes.update(range(0xE, 0x20))           # rest of C0, LF and CR excluded
    codes.update(range(0x7F, 0x85))          # DEL and C1 up to NEL
    codes.update(range(0x86, 0xA0))          # C1 after NEL
    codes.update(range(0xFDD0, 0xFDE0))      # noncharacters
    # Last two codepoints of every plane are noncharacters.
    for plane in range(0x11):
        codes.add((plane << 16) | 0xFFFE)
        codes.add((plane << 16) | 0xFFFF)
    return frozenset(codes)


RESTRICTED_CODES = _build_restricted_codes()


def is_legal_codepoint(code) -> bool:
    """
    Checks whether a value may ever be used as a glyph codepoint.

    This is a total function: anything that is not an integer, or an integer
    outside the Unicode range, simply yields False.

    Args:
        code: The candidate codepoint.

    Returns:
        bool: True if the code is in range, is not a surrogate half and is not
              a restricted codepoint.
    """
    if isinstance(code, bool) or not isinstance(code, int):
        return False
    return (UNICODE_CODES_MIN <= code <= UNICODE_CODES_MAX and
            not UNICODE_SURROGATE_BLOCK_MIN <= code <= UNICODE_SURROGATE_BLOCK_MAX and
            code not in RESTRICTED_CODES)


def is_available(code, registry) -> bool:
    """Returns True if the code is legal and nobody owns it in the registry."""
    return is_legal_codepoint(code) and registry.get(code) is None


def find_first_available(min_code: int, max_code: int, registry) -> Optional[int]:
    """
    Returns the first available code in a range.

    Args:
        min_code (int): First code to try.
        max_code (int): Last code to try, inclusive.
        registry: The used codes registry.

    Returns:
        Optional[int]: The lowest available code in the range, or None if
                       every code in it is either illegal or used.
    """
    for code in range(min_code, max_code + 1):
        if is_available(code, registry):
            return code
    return None


def find_private_use_area(registry) -> int:
    """
    Returns the first available code in the Private Use Area working range.

    Raises:
        AllocationSpaceExhausted: If the whole working range is used. The PUA
            is the allocator of last resort, so this should never happen.
    """
    code = find_first_available(
        UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX, registry
    )
    if code is None:
        logger.error(
            f"No free codepoints left in U+{UNICODE_PRIVATE_USE_AREA_MIN:04X}.."
            f"U+{UNICODE_PRIVATE_USE_AREA_MAX:04X}."
        )
        raise AllocationSpaceExhausted(
            UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX
        )
    return code


def find_ascii(preferred_code: Optional[int], registry) -> int:
    """
    Returns a printable ASCII code, falling back to the Private Use Area.

    The preferred code is kept when it is set, available and printable.
    Otherwise the first free printable code is used, and when all 94 of them
    are taken the first free PUA code.
    """
    if (preferred_code and
            is_available(preferred_code, registry) and
            ASCII_PRINTABLE_MIN <= preferred_code <= ASCII_PRINTABLE_MAX):
        return preferred_code

    code = find_first_available(ASCII_PRINTABLE_MIN, ASCII_PRINTABLE_MAX, registry)
    if code is None:
        logger.info("Printable ASCII range is full, falling back to the Private Use Area.")
        return find_private_use_area(registry)
    return code


def find_unicode(code: Optional[int], registry) -> int:
    """Returns `code` if it is available, else the first free PUA code."""
    if is_available(code, registry):
        return code
    logger.debug(f"Code {format_codepoint(code)} is not available, falling back to the Private Use Area.")
    return find_private_use_area(registry)


def format_codepoint(code: Optional[int]) -> str:
    """
    Formats a codepoint the way the editor displays it, e.g. 'U+E800'.

    Values that are not codepoints are rendered with `repr`.
    """
    if isinstance(code, bool) or not isinstance(code, int) or code < 0:
        return repr(code)
    return f"U+{code:04X}"


_HEX_CODE_RE = re.compile(r"^(?:u\+|0x)?([0-9a-f]{1,6})$", re.IGNORECASE)


def parse_codepoint(text: str) -> Optional[int]:
    """
    Parses a hexadecimal codepoint typed by the user.

    Accepts 'E800', 'e800', '0xE800' and 'U+E800', with optional surrounding
    whitespace.

    Args:
        text (str): The user input.

    Returns:
        Optional[int]: The parsed code, or None if the text is not a hex
                       number within the Unicode range. Whether the code is
                       legal is left to `is_legal_codepoint`.
    """
    if not isinstance(text, str):
        return None
    match = _HEX_CODE_RE.match(text.strip())
    if not match:
        return None
    code = int(match.group(1), 16)
    if code > UNICODE_CODES_MAX:
        return None
    return code
