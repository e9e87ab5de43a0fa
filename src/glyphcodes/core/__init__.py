# -*- coding: utf-8 -*-
"""
The Core Package for GlyphCodes.

- `codepoints`: the validity oracle (legal and free codepoints, range scans).
- `registry`: the used codes table of an editing session.
- `allocator`: encoding strategies and code allocation.
- `tracker`: keeps the registry in step with glyph selection and code edits.
"""

from .allocator import EncodingStrategy, allocate, choose_code
from .codepoints import (
    find_first_available,
    find_private_use_area,
    is_available,
    is_legal_codepoint,
)
from .errors import AllocationSpaceExhausted, CodeAllocationError, UnknownEncodingStrategy
from .registry import CodeRegistry
from .tracker import CodeTracker

__all__ = [
    "AllocationSpaceExhausted",
    "CodeAllocationError",
    "CodeRegistry",
    "CodeTracker",
    "EncodingStrategy",
    "UnknownEncodingStrategy",
    "allocate",
    "choose_code",
    "find_first_available",
    "find_private_use_area",
    "is_available",
    "is_legal_codepoint",
]
