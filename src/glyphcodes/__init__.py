# -*- coding: utf-8 -*-
"""
GlyphCodes Package.

Codepoint allocation for a glyph/icon font editor: every glyph selected into
the working set owns a unique, legal Unicode codepoint, chosen according to
the configured encoding strategy and kept consistent as the user selects,
deselects and re-codes glyphs.

Typical use:
    from glyphcodes import CodeTracker, GlyphModel
    tracker = CodeTracker()
    glyph = GlyphModel("icon-star", original_code=0x2605)
    tracker.observe(glyph)
    glyph.selected = True
"""

__version__ = "0.1.0"

from .core import (
    AllocationSpaceExhausted,
    CodeAllocationError,
    CodeRegistry,
    CodeTracker,
    EncodingStrategy,
    UnknownEncodingStrategy,
    allocate,
)
from .models import GlyphModel

__all__ = [
    "AllocationSpaceExhausted",
    "CodeAllocationError",
    "CodeRegistry",
    "CodeTracker",
    "EncodingStrategy",
    "GlyphModel",
    "UnknownEncodingStrategy",
    "allocate",
]
