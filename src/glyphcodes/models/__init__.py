# -*- coding: utf-8 -*-
"""
The Models Package for GlyphCodes.

Holds the editor-side objects the allocation engine observes.
"""

from .glyph import GlyphModel

__all__ = ["GlyphModel"]
