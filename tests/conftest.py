# -*- coding: utf-8 -*-
"""Shared fixtures for the GlyphCodes test suite."""

import pytest

from glyphcodes import CodeRegistry, CodeTracker, GlyphModel


class EncodingSetting:
    """Stands in for the editor's encoding selector."""

    def __init__(self, value="pua"):
        self.value = value

    def __call__(self):
        return self.value


@pytest.fixture
def registry():
    return CodeRegistry()


@pytest.fixture
def encoding():
    return EncodingSetting()


@pytest.fixture
def tracker(registry, encoding):
    return CodeTracker(registry=registry, encoding=encoding)


@pytest.fixture
def make_glyph(tracker):
    """Creates a glyph already observed by the tracker."""
    counter = iter(range(1_000_000))

    def _make(original_code=None, code=None, selected=False, observe=True):
        glyph = GlyphModel(f"glyph-{next(counter)}", original_code=original_code,
                           code=code, selected=selected)
        if observe:
            tracker.observe(glyph)
        return glyph

    return _make


def assert_registry_consistent(registry, glyphs):
    """Every registry entry matches its owner's code and selected codes are unique."""
    for code, owner in registry.items():
        assert owner.code == code
        assert owner.selected
    selected_codes = [g.code for g in glyphs if g.selected]
    assert len(selected_codes) == len(set(selected_codes))
    for glyph in glyphs:
        if glyph.selected:
            assert registry.owner(glyph.code) is glyph
        else:
            assert glyph not in [owner for _, owner in registry.items()]


@pytest.fixture
def check_registry(registry):
    def _check(glyphs):
        assert_registry_consistent(registry, glyphs)
    return _check
