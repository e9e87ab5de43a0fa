# -*- coding: utf-8 -*-
"""Tests for registry synchronisation driven by glyph events."""

import random

import pytest

from glyphcodes import CodeTracker, GlyphModel
from glyphcodes.core.codepoints import (
    ASCII_PRINTABLE_MAX,
    ASCII_PRINTABLE_MIN,
    UNICODE_PRIVATE_USE_AREA_MAX,
    UNICODE_PRIVATE_USE_AREA_MIN,
    is_legal_codepoint,
)
from glyphcodes.core.errors import AllocationSpaceExhausted, UnknownEncodingStrategy

USED = object()


class TestSelection:

    def test_select_allocates(self, make_glyph, registry):
        g = make_glyph(original_code=0x2605)
        g.selected = True
        assert g.code == 0xE800
        assert registry.owner(0xE800) is g

    def test_deselect_releases_but_keeps_code(self, make_glyph, registry):
        g = make_glyph(original_code=0x2605)
        g.selected = True
        g.selected = False
        assert g.code == 0xE800
        assert len(registry) == 0

    def test_selecting_twice_is_a_noop(self, make_glyph, registry):
        g = make_glyph()
        g.selected = True
        g.selected = True
        assert registry.codes_of(g) == (0xE800,)

    def test_strategy_is_read_on_every_allocation(self, make_glyph, encoding):
        a = make_glyph(original_code=0x2605)
        b = make_glyph(original_code=0x2606)
        a.selected = True
        encoding.value = "unicode"
        b.selected = True
        assert a.code == 0xE800
        assert b.code == 0x2606

    def test_unicode_round_trip(self, make_glyph, encoding, registry):
        encoding.value = "unicode"
        g = make_glyph(original_code=0x2605)
        g.selected = True
        assert g.code == 0x2605
        g.selected = False
        assert registry.owner(0x2605) is None
        g.selected = True
        assert g.code == 0x2605
        assert registry.owner(0x2605) is g

    def test_deselected_code_can_be_claimed_by_others(self, make_glyph, encoding, registry):
        encoding.value = "unicode"
        a = make_glyph(original_code=0x2605)
        b = make_glyph(original_code=0x2605)
        a.selected = True
        b.selected = True
        assert b.code == 0xE800
        a.selected = False
        b.code = 0x2605
        assert b.code == 0x2605
        a.selected = True
        assert a.code == 0xE800
        assert registry.owner(0x2605) is b

    def test_ascii_keeps_printable_code_on_reselect(self, make_glyph, encoding):
        encoding.value = "ascii"
        g = make_glyph(original_code=0x2605)
        g.selected = True
        assert g.code == ASCII_PRINTABLE_MIN
        g.selected = False
        g.code = 0x7A
        g.selected = True
        assert g.code == 0x7A

    def test_ascii_fallback(self, make_glyph, encoding, registry):
        encoding.value = "ascii"
        for code in range(ASCII_PRINTABLE_MIN, ASCII_PRINTABLE_MAX + 1):
            registry.claim(code, USED)
        g = make_glyph(original_code=0x41, code=0x41)
        g.selected = True
        assert UNICODE_PRIVATE_USE_AREA_MIN <= g.code <= UNICODE_PRIVATE_USE_AREA_MAX

    def test_exhaustion_aborts_selection(self, make_glyph, registry):
        for code in range(UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX + 1):
            registry.claim(code, USED)
        g = make_glyph(original_code=0x41)
        with pytest.raises(AllocationSpaceExhausted):
            g.selected = True
        assert not g.selected
        assert g.code == 0x41
        assert registry.codes_of(g) == ()

    def test_unknown_strategy_aborts_selection(self, make_glyph, encoding, registry):
        encoding.value = "klingon"
        g = make_glyph(original_code=0x41)
        with pytest.raises(UnknownEncodingStrategy):
            g.selected = True
        assert not g.selected
        assert len(registry) == 0


class TestCodeEdits:

    def test_swap(self, make_glyph, registry, check_registry):
        a = make_glyph(original_code=5)
        b = make_glyph(original_code=9)
        registry.claim(5, a)
        a._store_selected(True)
        registry.claim(9, b)
        b._store_selected(True)

        a.code = 9

        assert a.code == 9
        assert b.code == 5
        assert registry.owner(9) is a
        assert registry.owner(5) is b
        check_registry([a, b])

    def test_swap_between_allocated_glyphs(self, make_glyph, registry, check_registry):
        a = make_glyph()
        b = make_glyph()
        a.selected = True
        b.selected = True
        assert (a.code, b.code) == (0xE800, 0xE801)

        b.code = 0xE800

        assert (a.code, b.code) == (0xE801, 0xE800)
        check_registry([a, b])

    def test_edit_to_free_code(self, make_glyph, registry, check_registry):
        g = make_glyph()
        g.selected = True
        g.code = 0x2605
        assert registry.owner(0x2605) is g
        assert registry.owner(0xE800) is None
        check_registry([g])

    def test_edit_deselected_glyph_has_no_registry_effect(self, make_glyph, registry):
        a = make_glyph()
        b = make_glyph()
        a.selected = True
        b.code = a.code
        assert registry.owner(a.code) is a
        assert registry.codes_of(b) == ()

    def test_same_value_is_not_a_change(self, make_glyph):
        g = make_glyph()
        g.selected = True
        emitted = []
        g.code_changed.connect(emitted.append)
        g.code = g.code
        assert emitted == []

    def test_no_double_ownership_during_swap(self, make_glyph, registry):
        a = make_glyph()
        b = make_glyph()
        a.selected = True
        b.selected = True
        snapshots = []

        def on_b_changed(code):
            snapshots.append(dict(registry.items()))

        b.code_changed.connect(on_b_changed)
        a.code = b.code

        assert len(snapshots) == 1
        snapshot = snapshots[0]
        owners = list(snapshot.values())
        assert len(owners) == len(set(map(id, owners)))
        for code, owner in snapshot.items():
            assert owner.code == code

    def test_signals_fire_after_reconciliation(self, make_glyph, registry):
        g = make_glyph()
        seen = []
        g.selected_changed.connect(lambda selected: seen.append(("selected", selected, registry.owner(g.code) is g)))
        g.code_changed.connect(lambda code: seen.append(("code", code, registry.owner(code) is g)))
        g.selected = True
        assert seen == [("code", 0xE800, True), ("selected", True, True)]


class TestObserve:

    def test_observe_is_idempotent(self, tracker, make_glyph):
        g = make_glyph()
        tracker.observe(g)
        assert tracker.glyphs == [g]

    def test_observe_by_another_tracker(self, make_glyph):
        g = make_glyph()
        with pytest.raises(ValueError):
            CodeTracker(encoding=lambda: "pua").observe(g)

    def test_rebuild_from_selected_glyphs(self, tracker, registry, check_registry):
        a = GlyphModel("a", original_code=0x41, code=0xE805, selected=True)
        b = GlyphModel("b", original_code=0x42, code=0xE805, selected=True)
        c = GlyphModel("c", original_code=0x43, code=0xE806, selected=False)
        for glyph in (a, b, c):
            tracker.observe(glyph)
        assert registry.owner(0xE805) is a
        assert b.code == 0xE800
        assert registry.codes_of(c) == ()
        check_registry([a, b, c])

    def test_unobserved_glyph_has_no_registry_effect(self, registry):
        g = GlyphModel("loose", original_code=0x41)
        g.selected = True
        g.code = 0x42
        assert g.code == 0x42
        assert len(registry) == 0


class TestSessionLifecycle:

    def test_reset(self, tracker, make_glyph, registry):
        a = make_glyph()
        a.selected = True
        tracker.reset()
        assert len(registry) == 0
        assert tracker.glyphs == []
        assert a.tracker is None

    def test_reallocate_after_encoding_change(self, tracker, make_glyph, encoding, check_registry):
        a = make_glyph(original_code=0x2605)
        b = make_glyph(original_code=0x2606)
        c = make_glyph(original_code=0x2607)
        a.selected = True
        b.selected = True
        encoding.value = "unicode"
        tracker.reallocate()
        assert (a.code, b.code) == (0x2605, 0x2606)
        assert c.code == 0x2607 and not c.selected
        check_registry([a, b, c])

    def test_reallocate_with_explicit_strategy(self, tracker, make_glyph, check_registry):
        a = make_glyph(original_code=0x2605)
        b = make_glyph(original_code=0x2606)
        a.selected = True
        b.selected = True
        tracker.reallocate("ascii")
        assert (a.code, b.code) == (0x21, 0x22)
        check_registry([a, b])


def test_random_edits_keep_registry_consistent(tracker, make_glyph, encoding, check_registry):
    rng = random.Random(1234)
    pool = [0x41, 0x42, 0x43, 0x2605, 0xE800, 0xE801, 0xE802]
    glyphs = [make_glyph(original_code=rng.choice(pool)) for _ in range(8)]

    for _ in range(500):
        glyph = rng.choice(glyphs)
        action = rng.random()
        if action < 0.1:
            encoding.value = rng.choice(["pua", "ascii", "unicode"])
        elif action < 0.5:
            glyph.selected = not glyph.selected
        else:
            glyph.code = rng.choice(pool)
        check_registry(glyphs)

    for glyph in glyphs:
        if glyph.selected:
            assert is_legal_codepoint(glyph.code)


class TestFailureAndEdgeCases:

    def test_failed_reallocate_keeps_previous_codes(self, tracker, make_glyph, encoding, registry, check_registry):
        encoding.value = "unicode"
        a = make_glyph(original_code=0x2605)
        b = make_glyph(original_code=0x2606)
        a.selected = True
        b.selected = True
        for code in range(UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX):
            registry.claim(code, USED)

        with pytest.raises(AllocationSpaceExhausted):
            tracker.reallocate("pua")

        assert (a.code, b.code) == (0x2605, 0x2606)
        assert registry.owner(0x2605) is a
        assert registry.owner(0x2606) is b
        assert registry.owner(UNICODE_PRIVATE_USE_AREA_MAX) is None

        c = make_glyph(original_code=0x2606)
        c.selected = True
        assert c.code == UNICODE_PRIVATE_USE_AREA_MAX
        check_registry([a, b, c])

    def test_swap_without_previous_code_reallocates_owner(self, make_glyph, registry, check_registry):
        a = make_glyph()
        b = make_glyph()
        a.selected = True
        b.selected = True
        a.code = None
        assert registry.owner(0xE800) is None

        a.code = 0xE801

        assert a.code == 0xE801
        assert b.code == 0xE800
        assert b.selected
        assert registry.owner(0xE800) is b
        assert registry.owner(0xE801) is a
        check_registry([a, b])

    def test_swap_guard_skips_visited_glyph(self, tracker, make_glyph, registry):
        a = make_glyph()
        b = make_glyph()
        a.selected = True
        b.selected = True

        tracker._apply_code(a, 0xE801, {id(b)})

        assert a.code == 0xE801
        assert b.code == 0xE801
        assert registry.owner(0xE801) is a
        assert registry.owner(0xE800) is None
