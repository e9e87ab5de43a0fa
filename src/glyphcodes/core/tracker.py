# -*- coding: utf-8 -*-
"""
src/glyphcodes/core/tracker.py

Keeps the used codes registry in step with the glyphs of the working set.

The CodeTracker reacts to three kinds of glyph events:

1. A glyph's code is about to change: the registry entry it owns at the old
   code is cleared and the old code is remembered.
2. A glyph's code has changed while it is selected: if another glyph owns the
   new code the two swap codes, then the new code is claimed.
3. A glyph is selected or deselected: a code is allocated under the active
   encoding strategy, or the glyph's slot is released (its `code` value is
   kept as a hint for later reselection).

Steps 1 and 2 run as one explicit operation, `set_code`, so the ordering
(clear before write, write before claim) is fixed in code rather than left to
subscription order.
"""

import logging
from typing import Callable, List, Optional, Set

from .allocator import EncodingStrategy, allocate, choose_code
from .codepoints import format_codepoint, is_available
from .errors import CodeAllocationError
from .registry import CodeRegistry

logger = logging.getLogger(__name__)


def _configured_encoding() -> str:
    """Reads the encoding strategy from the application configuration."""
    from ..config import get_config
    return get_config().encoding


class CodeTracker:
    """
    Observes glyphs and allocates, releases and swaps their codepoints.

    Without an `encoding` callable the tracker reads the strategy from
    `glyphcodes.config`, which touches the per-user config file. Pass one to
    keep the tracker free of file I/O.

    Attributes:
        registry (CodeRegistry): The used codes of this editing session.
    """

    def __init__(
        self,
        registry: Optional[CodeRegistry] = None,
        encoding: Optional[Callable[[], object]] = None,
    ):
        """
        Initializes the tracker.

        Args:
            registry (Optional[CodeRegistry]): Registry to maintain. A new, empty
                                               one is created if omitted.
            encoding (Optional[Callable]): Returns the active encoding strategy.
                                           Called on every allocation, never
                                           cached. Defaults to the configured
                                           strategy, in which case the first
                                           allocation loads the config and
                                           creates config.ini if it is missing.
        """
        self.registry = registry if registry is not None else CodeRegistry()
        self._encoding = encoding or _configured_encoding
        self._glyphs: List = []

    @property
    def glyphs(self) -> list:
        """The observed glyphs, in observation order."""
        return list(self._glyphs)

    def observe(self, glyph) -> None:
        """
        Starts tracking a glyph.

        Once observed, assignments to `glyph.code` and `glyph.selected` go
        through this tracker. A glyph that is already selected takes its
        current code if that code is free, otherwise it gets a new one. This
        is how the registry is rebuilt from saved glyph states.

        Raises:
            ValueError: If the glyph is already observed by another tracker.
        """
        if glyph.tracker is self:
            logger.debug(f"{glyph!r} is already observed.")
            return
        if glyph.tracker is not None:
            raise ValueError(f"{glyph!r} is already observed by another tracker.")

        glyph._attach_tracker(self)
        self._glyphs.append(glyph)
        logger.debug(f"Observing {glyph!r}.")

        if glyph.selected:
            if is_available(glyph.code, self.registry):
                self.registry.claim(glyph.code, glyph)
            else:
                allocate(glyph, self._encoding(), self.registry)

    def set_code(self, glyph, code: Optional[int]) -> None:
        """
        Changes a glyph's code and reconciles the registry.

        If the glyph is selected and another glyph owns `code`, that other
        glyph receives this glyph's previous code. When there is no previous
        code to hand over, the other glyph is allocated a fresh one instead.

        Args:
            glyph: The glyph to change.
            code (Optional[int]): The new code.
        """
        self._apply_code(glyph, code, set())

    def _apply_code(self, glyph, code: Optional[int], visited: Set[int]) -> None:
        """Runs one step of `set_code`; `visited` holds ids of glyphs already moved."""
        previous = glyph.code
        if code == previous:
            return

        visited.add(id(glyph))

        # Before change: free the old slot.
        self.registry.release(previous, glyph)

        glyph._store_code(code)

        # After change: claim the new slot, swapping with its owner.
        if glyph.selected and code is not None:
            other = self.registry.owner(code)
            if other is not None and other is not glyph:
                if id(other) in visited:
                    logger.warning(f"Swap chain returned to {other!r}, not swapping again.")
                elif previous is None:
                    logger.debug(f"{glyph!r} had no code to hand over, reallocating {other!r}.")
                    allocate(other, self._encoding(), self.registry)
                else:
                    logger.debug(
                        f"Swapping {format_codepoint(code)} from {other!r} "
                        f"to {glyph!r}, giving it {format_codepoint(previous)}."
                    )
                    self._apply_code(other, previous, visited)
            self.registry.claim(code, glyph)

        glyph.code_changed.emit(code)

    def set_selected(self, glyph, selected: bool) -> None:
        """
        Selects or deselects a glyph.

        Selecting allocates a code under the active encoding strategy. If the
        allocation fails the glyph is left deselected and the error propagates.
        Deselecting frees the glyph's slot but keeps its code value.
        """
        selected = bool(selected)
        if selected == glyph.selected:
            return

        if selected:
            glyph._store_selected(True)
            try:
                allocate(glyph, self._encoding(), self.registry)
            except CodeAllocationError:
                glyph._store_selected(False)
                raise
        else:
            self.registry.release(glyph.code, glyph)
            glyph._store_selected(False)
            logger.debug(f"Released {format_codepoint(glyph.code)} held by {glyph!r}.")

        glyph.selected_changed.emit(selected)

    def reallocate(self, strategy=None) -> None:
        """
        Reassigns codes to every selected glyph, e.g. after the encoding
        setting changed.

        New codes are chosen in observation order against a copy of the
        registry in which every selected glyph's slot is free. Nothing changes
        unless every glyph gets a code, so a failed reallocation leaves the
        previous assignment in place.

        Args:
            strategy: Strategy to use; defaults to the active setting.

        Raises:
            AllocationSpaceExhausted: If the glyphs do not all fit.
            UnknownEncodingStrategy: For an unsupported strategy value.
        """
        strategy = EncodingStrategy.parse(self._encoding() if strategy is None else strategy)
        selected = [glyph for glyph in self._glyphs if glyph.selected]
        logger.info(f"Reallocating {len(selected)} glyphs with '{strategy.value}' encoding.")

        trial = self.registry.copy()
        for glyph in selected:
            trial.release(glyph.code, glyph)
        plan = []
        for glyph in selected:
            code = choose_code(glyph, strategy, trial)
            trial.claim(code, glyph)
            plan.append((glyph, code))

        for glyph in selected:
            self.registry.release(glyph.code, glyph)
        for glyph, code in plan:
            self.set_code(glyph, code)
            self.registry.claim(code, glyph)

    def reset(self) -> None:
        """Stops tracking every glyph and empties the registry."""
        for glyph in self._glyphs:
            glyph._attach_tracker(None)
        self._glyphs.clear()
        self.registry.clear()
