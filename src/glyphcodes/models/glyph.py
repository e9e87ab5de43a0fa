# -*- coding: utf-8 -*-
"""
src/glyphcodes/models/glyph.py

Defines GlyphModel, the editor-side glyph that the allocation engine tracks.

A glyph carries the codepoint it currently maps to (`code`), whether it is in
the working set (`selected`) and the codepoint it had in its source font
(`original_code`). While a CodeTracker observes the glyph, assignments to
`code` and `selected` are routed through the tracker so the used codes
registry stays consistent. The Qt signals fire once a change has been fully
reconciled, which is when UI widgets should repaint.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class GlyphModel(QObject):
    """
    A single glyph of the editor's working set.

    Signals:
        code_changed (object): Emitted with the new code after it is applied.
        selected_changed (bool): Emitted with the new selection state.
    """
    # The payload may be None for a glyph that never had a code.
    code_changed = pyqtSignal(object)
    selected_changed = pyqtSignal(bool)

    def __init__(
        self,
        uid: str,
        name: str = "",
        original_code: Optional[int] = None,
        code: Optional[int] = None,
        selected: bool = False,
    ):
        """
        Initializes the glyph.

        Args:
            uid (str): Stable identifier of the glyph within its font.
            name (str): Human readable glyph name.
            original_code (Optional[int]): Codepoint from the source font, used
                                           as a preference hint.
            code (Optional[int]): Current codepoint; defaults to original_code.
            selected (bool): Initial selection state.
        """
        super().__init__()
        self.uid = uid
        self.name = name or uid
        self._original_code = original_code
        self._code = original_code if code is None else code
        self._selected = bool(selected)
        self._tracker = None

    # --- Read-only hint ---

    @property
    def original_code(self) -> Optional[int]:
        """The codepoint the glyph had before any reassignment."""
        return self._original_code

    # --- Observable fields ---

    @property
    def code(self) -> Optional[int]:
        return self._code

    @code.setter
    def code(self, value: Optional[int]):
        if self._tracker is not None:
            self._tracker.set_code(self, value)
        elif value != self._code:
            self._store_code(value)
            self.code_changed.emit(value)

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool):
        value = bool(value)
        if self._tracker is not None:
            self._tracker.set_selected(self, value)
        elif value != self._selected:
            self._store_selected(value)
            self.selected_changed.emit(value)

    @property
    def tracker(self):
        """The CodeTracker observing this glyph, if any."""
        return self._tracker

    # --- Hooks used by CodeTracker ---

    def _attach_tracker(self, tracker) -> None:
        self._tracker = tracker

    def _store_code(self, value: Optional[int]) -> None:
        """Writes the code without any registry bookkeeping or signal."""
        self._code = value

    def _store_selected(self, value: bool) -> None:
        self._selected = value

    def __repr__(self) -> str:
        code = "None" if self._code is None else f"U+{self._code:04X}"
        return f"<GlyphModel {self.name!r} code={code} selected={self._selected}>"
