# -*- coding: utf-8 -*-
"""
src/glyphcodes/core/registry.py

Defines the CodeRegistry, the table of used codepoints for one editing session.

The registry maps a codepoint to the glyph that currently owns it. It is not
an independent source of truth: the tracker keeps it in step with each
selected glyph's own `code` value, so that whenever a code has an owner, that
owner's `code` equals the key.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class CodeRegistry:
    """
    Keeps track of which glyph owns which codepoint.

    A code with no entry is free. At most one glyph owns a given code.
    """

    def __init__(self):
        """Initializes an empty registry."""
        self._owners: Dict[int, Any] = {}

    def get(self, code: int, default=None):
        """Returns the glyph owning `code`, or `default` if it is free."""
        return self._owners.get(code, default)

    def owner(self, code: int) -> Optional[Any]:
        """Returns the glyph owning `code`, or None."""
        return self._owners.get(code)

    def is_used(self, code: int) -> bool:
        return code in self._owners

    def claim(self, code: int, glyph: Any) -> None:
        """
        Marks `code` as owned by `glyph`.

        Any previous owner is replaced. Callers are responsible for having
        moved that owner away first.

        Raises:
            ValueError: If `glyph` is None, which would read as a free code.
        """
        if glyph is None:
            raise ValueError(f"Cannot claim code {code!r} for no glyph.")
        previous = self._owners.get(code)
        if previous is not None and previous is not glyph:
            logger.warning(f"Code {code:#06x} taken over from {previous!r} by {glyph!r}.")
        self._owners[code] = glyph

    def release(self, code: int, glyph: Any = None) -> bool:
        """
        Frees `code`.

        Args:
            code (int): The code to free.
            glyph: If given, the entry is only cleared when this glyph is
                   its current owner.

        Returns:
            bool: True if an entry was removed.
        """
        owner = self._owners.get(code)
        if owner is None:
            return False
        if glyph is not None and owner is not glyph:
            return False
        del self._owners[code]
        return True

    def copy(self) -> "CodeRegistry":
        """Returns a registry with the same entries, for trial allocations."""
        clone = CodeRegistry()
        clone._owners = dict(self._owners)
        return clone

    def codes_of(self, glyph: Any) -> Tuple[int, ...]:
        """Returns every code owned by `glyph`, in ascending order."""
        return tuple(sorted(code for code, owner in self._owners.items() if owner is glyph))

    def clear(self) -> None:
        """Forgets every entry. Used when the glyph working set is cleared."""
        logger.debug(f"Clearing registry with {len(self._owners)} used codes.")
        self._owners.clear()

    def items(self):
        return self._owners.items()

    def __contains__(self, code) -> bool:
        return code in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    def __iter__(self) -> Iterator[int]:
        return iter(self._owners)

    def __repr__(self) -> str:
        return f"<CodeRegistry used={len(self._owners)}>"
