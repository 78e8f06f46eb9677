"""Locale-aware string ordering that does not depend on the process locale.

Strings are compared on three levels, the way dictionary collations do:
letters without accents and case first, then accents, then case with
lowercase before uppercase. A final code point comparison keeps the order
total.
"""

from __future__ import annotations

from functools import lru_cache
import unicodedata


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


@lru_cache(maxsize=4096)
def collation_key(text: str) -> tuple[str, str, str, str]:
    """Return a sort key ordering ``text`` the way :func:`locale_compare` does."""
    folded = text.casefold()
    return (_strip_accents(folded), folded, text.swapcase(), text)


def locale_compare(left: str, right: str) -> int:
    """Three-way comparison returning -1, 0 or 1."""
    if left == right:
        return 0
    left_key = collation_key(left)
    right_key = collation_key(right)
    return (left_key > right_key) - (left_key < right_key)


__all__ = ["collation_key", "locale_compare"]
