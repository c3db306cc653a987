"""Script classification by Unicode block membership."""

from __future__ import annotations

from typing import FrozenSet, Set, Tuple

CYRILLIC = "cyrillic"
LATIN = "latin"

CYRILLIC_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x0400, 0x052F),  # Cyrillic, Cyrillic Supplement
    (0x1C80, 0x1C8F),  # Cyrillic Extended-C
    (0x2DE0, 0x2DFF),  # Cyrillic Extended-A
    (0xA640, 0xA69F),  # Cyrillic Extended-B
)

LATIN_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x0041, 0x005A),
    (0x0061, 0x007A),
    (0x00C0, 0x024F),  # Latin-1 Supplement letters, Extended-A/B
    (0x1E00, 0x1EFF),  # Latin Extended Additional
)

CYRILLIC_LANGUAGES: FrozenSet[str] = frozenset({"uk", "ru", "be", "bg", "sr", "mk", "kk"})


def _in_ranges(code_point: int, ranges: Tuple[Tuple[int, int], ...]) -> bool:
    return any(start <= code_point <= end for start, end in ranges)


def script_of(char: str) -> str:
    """Return the script of a single character, or an empty string."""
    code_point = ord(char)
    if _in_ranges(code_point, CYRILLIC_RANGES):
        return CYRILLIC
    # Latin-1 has two non-letters inside the letter block
    if char in "×÷":
        return ""
    if _in_ranges(code_point, LATIN_RANGES):
        return LATIN
    return ""


def scripts_in(text: str) -> Set[str]:
    """Collect the scripts whose letters occur in ``text``."""
    found: Set[str] = set()
    for char in text:
        script = script_of(char)
        if script:
            found.add(script)
    return found


def script_for_language(language: str) -> str:
    return CYRILLIC if language.lower() in CYRILLIC_LANGUAGES else LATIN


__all__ = ["CYRILLIC", "LATIN", "script_for_language", "script_of", "scripts_in"]
