"""Text normalization utilities for playlist search.

This module handles the three query-side text concerns of the search
engine:

1. **Normalization** -- Case-folds, strips accents, and collapses
   punctuation so "Conferencia de Jóvenes 2025!" and
   "conferencia de jovenes 2025" compare equal.

2. **Year token extraction** -- Pulls year references out of normalized
   text (``"2025"``, ``"25"``, and the attached shorthand ``"yc25"``) so the
   scorer can boost playlists from those years while matching the rest of
   the query against aliases.

3. **Synonym expansion** -- Generates bilingual variants of a phrase
   ("conf" / "conference" / "conferencia", "jovenes" / "youth") so Spanish
   and English queries reach the same playlists.

Every function here is pure and total: empty input yields empty output,
never an exception.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize text for search matching.

    Steps, in order: case-fold, strip diacritics, replace anything outside
    ``[a-z0-9]`` with a space, collapse whitespace, trim.

    Example: ``"Jóvenes 2025"`` -> ``"jovenes 2025"``

    Args:
        text: Raw query or alias text.

    Returns:
        Lowercase ASCII alphanumerics separated by single spaces.
    """
    folded = text.casefold()

    # NFKD splits "ó" into "o" + U+0301; dropping the combining marks
    # leaves the base letter.
    decomposed = unicodedata.normalize("NFKD", folded)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    spaced = _NON_ALNUM.sub(" ", stripped)
    return _WHITESPACE.sub(" ", spaced).strip()


# ------------------------------------------------------------------
# Year token extraction
# ------------------------------------------------------------------

# Applied in this order; each pass removes what it matched before the next runs.
_FOUR_DIGIT_YEAR = re.compile(r"\b(20[0-9]{2})\b")
_TWO_DIGIT_TOKEN = re.compile(r"\b([0-9]{2})\b")
# "yc25" -> letters kept, digits dropped.  Only a 2-digit run directly
# before whitespace or end-of-string qualifies.
_ATTACHED_TWO_DIGIT = re.compile(r"([a-z]+)([0-9]{2})(?:\s|$)")


@dataclass(frozen=True)
class YearExtractionResult:
    """Years found in a query and the query text with them removed."""

    years: list[int] = field(default_factory=list)
    normalized: str = ""


def extract_year_tokens(normalized: str) -> YearExtractionResult:
    """Extract year tokens from normalized text.

    Detects 4-digit years (2000-2099), standalone 2-digit tokens
    (``"25"`` -> 2025), and 2-digit suffixes attached to a word
    (``"yc25"`` -> 2025, leaving ``"yc"``).

    Args:
        normalized: Output of :func:`normalize_text`.

    Returns:
        A :class:`YearExtractionResult` with years sorted ascending.
    """
    years: set[int] = set()

    def _take_four_digit(match: re.Match[str]) -> str:
        years.add(int(match.group(1)))
        return " "

    def _take_two_digit(match: re.Match[str]) -> str:
        years.add(2000 + int(match.group(1)))
        return " "

    def _take_attached(match: re.Match[str]) -> str:
        years.add(2000 + int(match.group(2)))
        return match.group(1) + " "

    text = _FOUR_DIGIT_YEAR.sub(_take_four_digit, normalized)
    text = _TWO_DIGIT_TOKEN.sub(_take_two_digit, text)
    text = _ATTACHED_TWO_DIGIT.sub(_take_attached, text)

    return YearExtractionResult(
        years=sorted(years),
        normalized=_WHITESPACE.sub(" ", text).strip(),
    )


# ------------------------------------------------------------------
# Synonym expansion
# ------------------------------------------------------------------

# Each group is fully interchangeable: any member present as a whole word
# is replaced by every other member.
_SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ("conf", "conference", "conferencia"),
    ("jovenes", "youth"),
)

# "youth conference" collapses to the audience word alone, in both languages.
_COMPOUND_PHRASES: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    (re.compile(r"\byouth\s+(?:conference|conf)\b"), ("youth", "jovenes")),
    (re.compile(r"\bjovenes\s+(?:conference|conf)\b"), ("jovenes", "youth")),
)


def _word_pattern(word: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(word)}\b")


_WORD_PATTERNS: dict[str, re.Pattern[str]] = {
    word: _word_pattern(word) for group in _SYNONYM_GROUPS for word in group
}


def expand_synonyms(normalized: str) -> set[str]:
    """Expand bilingual synonyms to generate search variants.

    Supports ``conf`` / ``conference`` / ``conferencia`` and
    ``jovenes`` / ``youth``, plus the compound "youth conference" forms
    which also yield the bare audience word.  Substitutions are whole-word
    and each produces its own variant; the input is always included.

    Args:
        normalized: Output of :func:`normalize_text` (or of
            :func:`extract_year_tokens`).

    Returns:
        The set of variants, including *normalized* itself.
    """
    variants = {normalized}

    for group in _SYNONYM_GROUPS:
        for word in group:
            pattern = _WORD_PATTERNS[word]
            if not pattern.search(normalized):
                continue
            for replacement in group:
                if replacement != word:
                    variants.add(pattern.sub(replacement, normalized))

    for pattern, replacements in _COMPOUND_PHRASES:
        if pattern.search(normalized):
            for replacement in replacements:
                variants.add(pattern.sub(replacement, normalized))

    return variants
