"""Chord string grammar.

A chord is written as ``root [quality] [extensions] ["/" bass]``, optionally
wrapped in parentheses to mark it optional. Four grammars exist, one per
notation, plus four bass-only grammars ("/G", "/b3") for fragments emitted by
line-oriented sheet parsers. They are tried in a fixed order. The first grammar
whose root matches the start of the input owns it: if the rest of the input
does not fit that grammar, the input is not a chord and later grammars are not
tried.

1. numeral ("bVII7", "vi")
2. numeric ("#4/b3")
3. solfege ("Sol#m", "Fa" but not "Fadd9")
4. symbol ("Ebsus4/Bb")
5. bass-only numeral, numeric, solfege, symbol

The order settles the ambiguous prefixes: a bare "I" is always a numeral, "Do"
is always solfege and never D with an "o" extension, so "Do/E" is not a chord.

A "♯" or "♭" directly after a symbol or solfege root is read as its
accidental, exactly like "#" and "b": "C♭5" is Cb with a 5 extension. Altered
fifths are written in parentheses, as in "C7(♭5)".
"""

from __future__ import annotations

import logging
import re

from chord_notation.key import Key
from chord_notation.models import Chord
from chord_notation.scales import Notation, accidental_from_sign

logger = logging.getLogger(__name__)

MAX_CHORD_LENGTH = 32

ACCIDENTAL = r"[#b♯♭]"

# "m" must not swallow the start of "maj"
QUALITY = r"(?P<quality>m(?!aj|AJ)|dim|Dim|DIM|aug|Aug|AUG|sus4|sus2|sus)?"

EXTENSION_CHAR = r"[A-Za-z0-9#+\-o♭♯Δ]"
EXTENSIONS = rf"(?P<extensions>(?:\({EXTENSION_CHAR}+\)|{EXTENSION_CHAR})+)?"

SYMBOL_NAME = r"[A-Ga-g]"
SOLFEGE_NAME = r"Sol|sol|Do|do|Re|re|Mi|mi|Fa|fa|La|la|Si|si"
SOLFEGE_ROOT_NAME = r"Sol|sol|Do|do|Re|re|Mi|mi|Fa(?!dd|DD|ug|UG)|fa(?!dd|ug)|La|la|Si|si"
NUMERAL_NAME = r"III|iii|VII|vii|II|ii|IV|iv|VI|vi|I|i|V|v"
NUMERIC_NAME = r"[1-7]"


def _trailing(group: str, names: str) -> str:
    return rf"(?P<{group}>{names})(?P<{group}_accidental>{ACCIDENTAL})?"


def _leading(group: str, names: str) -> str:
    return rf"(?P<{group}_accidental>{ACCIDENTAL})?(?P<{group}>{names})"


def _grammar(
    notation: Notation, root: str, bass: str
) -> tuple[Notation, re.Pattern[str], re.Pattern[str]]:
    return (
        notation,
        re.compile(root),
        re.compile(rf"{root}{QUALITY}{EXTENSIONS}(?:/{bass})?"),
    )


# (notation, root pattern, whole-chord pattern). A grammar whose root matches
# the start of the input owns it; later grammars are not tried.
CHORD_GRAMMARS: tuple[tuple[Notation, re.Pattern[str], re.Pattern[str]], ...] = (
    _grammar("numeral", _leading("root", NUMERAL_NAME), _leading("bass", NUMERAL_NAME)),
    _grammar("numeric", _leading("root", NUMERIC_NAME), _leading("bass", NUMERIC_NAME)),
    _grammar("solfege", _trailing("root", SOLFEGE_ROOT_NAME), _trailing("bass", SOLFEGE_NAME)),
    _grammar("symbol", _trailing("root", SYMBOL_NAME), _trailing("bass", SYMBOL_NAME)),
)

BASS_ONLY_GRAMMARS: tuple[tuple[Notation, re.Pattern[str]], ...] = (
    ("numeral", re.compile(rf"/{_leading('bass', NUMERAL_NAME)}")),
    ("numeric", re.compile(rf"/{_leading('bass', NUMERIC_NAME)}")),
    ("solfege", re.compile(rf"/{_trailing('bass', SOLFEGE_NAME)}")),
    ("symbol", re.compile(rf"/{_trailing('bass', SYMBOL_NAME)}")),
)

# Line classifiers only consider tokens starting like a chord
CHORD_START_RE = re.compile(r"^[A-Z#(]")


def _normalize_quality(quality: str | None) -> str:
    if not quality:
        return ""
    if quality.lower() in ("dim", "aug"):
        return quality.lower()
    return quality


def _bass_key(notation: Notation, match: re.Match[str]) -> Key | None:
    name = match.group("bass")
    if name is None:
        return None
    return Key.resolve(notation, name, accidental_from_sign(match.group("bass_accidental")))


def _build_chord(notation: Notation, match: re.Match[str]) -> Chord | None:
    quality = _normalize_quality(match.group("quality"))
    suffix = quality + (match.group("extensions") or "")

    root = Key.resolve(
        notation,
        match.group("root"),
        accidental_from_sign(match.group("root_accidental")),
        minor=quality == "m",
    )
    if root is None:
        return None
    return Chord(root=root, bass=_bass_key(notation, match), suffix=suffix or None)


def _parse_full_chord(text: str) -> Chord | None:
    for notation, root_pattern, pattern in CHORD_GRAMMARS:
        if root_pattern.match(text) is None:
            continue
        match = pattern.fullmatch(text)
        if match is None:
            logger.debug("Input %r starts with a %s root but is not a chord", text, notation)
            return None
        return _build_chord(notation, match)
    return None


def _parse_bass_only(text: str) -> Chord | None:
    for notation, pattern in BASS_ONLY_GRAMMARS:
        match = pattern.fullmatch(text)
        if match is not None:
            return Chord(bass=_bass_key(notation, match))
    return None


def parse_chord(text: str | None) -> Chord | None:
    """Parse a chord string into a Chord object.

    Parameters
    ----------
    text : str | None
        The chord string. Surrounding whitespace is ignored.

    Returns
    -------
    Chord | None
        The parsed chord, or None if the whole string does not match any
        grammar.

    Examples
    --------
    >>> parse_chord("F#m7/C#").suffix
    'm7'
    >>> parse_chord("(Am)").optional
    True
    >>> parse_chord("#4/b3").root.notation
    'numeric'
    >>> parse_chord("not_a_chord!!!") is None
    True
    """
    if text is None:
        return None
    stripped = text.strip()
    if not stripped:
        return None

    if stripped.startswith("(") and stripped.endswith(")"):
        chord = _parse_full_chord(stripped[1:-1])
        if chord is not None:
            return Chord(root=chord.root, bass=chord.bass, suffix=chord.suffix, optional=True)

    chord = _parse_full_chord(stripped) or _parse_bass_only(stripped)
    if chord is None:
        logger.debug("No chord grammar matches %r", text)
    return chord


def is_chord(text: str) -> bool:
    """Check whether a whitespace-free token is a chord.

    Intended for line classifiers: the token must start like a chord (an
    uppercase letter, "#" or "(") and parse completely. Lowercase words such as
    "am" or "do" in lyrics are therefore not chords.

    Examples
    --------
    >>> is_chord("Gm7")
    True
    >>> is_chord("Hello")
    False
    >>> is_chord("am")
    False
    """
    if not text or len(text) > MAX_CHORD_LENGTH:
        return False
    if not CHORD_START_RE.match(text):
        return False
    return parse_chord(text) is not None
