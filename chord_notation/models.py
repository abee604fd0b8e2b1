"""Chord model built from a root key, bass key and opaque suffix.

This module provides the ``Chord`` value that the chord grammar produces and
that document formatters transpose, convert and re-render one chord token at a
time.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, replace

from chord_notation.errors import ChordParseError
from chord_notation.key import Key
from chord_notation.scales import Accidental, Notation

# A leading "m" quality, but not the start of "maj"
MINOR_QUALITY_RE = re.compile(r"^m(?!aj|AJ)")


def _without_minor_quality(suffix: str | None) -> str | None:
    if suffix and MINOR_QUALITY_RE.match(suffix):
        return suffix[1:] or None
    return suffix


def _with_minor_quality(suffix: str | None) -> str:
    if suffix and MINOR_QUALITY_RE.match(suffix):
        return suffix
    return f"m{suffix or ''}"


@dataclass(frozen=True)
class Chord:
    """Structured chord.

    Parameters
    ----------
    root : Key | None
        The root key. None only for bass-only fragments such as "/G".
    bass : Key | None
        The bass key of a slash chord.
    suffix : str | None
        Quality and extensions exactly as written (e.g., "m7", "sus4",
        "maj7(add9)"). Never interpreted beyond a leading minor "m".
    optional : bool
        Whether the chord was written in parentheses.

    Examples
    --------
    >>> chord = Chord.parse("Ebsus4/Bb")
    >>> chord.suffix
    'sus4'
    >>> str(chord.transpose(2))
    'Fsus4/C'
    >>> str(Chord.parse("Am").to_numeral("C"))
    'vi'
    """

    root: Key | None = None
    bass: Key | None = None
    suffix: str | None = None
    optional: bool = False

    @classmethod
    def parse(cls, text: str | None) -> Chord | None:
        """Parse a chord string, returning None if it is not a chord."""
        from chord_notation.parser import parse_chord

        return parse_chord(text)

    @classmethod
    def parse_strict(cls, text: str | None) -> Chord:
        """Parse a chord string, raising ``ChordParseError`` on failure."""
        chord = cls.parse(text)
        if chord is None:
            msg = f"Failed to parse chord: {text!r}"
            raise ChordParseError(msg)
        return chord

    # --- Queries ---

    @property
    def is_minor(self) -> bool:
        return self.root is not None and self.root.minor

    @property
    def notation(self) -> Notation | None:
        """Notation of the root, or of the bass for bass-only fragments."""
        key = self.root or self.bass
        return key.notation if key else None

    def has_notation(self, notation: Notation) -> bool:
        """True when every key present in the chord uses ``notation``."""
        return all(key.notation == notation for key in (self.root, self.bass) if key is not None)

    # --- Transformations ---

    def map_keys(self, func: Callable[[Key], Key]) -> Chord:
        """Apply ``func`` to the root and bass keys that are present."""
        return replace(
            self,
            root=func(self.root) if self.root else None,
            bass=func(self.bass) if self.bass else None,
        )

    def transpose(self, delta: int) -> Chord:
        """Transpose root and bass by ``delta`` semitones."""
        return self.map_keys(lambda key: key.transpose(delta))

    def transpose_up(self) -> Chord:
        return self.map_keys(Key.transpose_up)

    def transpose_down(self) -> Chord:
        return self.map_keys(Key.transpose_down)

    def use_accidental(self, accidental: Accidental | None) -> Chord:
        """Force sharp or flat spelling on root and bass.

        Examples
        --------
        >>> str(Chord.parse("C#m/G#").use_accidental("flat"))
        'Dbm/Ab'
        """
        return self.map_keys(lambda key: key.use_accidental(accidental))

    def normalize(self) -> Chord:
        """Drop E#, B#, Fb and Cb spellings from root and bass."""
        return self.map_keys(Key.normalize)

    # --- Notation conversion ---

    def to_chord_symbol(self, reference_key: Key | str | None = None) -> Chord:
        """Convert to chord symbols, placing degrees relative to ``reference_key``.

        Examples
        --------
        >>> str(Chord.parse("vi7").to_chord_symbol("C"))
        'Am7'
        >>> str(Chord.parse("b7/1").to_chord_symbol("G"))
        'F/G'
        """
        return self._convert("symbol", lambda key: key.to_chord_symbol(reference_key))

    def to_chord_solfege(self, reference_key: Key | str | None = None) -> Chord:
        """Convert to solfege."""
        return self._convert("solfege", lambda key: key.to_chord_solfege(reference_key))

    def to_numeric(self, reference_key: Key | str | None = None) -> Chord:
        """Convert to numeric scale degrees relative to ``reference_key``."""
        return self._convert("numeric", lambda key: key.to_numeric(reference_key))

    def to_numeral(self, reference_key: Key | str | None = None) -> Chord:
        """Convert to roman numerals relative to ``reference_key``.

        A minor root is shown by lowercase letters, so a leading minor "m"
        quality moves out of the suffix.
        """
        return self._convert("numeral", lambda key: key.to_numeral(reference_key))

    def _convert(self, notation: Notation, func: Callable[[Key], Key]) -> Chord:
        if self.has_notation(notation):
            return replace(self)

        converted = self.map_keys(func)
        if not self.is_minor:
            return converted
        if notation == "numeral":
            return replace(converted, suffix=_without_minor_quality(self.suffix))
        if self.notation == "numeral":
            return replace(converted, suffix=_with_minor_quality(self.suffix))
        return converted

    # --- Rendering ---

    def to_string(self, unicode_accidentals: bool = False) -> str:
        """Render the chord.

        The root's minor marker is left out when the suffix already starts
        with "m", so "Am7" does not become "Amm7". A bass is never marked
        minor; a lowercase numeral bass such as "iii" renders as a plain note
        in the other notations.

        Examples
        --------
        >>> Chord.parse("Am7").to_string()
        'Am7'
        >>> Chord.parse("(Bb/D)").to_string(unicode_accidentals=True)
        '(B♭/D)'
        """
        text = ""
        if self.root is not None:
            suffix = self.suffix or ""
            text = self.root.to_string(
                show_minor=not suffix.startswith("m"),
                unicode_accidentals=unicode_accidentals,
            )
            text += suffix
        if self.bass is not None:
            text += "/" + self.bass.to_string(
                show_minor=False, unicode_accidentals=unicode_accidentals
            )
        if self.optional:
            return f"({text})"
        return text

    def __str__(self) -> str:
        return self.to_string()
