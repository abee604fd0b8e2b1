"""Musical key model with transposition and notation conversion.

A ``Key`` names a pitch in one of four notations: chord symbols ("F#"),
solfege ("Sol#"), numeric scale degrees ("#4") or roman numerals ("bVII").
Symbol and solfege keys are absolute. Numeric and numeral keys are scale
degrees that only gain a chromatic grade once they are read against a mode;
they are realized into absolute form the first time grade arithmetic is
needed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace

from chord_notation.errors import InvalidKeyError, InvalidReferenceError, KeyParseError
from chord_notation.scales import (
    ROMAN_NUMERALS,
    UNICODE_SIGNS,
    Accidental,
    Mode,
    Notation,
    accidental_from_sign,
    grade_to_note,
    shift_grade,
    spell,
    to_grade,
)

logger = logging.getLogger(__name__)

ABSOLUTE_NOTATIONS: frozenset[Notation] = frozenset({"symbol", "solfege"})
DEGREE_NOTATIONS: frozenset[Notation] = frozenset({"numeric", "numeral"})

# Spellings avoided unless an accidental is forced: E#, B#, Fb, Cb
NO_SHARP_GRADES = frozenset({5, 0})
NO_FLAT_GRADES = frozenset({4, 11})
NO_SHARP_NUMBERS = frozenset({3, 7})
NO_FLAT_NUMBERS = frozenset({1, 4})

_ACCIDENTAL = r"(?P<accidental>[#b♯♭])?"

# Tried in order, the first full match wins
KEY_PATTERNS: tuple[tuple[Notation, re.Pattern[str]], ...] = (
    ("symbol", re.compile(rf"(?P<note>[A-Ga-g]){_ACCIDENTAL}(?P<minor>m)?")),
    (
        "solfege",
        re.compile(
            rf"(?P<note>Do|Re|Mi|Fa|Sol|La|Si|do|re|mi|fa|sol|la|si){_ACCIDENTAL}(?P<minor>m)?"
        ),
    ),
    ("numeric", re.compile(rf"{_ACCIDENTAL}(?P<note>[1-7])(?P<minor>m)?")),
    ("numeral", re.compile(rf"{_ACCIDENTAL}(?P<note>I{{1,3}}|IV|VI{{0,2}}|i{{1,3}}|iv|vi{{0,2}})")),
)


def _canonical_name(notation: Notation, name: str) -> str:
    if notation == "solfege":
        return name.capitalize()
    return name[0].upper() + name[1:]


def _degree_number(notation: Notation, name: str) -> int | None:
    if notation == "numeric":
        return int(name) if name.isdigit() and 1 <= int(name) <= 7 else None
    upper = name.upper()
    if upper in ROMAN_NUMERALS:
        return ROMAN_NUMERALS.index(upper) + 1
    return None


def _mode_of(key: Key) -> Mode:
    return "minor" if key.minor else "major"


def _reference_key(reference: Key | str | None) -> Key:
    key = Key.wrap(reference)
    if key is None:
        msg = f"Cannot resolve reference key: {reference!r}"
        raise InvalidReferenceError(msg)
    return key


@dataclass(frozen=True, eq=False)
class Key:
    """A pitch or scale degree in one of four notations.

    Parameters
    ----------
    notation : Notation
        "symbol", "solfege", "numeric" or "numeral".
    number : int | None
        Scale degree (1-7) of a numeric/numeral key not yet realized.
    grade : int | None
        Chromatic offset once the key is in absolute form.
    reference_grade : int | None
        Base grade the offset is relative to (None counts as 0).
    accidental : Accidental | None
        The accidental as written or chosen; None when absent.
    preferred_accidental : Accidental | None
        Rendering hint used when the grade needs an accidental.
    minor : bool
        Whether the key denotes a minor tonic or chord. Numeral keys derive
        it from the letter case.
    mode : Mode
        Diatonic table that scale degrees are read against.
    explicit_accidental : bool
        True when the accidental was forced with ``use_accidental``; such an
        accidental survives normalization.

    Examples
    --------
    >>> key = Key.parse("F#")
    >>> key.effective_grade
    6
    >>> str(key.transpose(2))
    'G#'
    >>> str(Key.parse("Am").to_numeral("C"))
    'vi'
    """

    notation: Notation
    number: int | None = None
    grade: int | None = None
    reference_grade: int | None = None
    accidental: Accidental | None = None
    preferred_accidental: Accidental | None = None
    minor: bool = False
    mode: Mode = "major"
    explicit_accidental: bool = False

    def __post_init__(self) -> None:
        if self.number is None and self.grade is None:
            msg = "A key needs either a scale degree number or a grade"
            raise InvalidKeyError(msg)

    # --- Construction ---

    @classmethod
    def parse(cls, text: str | None) -> Key | None:
        """Parse a key string in any notation.

        Parameters
        ----------
        text : str | None
            Key string such as "C", "Ebm", "Sol#", "b3", "#IV" or "vi".

        Returns
        -------
        Key | None
            The parsed key, or None if no notation matches.

        Examples
        --------
        >>> Key.parse("Bb").accidental
        'flat'
        >>> Key.parse("vi").minor
        True
        >>> Key.parse("xyz") is None
        True
        """
        if text is None:
            return None
        stripped = text.strip()
        if not stripped:
            return None

        for notation, pattern in KEY_PATTERNS:
            match = pattern.fullmatch(stripped)
            if match is None:
                continue
            key = cls.resolve(
                notation,
                match.group("note"),
                accidental_from_sign(match.group("accidental")),
                minor=bool(match.groupdict().get("minor")),
            )
            if key is not None:
                return key

        logger.debug("No key notation matches %r", text)
        return None

    @classmethod
    def parse_strict(cls, text: str | None) -> Key:
        """Parse a key string, raising ``KeyParseError`` on failure."""
        key = cls.parse(text)
        if key is None:
            msg = f"Failed to parse key: {text!r}"
            raise KeyParseError(msg)
        return key

    @classmethod
    def wrap(cls, value: Key | str | None) -> Key | None:
        """Return keys unchanged and parse strings."""
        if value is None or isinstance(value, Key):
            return value
        return cls.parse(value)

    @classmethod
    def resolve(
        cls,
        notation: Notation,
        name: str,
        accidental: Accidental | None = None,
        minor: bool = False,
    ) -> Key | None:
        """Build a key from a bare note name already known to be in ``notation``.

        Numeral keys ignore ``minor`` and take it from the letter case.

        Examples
        --------
        >>> Key.resolve("solfege", "sol", "sharp").effective_grade
        8
        >>> Key.resolve("numeral", "iv").minor
        True
        """
        if notation in ABSOLUTE_NOTATIONS:
            canonical = _canonical_name(notation, name)
            grade = to_grade(notation, "major", accidental or "natural", canonical)
            if grade is None:
                return None
            return cls(
                notation=notation,
                grade=0,
                reference_grade=grade,
                accidental=accidental,
                preferred_accidental=accidental,
                minor=minor,
            )

        number = _degree_number(notation, name)
        if number is None:
            return None
        if notation == "numeral":
            minor = name == name.lower()
        return cls(
            notation=notation,
            number=number,
            accidental=accidental,
            preferred_accidental=accidental,
            minor=minor,
        )

    # --- Grades ---

    @property
    def is_degree(self) -> bool:
        """True while the key is an unrealized scale degree."""
        return self.number is not None

    @property
    def effective_grade(self) -> int:
        """The absolute chromatic grade (0-11)."""
        realized = self.realize()
        return shift_grade(realized.grade + (realized.reference_grade or 0))  # type: ignore[operator]

    def realize(self, mode: Mode | None = None) -> Key:
        """Return the key in absolute form.

        Scale degrees are read against ``mode``, defaulting to the key's own
        mode. Keys already in absolute form are returned unchanged.
        """
        if self.number is None:
            return self
        mode = mode or self.mode
        grade = to_grade("numeric", mode, self.accidental or "natural", str(self.number))
        return replace(self, number=None, grade=grade, mode=mode)

    def with_mode(self, mode: Mode) -> Key:
        """Read this key's scale degrees against another diatonic table.

        Examples
        --------
        >>> Key.parse("3").effective_grade
        4
        >>> Key.parse("3").with_mode("minor").effective_grade
        3
        """
        return replace(self, mode=mode)

    def change_grade(self, delta: int) -> Key:
        """Move the key by ``delta`` semitones without touching accidentals."""
        if self.reference_grade is not None:
            return replace(self, reference_grade=shift_grade(self.reference_grade + delta))
        realized = self.realize()
        return replace(realized, grade=shift_grade(realized.grade + delta))  # type: ignore[operator]

    @staticmethod
    def distance(from_key: Key | str, to_key: Key | str) -> int:
        """Semitones from ``from_key`` up to ``to_key`` (0-11).

        Examples
        --------
        >>> Key.distance("C", "G")
        7
        >>> Key.distance("G", "C")
        5
        """
        start = from_key if isinstance(from_key, Key) else Key.parse_strict(from_key)
        end = to_key if isinstance(to_key, Key) else Key.parse_strict(to_key)
        return shift_grade(end.effective_grade - start.effective_grade)

    # --- Accidentals ---

    def can_be_sharp(self) -> bool:
        if self.number is not None:
            return self.number not in NO_SHARP_NUMBERS
        return self.effective_grade not in NO_SHARP_GRADES

    def can_be_flat(self) -> bool:
        if self.number is not None:
            return self.number not in NO_FLAT_NUMBERS
        return self.effective_grade not in NO_FLAT_GRADES

    def normalize(self) -> Key:
        """Drop a sharp or flat that would spell E#, B#, Fb or Cb.

        Accidentals forced with ``use_accidental`` are kept.

        Examples
        --------
        >>> str(Key.parse("E#").normalize())
        'F'
        >>> str(Key.parse("C").use_accidental("sharp").normalize())
        'B#'
        """
        key = self.realize()
        if key.explicit_accidental:
            return key
        if key.accidental == "sharp" and not key.can_be_sharp():
            return replace(key, accidental=None)
        if key.accidental == "flat" and not key.can_be_flat():
            return replace(key, accidental=None)
        return key

    def use_accidental(self, accidental: Accidental | None) -> Key:
        """Force the accidental used to spell this key.

        Examples
        --------
        >>> str(Key.parse("C#").use_accidental("flat"))
        'Db'
        """
        return replace(
            self.realize(),
            accidental=accidental,
            explicit_accidental=accidental is not None,
        )

    # --- Transposition ---

    def transpose(self, delta: int) -> Key:
        """Transpose by ``delta`` semitones, keeping the original accidental.

        Whole octaves leave the key untouched.

        Examples
        --------
        >>> str(Key.parse("C").transpose(1))
        'C#'
        >>> str(Key.parse("F#").transpose(2))
        'G#'
        >>> str(Key.parse("C").transpose(-2))
        'Bb'
        """
        if delta % 12 == 0:
            return self

        key = self
        for _ in range(abs(delta)):
            key = key.transpose_up() if delta > 0 else key.transpose_down()

        return replace(
            key,
            accidental=self.accidental,
            explicit_accidental=self.explicit_accidental,
        ).normalize()

    def transpose_up(self) -> Key:
        """Transpose up one semitone, spelling with sharps."""
        moved = self.normalize().change_grade(1)
        if self.accidental is not None or not moved.can_be_sharp():
            accidental: Accidental | None = None
        else:
            accidental = "sharp"
        return replace(
            moved,
            accidental=accidental,
            preferred_accidental="sharp",
            explicit_accidental=False,
        ).normalize()

    def transpose_down(self) -> Key:
        """Transpose down one semitone, spelling with flats."""
        moved = self.normalize().change_grade(-1)
        if self.accidental is not None or not moved.can_be_flat():
            accidental: Accidental | None = None
        else:
            accidental = "flat"
        return replace(
            moved,
            accidental=accidental,
            preferred_accidental="flat",
            explicit_accidental=False,
        ).normalize()

    def relative_major(self) -> Key:
        """The major key three semitones up (A minor -> C)."""
        return replace(self.change_grade(3), minor=False)

    def relative_minor(self) -> Key:
        """The minor key three semitones down (C -> A minor)."""
        return replace(self.change_grade(-3), minor=True)

    # --- Notation conversion ---

    def to_chord_symbol(self, reference_key: Key | str | None = None) -> Key:
        """Convert to chord symbol notation ("F#").

        Scale degrees are placed relative to ``reference_key``, which is
        required unless the key is already absolute.

        Raises
        ------
        InvalidReferenceError
            If a reference is needed and cannot be resolved.
        """
        return self._to_absolute("symbol", reference_key)

    def to_chord_solfege(self, reference_key: Key | str | None = None) -> Key:
        """Convert to solfege notation ("Fa#")."""
        return self._to_absolute("solfege", reference_key)

    def to_numeric(self, reference_key: Key | str | None = None) -> Key:
        """Convert to numeric scale degrees ("#4").

        Examples
        --------
        >>> str(Key.parse("Bb").to_numeric("C"))
        'b7'
        >>> str(Key.parse("IV").to_numeric())
        '4'
        """
        return self._to_degree("numeric", reference_key)

    def to_numeral(self, reference_key: Key | str | None = None) -> Key:
        """Convert to roman numeral scale degrees ("bVII")."""
        return self._to_degree("numeral", reference_key)

    def _to_absolute(self, notation: Notation, reference_key: Key | str | None) -> Key:
        if self.notation == notation:
            return self
        if self.notation in ABSOLUTE_NOTATIONS:
            return replace(self, notation=notation).normalize()

        reference = _reference_key(reference_key)
        offset = self.realize(_mode_of(reference)).effective_grade
        converted = Key(
            notation=notation,
            grade=0,
            reference_grade=shift_grade(offset + reference.effective_grade),
            preferred_accidental=(
                self.accidental or self.preferred_accidental or reference.accidental
            ),
            minor=self.minor,
        )
        return converted.normalize()

    def _to_degree(self, notation: Notation, reference_key: Key | str | None) -> Key:
        if self.notation == notation:
            return self
        if self.notation in DEGREE_NOTATIONS:
            return replace(self, notation=notation)

        reference = _reference_key(reference_key)
        converted = Key(
            notation=notation,
            grade=shift_grade(self.effective_grade - reference.effective_grade),
            reference_grade=0,
            preferred_accidental=(
                self.accidental or self.preferred_accidental or reference.accidental
            ),
            minor=self.minor,
            mode=_mode_of(reference),
        )
        return converted.normalize()

    # --- Rendering ---

    def note_name(self) -> str:
        """The spelled note without any minor marker."""
        if self.number is not None:
            name = ROMAN_NUMERALS[self.number - 1] if self.notation == "numeral" else str(self.number)
            spelled = spell(self.notation, name, self.accidental)
        else:
            found = grade_to_note(
                self.notation,
                self.effective_grade,
                self.accidental,
                self.preferred_accidental,
                minor=self.mode == "minor",
            )
            if found is None:
                msg = f"No spelling for grade {self.effective_grade} in {self.notation} notation"
                raise InvalidKeyError(msg)
            spelled = found

        if self.notation == "numeral" and self.minor:
            return spelled.lower()
        return spelled

    def to_string(self, show_minor: bool = True, unicode_accidentals: bool = False) -> str:
        """Render the key.

        Parameters
        ----------
        show_minor : bool
            Append "m" to minor symbol, solfege and numeric keys. Numerals
            show minor through lowercase letters instead.
        unicode_accidentals : bool
            Use "♯" and "♭" instead of "#" and "b".

        Examples
        --------
        >>> Key.parse("Am").to_string()
        'Am'
        >>> Key.parse("Am").to_string(show_minor=False)
        'A'
        >>> Key.parse("F#").to_string(unicode_accidentals=True)
        'F♯'
        """
        note = self.note_name()
        if unicode_accidentals:
            for sign, symbol in UNICODE_SIGNS.items():
                note = note.replace(sign, symbol)

        if show_minor and self.minor and self.notation != "numeral":
            return f"{note}m"
        return note

    def __str__(self) -> str:
        return self.to_string()

    # --- Equality ---

    def _identity(self) -> tuple[object, ...]:
        return (
            self.notation,
            self.accidental,
            self.preferred_accidental,
            self.minor,
            self.mode,
            self.effective_grade,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())
