"""Scale lookup tables between note names and chromatic grades.

A grade is a pitch class in the range 0-11 where C (or scale degree 1) is 0.
Two tables are provided, both indexed by notation, mode and accidental:

- ``KEY_TO_GRADE`` maps a bare note name ("F", "Sol", "3", "IV") to a grade.
- ``GRADE_TO_KEY`` maps a grade back to the full spelled name ("F#", "Solb",
  "#4", "bVII").

Symbol and solfege note names do not depend on the mode. Numeric and numeral
scale degrees do: in minor mode degrees 3, 6 and 7 sit one semitone lower
than in major mode.
"""

from __future__ import annotations

from typing import Literal

Notation = Literal["symbol", "solfege", "numeric", "numeral"]
Mode = Literal["major", "minor"]
Accidental = Literal["natural", "sharp", "flat"]

NOTATIONS: tuple[Notation, ...] = ("symbol", "solfege", "numeric", "numeral")
MODES: tuple[Mode, ...] = ("major", "minor")

ROMAN_NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")

ACCIDENTAL_SIGNS: dict[Accidental, str] = {
    "natural": "",
    "sharp": "#",
    "flat": "b",
}

SIGN_TO_ACCIDENTAL: dict[str, Accidental] = {
    "#": "sharp",
    "♯": "sharp",
    "b": "flat",
    "♭": "flat",
}

UNICODE_SIGNS: dict[str, str] = {"#": "♯", "b": "♭"}

# Accidental placement: letters and syllables take a trailing sign ("F#"),
# degrees take a leading one ("#4").
LEADING_ACCIDENTAL: frozenset[Notation] = frozenset({"numeric", "numeral"})

_SYMBOL_GRADES: dict[Accidental, dict[str, int]] = {
    "natural": {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11},
    "sharp": {"B": 0, "C": 1, "D": 3, "E": 5, "F": 6, "G": 8, "A": 10},
    "flat": {"D": 1, "E": 3, "F": 4, "G": 6, "A": 8, "B": 10, "C": 11},
}

_SOLFEGE_GRADES: dict[Accidental, dict[str, int]] = {
    "natural": {"Do": 0, "Re": 2, "Mi": 4, "Fa": 5, "Sol": 7, "La": 9, "Si": 11},
    "sharp": {"Si": 0, "Do": 1, "Re": 3, "Mi": 5, "Fa": 6, "Sol": 8, "La": 10},
    "flat": {"Re": 1, "Mi": 3, "Fa": 4, "Sol": 6, "La": 8, "Si": 10, "Do": 11},
}

_NUMERIC_GRADES: dict[Mode, dict[Accidental, dict[str, int]]] = {
    "major": {
        "natural": {"1": 0, "2": 2, "3": 4, "4": 5, "5": 7, "6": 9, "7": 11},
        "sharp": {"7": 0, "1": 1, "2": 3, "3": 5, "4": 6, "5": 8, "6": 10},
        "flat": {"2": 1, "3": 3, "4": 4, "5": 6, "6": 8, "7": 10, "1": 11},
    },
    "minor": {
        "natural": {"1": 0, "2": 2, "3": 3, "4": 5, "5": 7, "6": 8, "7": 10},
        "sharp": {"1": 1, "2": 3, "3": 4, "4": 6, "5": 8, "6": 9, "7": 11},
        "flat": {"2": 1, "3": 2, "4": 4, "5": 6, "6": 7, "7": 9, "1": 11},
    },
}


def _numerals(grades: dict[str, int]) -> dict[str, int]:
    return {ROMAN_NUMERALS[int(number) - 1]: grade for number, grade in grades.items()}


KEY_TO_GRADE: dict[Notation, dict[Mode, dict[Accidental, dict[str, int]]]] = {
    "symbol": {"major": _SYMBOL_GRADES, "minor": _SYMBOL_GRADES},
    "solfege": {"major": _SOLFEGE_GRADES, "minor": _SOLFEGE_GRADES},
    "numeric": _NUMERIC_GRADES,
    "numeral": {
        mode: {accidental: _numerals(grades) for accidental, grades in table.items()}
        for mode, table in _NUMERIC_GRADES.items()
    },
}


def spell(notation: Notation, name: str, accidental: Accidental | None) -> str:
    """Attach an accidental sign to a bare note name.

    Examples
    --------
    >>> spell("symbol", "F", "sharp")
    'F#'
    >>> spell("numeral", "VII", "flat")
    'bVII'
    """
    sign = ACCIDENTAL_SIGNS[accidental] if accidental else ""
    if notation in LEADING_ACCIDENTAL:
        return f"{sign}{name}"
    return f"{name}{sign}"


GRADE_TO_KEY: dict[Notation, dict[Mode, dict[Accidental, dict[int, str]]]] = {
    notation: {
        mode: {
            accidental: {grade: spell(notation, name, accidental) for name, grade in names.items()}
            for accidental, names in table.items()
        }
        for mode, table in modes.items()
    }
    for notation, modes in KEY_TO_GRADE.items()
}


def accidental_from_sign(sign: str | None) -> Accidental | None:
    """Map an accidental sign ("#", "b", "♯", "♭") to its accidental.

    Examples
    --------
    >>> accidental_from_sign("#")
    'sharp'
    >>> accidental_from_sign("") is None
    True
    """
    if not sign:
        return None
    return SIGN_TO_ACCIDENTAL.get(sign)


def shift_grade(grade: int) -> int:
    """Wrap a grade into the range 0-11.

    Examples
    --------
    >>> shift_grade(-1)
    11
    >>> shift_grade(14)
    2
    """
    return grade % 12


def to_grade(notation: Notation, mode: Mode, accidental: Accidental, name: str) -> int | None:
    """Look up the grade of a bare note name.

    Parameters
    ----------
    notation : Notation
        The notation the name is written in.
    mode : Mode
        "major" or "minor"; only matters for numeric and numeral degrees.
    accidental : Accidental
        The accidental applied to the name ("natural" for none).
    name : str
        Bare note name without accidental sign (e.g., "F", "Sol", "3", "IV").

    Returns
    -------
    int | None
        The grade, or None if the name is unknown.

    Examples
    --------
    >>> to_grade("symbol", "major", "sharp", "F")
    6
    >>> to_grade("numeric", "minor", "natural", "3")
    3
    >>> to_grade("symbol", "major", "natural", "H") is None
    True
    """
    return KEY_TO_GRADE[notation][mode][accidental].get(name)


def to_note(notation: Notation, mode: Mode, accidental: Accidental, grade: int) -> str | None:
    """Look up the spelled note name for a grade.

    Examples
    --------
    >>> to_note("symbol", "major", "flat", 10)
    'Bb'
    >>> to_note("symbol", "major", "natural", 1) is None
    True
    """
    return GRADE_TO_KEY[notation][mode][accidental].get(grade)


def grade_to_note(
    notation: Notation,
    grade: int,
    accidental: Accidental | None,
    preferred_accidental: Accidental | None,
    minor: bool = False,
) -> str | None:
    """Spell a grade, falling back through accidentals until one fits.

    The candidates are tried in the order: the key's own accidental, no
    accidental, the preferred accidental, and finally sharp.

    Parameters
    ----------
    notation : Notation
        Target notation.
    grade : int
        Grade to spell (0-11).
    accidental : Accidental | None
        The key's accidental, tried first.
    preferred_accidental : Accidental | None
        Secondary hint, tried after the natural spelling.
    minor : bool
        Read numeric/numeral degrees from the minor table.

    Returns
    -------
    str | None
        The spelled name, or None if no candidate table holds the grade.

    Examples
    --------
    >>> grade_to_note("symbol", 6, None, "flat")
    'Gb'
    >>> grade_to_note("symbol", 6, None, None)
    'F#'
    >>> grade_to_note("symbol", 0, "sharp", None)
    'B#'
    """
    mode: Mode = "minor" if minor else "major"
    tables = GRADE_TO_KEY[notation][mode]

    candidates: list[Accidental] = []
    for candidate in (accidental, "natural", preferred_accidental, "sharp"):
        if candidate is not None and candidate not in candidates:
            candidates.append(candidate)

    for candidate in candidates:
        name = tables[candidate].get(grade)
        if name is not None:
            return name
    return None
