"""Chord notation library for parsing, transposing and converting chords.

This library parses chord strings written as chord symbols ("F#m7"), solfege
("Sol#m"), numeric scale degrees ("#4/b3") or roman numerals ("bVII"), and
transposes or converts them while keeping conventional enharmonic spelling.

Examples
--------
>>> from chord_notation import Chord, Key

>>> # Parse and transpose a chord
>>> chord = Chord.parse("Ebsus4/Bb")
>>> str(chord.transpose(2))
'Fsus4/C'

>>> # Convert between notations using a reference key
>>> str(Chord.parse("Am").to_numeral("C"))
'vi'
>>> str(Chord.parse("bVII").to_chord_symbol("G"))
'F'

>>> # Keys on their own
>>> Key.distance("C", "G")
7
>>> str(Key.parse("C#").use_accidental("flat"))
'Db'

>>> # Token-level helpers leave non-chords untouched
>>> from chord_notation import transpose_chord
>>> transpose_chord("C/G", 2), transpose_chord("N.C.", 2)
('D/A', 'N.C.')
"""

import logging

from chord_notation.converter import (
    change_chord_key,
    convert_chord,
    from_pychord,
    render_chord,
    render_key,
    switch_accidental,
    to_pychord,
    transpose_chord,
    transpose_key,
)
from chord_notation.errors import (
    ChordNotationError,
    ChordParseError,
    InvalidKeyError,
    InvalidReferenceError,
    KeyParseError,
    OptionsError,
)
from chord_notation.key import Key
from chord_notation.models import Chord
from chord_notation.options import RenderOptions
from chord_notation.parser import is_chord, parse_chord

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Chord",
    "ChordNotationError",
    "ChordParseError",
    "InvalidKeyError",
    "InvalidReferenceError",
    "Key",
    "KeyParseError",
    "OptionsError",
    "RenderOptions",
    "change_chord_key",
    "convert_chord",
    "from_pychord",
    "is_chord",
    "parse_chord",
    "render_chord",
    "render_key",
    "switch_accidental",
    "to_pychord",
    "transpose_chord",
    "transpose_key",
]
