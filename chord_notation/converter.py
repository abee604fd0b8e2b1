"""Token-level chord operations and pychord interop.

Sheet parsers and formatters call these functions once per chord or key token
they find. A token that does not parse is returned unchanged, so formatters can
apply them blindly to every bracketed or chord-line token.

Examples
--------
>>> transpose_chord("Ebsus4/Bb", 2)
'Fsus4/C'
>>> transpose_chord("N.C.", 2)
'N.C.'
>>> convert_chord("Am7", "numeral", "C")
'vi7'
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from chord_notation.key import Key
from chord_notation.models import Chord
from chord_notation.options import DEFAULT_OPTIONS, RenderOptions
from chord_notation.scales import Accidental, Notation

if TYPE_CHECKING:
    from pychord import Chord as PyChord

logger = logging.getLogger(__name__)

CONVERSIONS: dict[Notation, Callable[[Chord, Key | str | None], Chord]] = {
    "symbol": Chord.to_chord_symbol,
    "solfege": Chord.to_chord_solfege,
    "numeric": Chord.to_numeric,
    "numeral": Chord.to_numeral,
}


def _render(chord: Chord, options: RenderOptions) -> str:
    if options.normalize_chords:
        chord = chord.normalize()
    return chord.to_string(unicode_accidentals=options.unicode_accidentals)


def _change_chord(
    text: str,
    func: Callable[[Chord], Chord],
    options: RenderOptions | None,
) -> str:
    chord = Chord.parse(text)
    if chord is None:
        logger.debug("Leaving unparseable chord %r unchanged", text)
        return text
    return _render(func(chord), options or DEFAULT_OPTIONS)


def render_chord(text: str, options: RenderOptions | None = None) -> str:
    """Re-render a chord token in canonical form.

    Examples
    --------
    >>> render_chord("F#m7", RenderOptions(unicode_accidentals=True))
    'F♯m7'
    >>> render_chord("E#", RenderOptions(normalize_chords=True))
    'F'
    """
    return _change_chord(text, lambda chord: chord, options)


def transpose_chord(text: str, delta: int, options: RenderOptions | None = None) -> str:
    """Transpose a chord token by ``delta`` semitones."""
    return _change_chord(text, lambda chord: chord.transpose(delta), options)


def change_chord_key(
    text: str,
    from_key: Key | str,
    to_key: Key | str,
    options: RenderOptions | None = None,
) -> str:
    """Move a chord token from one song key to another.

    Flat target keys are reached by transposing down so the chord picks up
    flat spellings; other targets are reached by transposing up.

    Examples
    --------
    >>> change_chord_key("F", "C", "Bb")
    'Eb'
    >>> change_chord_key("Am", "C", "G")
    'Em'
    """
    target = to_key if isinstance(to_key, Key) else Key.parse_strict(to_key)
    delta = Key.distance(from_key, target)
    if delta and target.accidental == "flat":
        delta -= 12
    return transpose_chord(text, delta, options)


def switch_accidental(
    text: str,
    accidental: Accidental,
    options: RenderOptions | None = None,
) -> str:
    """Respell the sharps or flats of a chord token.

    Natural notes keep their spelling.

    Examples
    --------
    >>> switch_accidental("C#m/B", "flat")
    'Dbm/B'
    """

    def respell(key: Key) -> Key:
        if key.accidental in ("sharp", "flat"):
            return key.use_accidental(accidental)
        return key

    return _change_chord(text, lambda chord: chord.map_keys(respell), options)


def convert_chord(
    text: str,
    notation: Notation,
    reference_key: Key | str | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Rewrite a chord token in another notation.

    Raises
    ------
    InvalidReferenceError
        If the conversion needs a reference key and ``reference_key`` cannot
        be resolved.
    """
    convert = CONVERSIONS[notation]
    return _change_chord(text, lambda chord: convert(chord, reference_key), options)


def render_key(text: str, options: RenderOptions | None = None) -> str:
    """Re-render a key token (e.g., a ``{key: ...}`` directive value)."""
    options = options or DEFAULT_OPTIONS
    key = Key.parse(text)
    if key is None:
        logger.debug("Leaving unparseable key %r unchanged", text)
        return text
    return key.to_string(
        show_minor=options.show_minor,
        unicode_accidentals=options.unicode_accidentals,
    )


def transpose_key(text: str, delta: int, options: RenderOptions | None = None) -> str:
    """Transpose a key token and normalize its spelling.

    Examples
    --------
    >>> transpose_key("Am", 3)
    'Cm'
    """
    options = options or DEFAULT_OPTIONS
    key = Key.parse(text)
    if key is None:
        logger.debug("Leaving unparseable key %r unchanged", text)
        return text
    return (
        key.transpose(delta)
        .normalize()
        .to_string(show_minor=options.show_minor, unicode_accidentals=options.unicode_accidentals)
    )


def to_pychord(chord: Chord, reference_key: Key | str | None = None) -> PyChord:
    """Convert a Chord into a ``pychord.Chord``.

    Degree chords are first placed in ``reference_key``.

    Parameters
    ----------
    chord : Chord
        The chord to convert.
    reference_key : Key | str | None
        Required for numeric and numeral chords.

    Returns
    -------
    pychord.Chord
        The equivalent pychord chord.

    Raises
    ------
    ValueError
        If the chord has no root, or pychord does not know its quality.

    Examples
    --------
    >>> to_pychord(Chord.parse("vi7"), "C").root
    'A'
    """
    from pychord import Chord as PyChord

    symbol = chord.to_chord_symbol(reference_key)
    if symbol.root is None:
        msg = f"Bass-only chord cannot be converted: {chord}"
        raise ValueError(msg)
    return PyChord(replace(symbol, optional=False).to_string())


def from_pychord(chord_str: str) -> Chord:
    """Parse a chord string with pychord and return it as a Chord.

    pychord validates the quality; the resulting Chord keeps the quality as
    its opaque suffix.

    Raises
    ------
    ValueError
        If pychord rejects the chord.

    Examples
    --------
    >>> chord = from_pychord("Bbm7/F")
    >>> chord.suffix, str(chord.bass)
    ('m7', 'F')
    """
    from pychord import Chord as PyChord

    pc = PyChord(chord_str)
    text = f"{pc.root}{pc.quality}"
    if pc.on:
        text = f"{text}/{pc.on}"

    chord = Chord.parse(text)
    if chord is None:
        msg = f"Unsupported pychord chord: {chord_str}"
        raise ValueError(msg)
    return chord
