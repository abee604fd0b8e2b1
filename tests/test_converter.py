import logging

import pytest

from chord_notation import (
    Chord,
    InvalidReferenceError,
    RenderOptions,
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


class TestRenderChord:
    def test_canonical(self):
        assert render_chord("F#m7") == "F#m7"

    def test_unicode(self):
        assert render_chord("F#m7", RenderOptions(unicode_accidentals=True)) == "F♯m7"

    def test_normalize(self):
        assert render_chord("E#") == "E#"
        assert render_chord("E#", RenderOptions(normalize_chords=True)) == "F"

    def test_unparseable_is_echoed(self):
        assert render_chord("N.C.") == "N.C."

    def test_unparseable_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="chord_notation"):
            render_chord("N.C.")
        assert "N.C." in caplog.text


class TestTransposeChord:
    @pytest.mark.parametrize(
        ("text", "delta", "expected"),
        [
            ("Ebsus4/Bb", 2, "Fsus4/C"),
            ("C/G", 2, "D/A"),
            ("C", 12, "C"),
            ("(Am)", -2, "(Gm)"),
            ("N.C.", 2, "N.C."),
        ],
    )
    def test_transpose(self, text, delta, expected):
        assert transpose_chord(text, delta) == expected

    def test_unicode_output(self):
        assert transpose_chord("A", 1, RenderOptions(unicode_accidentals=True)) == "A♯"


class TestChangeChordKey:
    def test_flat_target_transposes_down(self):
        assert change_chord_key("F", "C", "Bb") == "Eb"

    def test_sharp_target_transposes_up(self):
        assert change_chord_key("Am", "C", "G") == "Em"

    def test_same_key(self):
        assert change_chord_key("G", "C", "C") == "G"

    def test_invalid_key_raises(self):
        with pytest.raises(ValueError):
            change_chord_key("G", "C", "nope")


class TestSwitchAccidental:
    def test_sharp_to_flat(self):
        assert switch_accidental("C#m/B", "flat") == "Dbm/B"

    def test_flat_to_sharp(self):
        assert switch_accidental("Bb", "sharp") == "A#"

    def test_natural_unchanged(self):
        assert switch_accidental("C", "sharp") == "C"


class TestConvertChord:
    def test_to_numeral(self):
        assert convert_chord("Am7", "numeral", "C") == "vi7"

    def test_to_symbol(self):
        assert convert_chord("vi", "symbol", "G") == "Em"

    def test_missing_reference_raises(self):
        with pytest.raises(InvalidReferenceError):
            convert_chord("Am", "numeral")

    def test_unparseable_is_echoed(self):
        assert convert_chord("xyz", "numeral") == "xyz"


class TestKeyTokens:
    def test_render_key(self):
        assert render_key("Am") == "Am"
        assert render_key("Am", RenderOptions(show_minor=False)) == "A"

    def test_transpose_key(self):
        assert transpose_key("Am", 3) == "Cm"
        assert transpose_key("E#", 0) == "F"

    def test_unparseable_keys_are_echoed(self):
        assert render_key("foo") == "foo"
        assert transpose_key("foo", 2) == "foo"


class TestToPychord:
    def test_symbol(self):
        chord = to_pychord(Chord.parse("Am7"))
        assert chord.root == "A"
        assert str(chord.quality) == "m7"

    def test_degree_needs_reference(self):
        assert to_pychord(Chord.parse("vi7"), "C").root == "A"

    def test_slash_chord(self):
        assert to_pychord(Chord.parse("C/G")).on == "G"

    def test_optional_flag_dropped(self):
        assert to_pychord(Chord.parse("(Am)")).root == "A"

    def test_bass_only_raises(self):
        with pytest.raises(ValueError, match="Bass-only"):
            to_pychord(Chord.parse("/G"))


class TestFromPychord:
    def test_minor_seventh_slash(self):
        chord = from_pychord("Bbm7/F")
        assert chord.suffix == "m7"
        assert chord.root.minor
        assert str(chord.bass) == "F"

    def test_major(self):
        chord = from_pychord("C")
        assert chord.suffix is None
        assert str(chord) == "C"

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            from_pychord("H7")
