"""Tests for the chord grammar."""

import pytest

from chord_notation import is_chord, parse_chord
from chord_notation.parser import MAX_CHORD_LENGTH


class TestParseSymbol:
    def test_simple(self):
        chord = parse_chord("C")
        assert chord.root.notation == "symbol"
        assert chord.root.effective_grade == 0
        assert chord.suffix is None
        assert chord.bass is None
        assert not chord.optional

    def test_quality_and_extensions(self):
        chord = parse_chord("F#m7/C#")
        assert chord.root.accidental == "sharp"
        assert chord.root.minor
        assert chord.suffix == "m7"
        assert chord.bass.effective_grade == 1

    def test_flat_root_with_quality(self):
        chord = parse_chord("Bbm")
        assert chord.root.effective_grade == 10
        assert chord.suffix == "m"

    def test_maj_is_not_minor(self):
        chord = parse_chord("Cmaj7")
        assert not chord.root.minor
        assert chord.suffix == "maj7"

    def test_min_spelling_is_minor(self):
        chord = parse_chord("Cmin7")
        assert chord.root.minor
        assert chord.suffix == "min7"

    @pytest.mark.parametrize(("text", "suffix"), [("CDim", "dim"), ("CAug7", "aug7"), ("CDIM", "dim")])
    def test_dim_and_aug_casing_folds(self, text, suffix):
        assert parse_chord(text).suffix == suffix

    def test_parenthesized_extension(self):
        assert parse_chord("Cmaj7(add9)").suffix == "maj7(add9)"

    def test_surrounding_whitespace(self):
        assert str(parse_chord("  G/B  ")) == "G/B"

    def test_unicode_accidentals(self):
        chord = parse_chord("B♭/D")
        assert chord.root.accidental == "flat"
        assert str(chord) == "Bb/D"

    def test_unicode_flat_after_root_is_an_accidental(self):
        chord = parse_chord("C♭5")
        assert chord.root.accidental == "flat"
        assert chord.suffix == "5"
        assert str(chord) == "Cb5"
        assert str(chord) == str(parse_chord("Cb5"))

    def test_parenthesized_unicode_flat_is_an_extension(self):
        chord = parse_chord("C7(♭5)")
        assert chord.root.accidental is None
        assert chord.suffix == "7(♭5)"


class TestParseNotationOrder:
    """The first grammar whose root starts the input owns it."""

    def test_do_is_solfege(self):
        chord = parse_chord("Do")
        assert chord.root.notation == "solfege"
        assert chord.suffix is None

    def test_la_is_solfege(self):
        assert parse_chord("La7").root.notation == "solfege"

    def test_fa_is_solfege(self):
        assert parse_chord("Fa").root.notation == "solfege"

    @pytest.mark.parametrize(("text", "suffix"), [("Fadd9", "add9"), ("Faug", "aug")])
    def test_f_with_a_suffix_is_symbol(self, text, suffix):
        chord = parse_chord(text)
        assert chord.root.notation == "symbol"
        assert chord.suffix == suffix

    def test_uppercase_numeral(self):
        chord = parse_chord("I")
        assert chord.root.notation == "numeral"
        assert not chord.root.minor

    def test_lowercase_numeral(self):
        chord = parse_chord("i")
        assert chord.root.notation == "numeral"
        assert chord.root.minor

    def test_flat_numeral(self):
        chord = parse_chord("bVII7")
        assert chord.root.notation == "numeral"
        assert chord.root.accidental == "flat"
        assert chord.suffix == "7"

    def test_numeric(self):
        chord = parse_chord("#4/b3")
        assert chord.root.notation == "numeric"
        assert chord.root.number == 4
        assert chord.bass.number == 3
        assert chord.bass.accidental == "flat"

    def test_mixed_notations_do_not_parse(self):
        assert parse_chord("C/3") is None
        assert parse_chord("IV/G") is None

    @pytest.mark.parametrize("text", ["Do/E", "Fa/C", "b7/G", "bIV/G", "Dom/A", "Sol/C"])
    def test_grammar_owning_the_root_is_not_abandoned(self, text):
        assert parse_chord(text) is None

    def test_committed_grammar_inside_parentheses(self):
        assert parse_chord("(Do/E)") is None


class TestParseOptional:
    def test_optional(self):
        chord = parse_chord("(Am)")
        assert chord.optional
        assert chord.suffix == "m"

    def test_optional_slash_chord(self):
        chord = parse_chord("(C/G)")
        assert chord.optional
        assert str(chord) == "(C/G)"

    def test_parenthesized_extension_is_not_optional(self):
        assert not parse_chord("C(add9)").optional


class TestParseBassOnly:
    @pytest.mark.parametrize(
        ("text", "notation"),
        [("/G", "symbol"), ("/b3", "numeric"), ("/IV", "numeral"), ("/Sol", "solfege")],
    )
    def test_bass_only(self, text, notation):
        chord = parse_chord(text)
        assert chord.root is None
        assert chord.bass.notation == notation


class TestParseInvalid:
    @pytest.mark.parametrize(
        "text",
        [None, "", "   ", "/", "C/", "H", "Hello", "xyz", "C C", "not_a_chord!!!", "()"],
    )
    def test_invalid_returns_none(self, text):
        assert parse_chord(text) is None

    def test_long_extension_run(self):
        text = "C" + "7" * 200 + "!"
        assert parse_chord(text) is None


class TestIsChord:
    @pytest.mark.parametrize("text", ["Gm7", "C/G", "(Am)", "#4", "IV", "Do", "Ebsus4/Bb"])
    def test_chords(self, text):
        assert is_chord(text)

    @pytest.mark.parametrize("text", ["", "Hello", "am", "do", "the", "/G"])
    def test_not_chords(self, text):
        assert not is_chord(text)

    def test_too_long(self):
        text = "C" + "7" * MAX_CHORD_LENGTH
        assert parse_chord(text) is not None
        assert not is_chord(text)
