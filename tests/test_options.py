import pytest
from pydantic import ValidationError

from chord_notation import OptionsError, RenderOptions


class TestRenderOptions:
    def test_defaults(self):
        options = RenderOptions()
        assert not options.unicode_accidentals
        assert not options.normalize_chords
        assert options.show_minor

    @pytest.mark.parametrize("values", [None, {}])
    def test_empty_mapping(self, values):
        assert RenderOptions.from_mapping(values) == RenderOptions()

    def test_from_mapping(self):
        options = RenderOptions.from_mapping({"normalize_chords": True, "show_minor": False})
        assert options.normalize_chords
        assert not options.show_minor

    def test_unknown_option(self):
        with pytest.raises(OptionsError, match="colour") as excinfo:
            RenderOptions.from_mapping({"colour": True})
        assert isinstance(excinfo.value.__cause__, ValidationError)

    @pytest.mark.parametrize("value", ["yes", 1, None])
    def test_non_bool_value(self, value):
        with pytest.raises(OptionsError, match="unicode_accidentals"):
            RenderOptions.from_mapping({"unicode_accidentals": value})

    def test_options_error_is_value_error(self):
        with pytest.raises(ValueError):
            RenderOptions.from_mapping({"show_minor": "no"})

    def test_frozen(self):
        options = RenderOptions()
        with pytest.raises(ValidationError):
            options.show_minor = False

    def test_hashable(self):
        assert hash(RenderOptions()) == hash(RenderOptions())
