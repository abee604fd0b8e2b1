"""Rendering options consumed by the token-level converter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError

from chord_notation.errors import OptionsError


class RenderOptions(BaseModel):
    """How chords and keys are written back to text.

    Parameters
    ----------
    unicode_accidentals : bool
        Write "♯"/"♭" instead of "#"/"b".
    normalize_chords : bool
        Drop E#, B#, Fb and Cb spellings before rendering.
    show_minor : bool
        Append the minor marker when rendering standalone keys.

    Examples
    --------
    >>> RenderOptions.from_mapping({"unicode_accidentals": True}).unicode_accidentals
    True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    unicode_accidentals: StrictBool = False
    normalize_chords: StrictBool = False
    show_minor: StrictBool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None = None) -> RenderOptions:
        """Build options from a plain mapping, validating names and types.

        Raises
        ------
        OptionsError
            If a name is unknown or a value is not a bool.
        """
        try:
            return cls.model_validate(dict(values or {}))
        except ValidationError as exc:
            msg = f"Invalid render options: {exc}"
            raise OptionsError(msg) from exc


DEFAULT_OPTIONS = RenderOptions()
