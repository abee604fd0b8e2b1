"""Exceptions raised by chord-notation.

Lookups and the lenient ``parse`` functions signal "not found" by returning
``None``. The classes below are raised only by strict parsing, by conversions
given an unusable reference key, by options validation and by
malformed ``Key`` construction.
"""


class ChordNotationError(ValueError):
    """Base class for all chord-notation errors."""


class KeyParseError(ChordNotationError):
    """A key string could not be parsed."""


class ChordParseError(ChordNotationError):
    """A chord string could not be parsed."""


class InvalidReferenceError(ChordNotationError):
    """A conversion was given a reference key that cannot be resolved."""


class OptionsError(ChordNotationError):
    """Rendering options contain an unknown name or a wrong value type."""


class InvalidKeyError(ChordNotationError):
    """A key was built without a degree or grade, or has no spelling."""
