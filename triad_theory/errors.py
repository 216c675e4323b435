"""Exception types raised by triad-theory.

Every error derives from :class:`TriadTheoryError`, which is itself a
``ValueError``: all failures are bad input detected while constructing
or parsing a value.
"""


class TriadTheoryError(ValueError):
    """Base class for all triad-theory errors."""


class InvalidPitchNotation(TriadTheoryError):
    """A Scientific Pitch Notation string or note name is malformed."""


class InvalidOctaveRange(TriadTheoryError):
    """An octave falls outside the supported 0-9 range."""


class InvalidChordAttribute(TriadTheoryError):
    """A chord quality, inversion or voicing is outside its domain."""


class InvalidQuality(InvalidChordAttribute):
    pass


class InvalidInversion(InvalidChordAttribute):
    pass


class InvalidVoicing(InvalidChordAttribute):
    pass


class InvalidChordName(TriadTheoryError):
    """A standard chord name (or chord symbol) could not be parsed."""


class EmptyConstraintSet(TriadTheoryError):
    """A random-generation constraint was given as an empty collection."""
