"""Absolute pitches in Scientific Pitch Notation.

A :class:`Pitch` is one spelled note at one octave ("C4", "F#3", "Bb2").
Its semitone value follows MIDI numbering, so C4 is 60 and A4 is 69.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from triad_theory.errors import InvalidOctaveRange, InvalidPitchNotation
from triad_theory.pitch_class import PITCH_SPELLINGS, pc_to_note

MIN_OCTAVE = 0
MAX_OCTAVE = 9

# Letter, optional accidental, one or more octave digits
SPN_RE = re.compile(r"([A-G])([#b]?)([0-9]+)")


@dataclass(frozen=True)
class Pitch:
    """A spelled note at a given octave.

    Parameters
    ----------
    note : str
        Letter A-G with an optional ``#`` or ``b`` (e.g., "C", "F#", "Bb").
    octave : int
        Octave number, 0-9 inclusive.

    Raises
    ------
    InvalidPitchNotation
        If the note is not a recognised spelling.
    InvalidOctaveRange
        If the octave is outside 0-9.

    Examples
    --------
    >>> Pitch("A", 4).semitone_value
    69
    >>> str(Pitch.parse("C#4").add_semitones(3))
    'E4'
    """

    note: str
    octave: int

    def __post_init__(self) -> None:
        if self.note not in PITCH_SPELLINGS:
            msg = f"Invalid note name: {self.note!r}"
            raise InvalidPitchNotation(msg)
        if not MIN_OCTAVE <= self.octave <= MAX_OCTAVE:
            msg = f"Octave {self.octave} outside {MIN_OCTAVE}-{MAX_OCTAVE}"
            raise InvalidOctaveRange(msg)

    @classmethod
    def parse(cls, spn: str) -> Pitch:
        """Parse a Scientific Pitch Notation string.

        Parameters
        ----------
        spn : str
            Notation of the form ``<Letter>[#|b]<Octave>`` (e.g., "Bb2").

        Returns
        -------
        Pitch
            The parsed pitch, spelled exactly as written.

        Raises
        ------
        InvalidPitchNotation
            If the string does not match the notation.
        InvalidOctaveRange
            If the octave digits parse to a value outside 0-9.

        Examples
        --------
        >>> Pitch.parse("Db3")
        Pitch(note='Db', octave=3)
        """
        match = SPN_RE.fullmatch(spn) if isinstance(spn, str) else None
        if match is None:
            msg = f"Invalid pitch notation: {spn!r}"
            raise InvalidPitchNotation(msg)
        letter, accidental, octave = match.groups()
        return cls(note=letter + accidental, octave=int(octave))

    @classmethod
    def from_semitone_value(cls, value: int, note: str | None = None) -> Pitch:
        """Build the pitch with a given semitone value.

        Without ``note`` the sharp-preferred spelling is used. A ``note``
        must name the same pitch class as ``value``.
        """
        if note is None:
            note = pc_to_note(value)
        elif note in PITCH_SPELLINGS and PITCH_SPELLINGS[note] != value % 12:
            msg = f"{note} cannot spell semitone value {value}"
            raise InvalidPitchNotation(msg)
        return cls(note=note, octave=value // 12 - 1)

    @property
    def pitch_class(self) -> int:
        return PITCH_SPELLINGS[self.note]

    @property
    def semitone_value(self) -> int:
        """MIDI-style note number, ``(octave + 1) * 12 + pitch_class``."""
        return (self.octave + 1) * 12 + self.pitch_class

    def get_enharmonic_equivalents(self) -> list[Pitch]:
        """Return the other spellings that sound at the same pitch.

        Naturals have no alternate spelling, so the result may be empty.

        Examples
        --------
        >>> [str(p) for p in Pitch.parse("C#4").get_enharmonic_equivalents()]
        ['Db4']
        >>> Pitch.parse("E4").get_enharmonic_equivalents()
        []
        """
        return [
            Pitch(note=note, octave=self.octave)
            for note, pc in PITCH_SPELLINGS.items()
            if pc == self.pitch_class and note != self.note
        ]

    def is_enharmonic(self, other: Pitch) -> bool:
        """Check whether ``other`` sounds at the same pitch, whatever its spelling."""
        return self.semitone_value == other.semitone_value

    def add_semitones(self, semitones: int) -> Pitch:
        """Return the pitch ``semitones`` away, respelled with the sharp table.

        Examples
        --------
        >>> str(Pitch.parse("C4").add_semitones(4))
        'E4'
        >>> str(Pitch.parse("C4").add_semitones(-1))
        'B3'
        """
        return Pitch.from_semitone_value(self.semitone_value + semitones)

    def transpose_octaves(self, octaves: int) -> Pitch:
        """Return the same spelling ``octaves`` octaves away."""
        return Pitch(note=self.note, octave=self.octave + octaves)

    def __str__(self) -> str:
        return f"{self.note}{self.octave}"
