"""Triad data models for triad-theory.

This module provides the closed enumerations that describe a triad
(quality, inversion, voicing) and the immutable :class:`Chord` that
realizes them as concrete pitches.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeVar

from triad_theory.errors import (
    InvalidChordAttribute,
    InvalidInversion,
    InvalidQuality,
    InvalidVoicing,
)
from triad_theory.pitch import Pitch
from triad_theory.pitch_class import spell_triad


class Quality(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Inversion(str, Enum):
    ROOT = "root"
    FIRST = "first"
    SECOND = "second"

    @property
    def steps(self) -> int:
        """How many times the lowest tone is raised an octave."""
        return INVERSION_STEPS[self]

    @property
    def display_name(self) -> str:
        return INVERSION_DISPLAY_NAMES[self]


class Voicing(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


# Semitones above the root: root, third, fifth
QUALITY_TO_INTERVALS: dict[Quality, tuple[int, int, int]] = {
    Quality.MAJOR: (0, 4, 7),
    Quality.MINOR: (0, 3, 7),
    Quality.DIMINISHED: (0, 3, 6),
    Quality.AUGMENTED: (0, 4, 8),
}

INVERSION_STEPS: dict[Inversion, int] = {
    Inversion.ROOT: 0,
    Inversion.FIRST: 1,
    Inversion.SECOND: 2,
}

INVERSION_DISPLAY_NAMES: dict[Inversion, str] = {
    Inversion.ROOT: "Root Position",
    Inversion.FIRST: "1st Inversion",
    Inversion.SECOND: "2nd Inversion",
}

_E = TypeVar("_E", bound=Enum)


def _coerce(enum_cls: type[_E], value: object, error: type[InvalidChordAttribute]) -> _E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        msg = f"Invalid {enum_cls.__name__.lower()}: {value!r} (expected one of {allowed})"
        raise error(msg) from None


def to_quality(value: Quality | str) -> Quality:
    return _coerce(Quality, value, InvalidQuality)


def to_inversion(value: Inversion | str) -> Inversion:
    return _coerce(Inversion, value, InvalidInversion)


def to_voicing(value: Voicing | str) -> Voicing:
    return _coerce(Voicing, value, InvalidVoicing)


@dataclass(frozen=True)
class Chord:
    """A triad built on a root pitch.

    Parameters
    ----------
    root : Pitch
        The root pitch. A Scientific Pitch Notation string ("C4") is
        parsed into a :class:`Pitch`.
    quality : Quality
        Triad quality; the lowercase string value is also accepted.
    inversion : Inversion
        Which chord tone is lowest (default ``root``).
    voicing : Voicing
        Closed or open spacing (default ``closed``).

    Raises
    ------
    InvalidPitchNotation, InvalidOctaveRange
        If the root string is not a valid pitch.
    InvalidQuality, InvalidInversion, InvalidVoicing
        If an attribute is outside its domain.

    Examples
    --------
    >>> chord = Chord("C4", "major", "first")
    >>> [str(p) for p in chord.get_pitches()]
    ['E4', 'G4', 'C5']
    >>> chord.get_standard_name()
    'C_major_first_closed'
    """

    root: Pitch
    quality: Quality
    inversion: Inversion = Inversion.ROOT
    voicing: Voicing = Voicing.CLOSED

    def __post_init__(self) -> None:
        root = self.root if isinstance(self.root, Pitch) else Pitch.parse(self.root)
        object.__setattr__(self, "root", root)
        object.__setattr__(self, "quality", to_quality(self.quality))
        object.__setattr__(self, "inversion", to_inversion(self.inversion))
        object.__setattr__(self, "voicing", to_voicing(self.voicing))

    @property
    def intervals(self) -> tuple[int, int, int]:
        return QUALITY_TO_INTERVALS[self.quality]

    def get_chord_tones(self) -> list[str]:
        """Return the three chord tones as note names without octave.

        The root keeps its spelling; the third and fifth are spelled on
        the letters a third and a fifth above it. Inversion and voicing
        never affect the result.

        Examples
        --------
        >>> Chord("Bb3", "diminished").get_chord_tones()
        ['Bb', 'Db', 'E']
        """
        return spell_triad(self.root.note, self.intervals)

    def get_pitches(self) -> list[Pitch]:
        """Return the three realized pitches, lowest first.

        The close-position tones are stacked on the root, the inversion
        raises the lowest tone an octave once per step, and an open
        voicing then raises the middle tone an octave.

        Raises
        ------
        InvalidOctaveRange
            If a raised tone would leave octaves 0-9.
        """
        base = self.root.semitone_value
        pitches = [
            Pitch.from_semitone_value(base + interval, note=tone)
            for interval, tone in zip(self.intervals, self.get_chord_tones())
        ]

        for _ in range(self.inversion.steps):
            lowest = pitches.pop(0)
            pitches.append(lowest.transpose_octaves(1))
            pitches.sort(key=lambda p: p.semitone_value)

        if self.voicing is Voicing.OPEN:
            pitches[1] = pitches[1].transpose_octaves(1)
            pitches.sort(key=lambda p: p.semitone_value)

        return pitches

    @property
    def bass(self) -> Pitch:
        """The lowest realized pitch."""
        return self.get_pitches()[0]

    def get_standard_name(self, *, include_octave: bool = False) -> str:
        """Format as ``<Root>[Octave]_<quality>_<inversion>_<voicing>``.

        Examples
        --------
        >>> Chord("F#3", "minor", "second", "open").get_standard_name()
        'F#_minor_second_open'
        >>> Chord("F#3", "minor").get_standard_name(include_octave=True)
        'F#3_minor_root_closed'
        """
        root = str(self.root) if include_octave else self.root.note
        return f"{root}_{self.quality.value}_{self.inversion.value}_{self.voicing.value}"

    def get_display_name(self) -> str:
        """Human readable name, e.g. ``F# Minor 1st inversion``."""
        name = f"{self.root.note} {self.quality.display_name}"
        if self.inversion is not Inversion.ROOT:
            name = f"{name} {self.inversion.display_name.lower()}"
        return name

    def transpose(self, semitones: int) -> Chord:
        """Return the same triad with its root moved by ``semitones``."""
        return replace(self, root=self.root.add_semitones(semitones))

    def __str__(self) -> str:
        """Return the standard name including the root octave."""
        return self.get_standard_name(include_octave=True)
