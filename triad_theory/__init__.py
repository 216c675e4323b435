"""Triad theory library: pitches, triads and chord recognition.

This library models pitches and triads independently of any instrument.
It realizes triads in any inversion and voicing, reads and writes
standard chord names such as ``C4_major_first_open``, generates random
triads under constraints, and identifies triads from note names.

Examples
--------
>>> from triad_theory import Chord, ChordTheory, Pitch

>>> Pitch.parse("A4").semitone_value
69

>>> chord = Chord("C4", "major", "first")
>>> [str(p) for p in chord.get_pitches()]
['E4', 'G4', 'C5']

>>> theory = ChordTheory()
>>> [c.get_standard_name() for c in theory.identify_chord_from_notes(["C", "E", "G"])]
['C_major_root_closed']

>>> # Lead-sheet and Harte symbols
>>> from triad_theory import to_harte, to_pychord
>>> to_pychord(chord), to_harte(chord)
('C/E', 'C:maj/3')
"""

from triad_theory.converter import (
    from_harte,
    from_pychord,
    harte_quality_to_quality,
    pychord_quality_to_quality,
    quality_to_harte,
    quality_to_pychord,
    to_harte,
    to_pychord,
)
from triad_theory.errors import (
    EmptyConstraintSet,
    InvalidChordAttribute,
    InvalidChordName,
    InvalidInversion,
    InvalidOctaveRange,
    InvalidPitchNotation,
    InvalidQuality,
    InvalidVoicing,
    TriadTheoryError,
)
from triad_theory.models import Chord, Inversion, Quality, Voicing
from triad_theory.pitch import Pitch
from triad_theory.theory import ChordTheory, GenerationConstraints

__all__ = [
    "Chord",
    "ChordTheory",
    "EmptyConstraintSet",
    "GenerationConstraints",
    "InvalidChordAttribute",
    "InvalidChordName",
    "InvalidInversion",
    "InvalidOctaveRange",
    "InvalidPitchNotation",
    "InvalidQuality",
    "InvalidVoicing",
    "Inversion",
    "Pitch",
    "Quality",
    "TriadTheoryError",
    "Voicing",
    "from_harte",
    "from_pychord",
    "harte_quality_to_quality",
    "pychord_quality_to_quality",
    "quality_to_harte",
    "quality_to_pychord",
    "to_harte",
    "to_pychord",
]
