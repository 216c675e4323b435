"""Chord symbol conversion between triads and pychord / Harte notation.

This module renders a :class:`~triad_theory.models.Chord` as a
lead-sheet symbol in pychord's notation (e.g., "Cm/Eb") or as Harte
notation (e.g., "C:min/b3"), and parses those symbols back. Inversions
map onto slash basses; voicing has no symbol and parses as closed.
"""

from __future__ import annotations

import logging

from triad_theory.errors import InvalidChordName
from triad_theory.models import QUALITY_TO_INTERVALS, Chord, Inversion, Quality
from triad_theory.pitch import Pitch
from triad_theory.pitch_class import PITCH_SPELLINGS, SHARP_NAMES, note_to_pc

logger = logging.getLogger(__name__)

DEFAULT_OCTAVE = 4

# Mapping from pychord quality names to triad qualities
PYCHORD_TO_QUALITY: dict[str, Quality] = {
    "": Quality.MAJOR,
    "maj": Quality.MAJOR,
    "m": Quality.MINOR,
    "min": Quality.MINOR,
    "dim": Quality.DIMINISHED,
    "aug": Quality.AUGMENTED,
    "+": Quality.AUGMENTED,
}

QUALITY_TO_PYCHORD: dict[Quality, str] = {
    Quality.MAJOR: "",
    Quality.MINOR: "m",
    Quality.DIMINISHED: "dim",
    Quality.AUGMENTED: "aug",
}

HARTE_TO_QUALITY: dict[str, Quality] = {
    "maj": Quality.MAJOR,
    "min": Quality.MINOR,
    "dim": Quality.DIMINISHED,
    "aug": Quality.AUGMENTED,
}

QUALITY_TO_HARTE: dict[Quality, str] = {quality: name for name, quality in HARTE_TO_QUALITY.items()}

# Harte bass degree of the third and fifth, per quality
HARTE_BASS_DEGREES: dict[Quality, tuple[str, str]] = {
    Quality.MAJOR: ("3", "5"),
    Quality.MINOR: ("b3", "5"),
    Quality.DIMINISHED: ("b3", "b5"),
    Quality.AUGMENTED: ("3", "#5"),
}

# Harte interval degree to semitones above the root (triad tones only)
HARTE_DEGREE_TO_SEMITONES: dict[str, int] = {
    "1": 0,
    "b3": 3,
    "3": 4,
    "b5": 6,
    "5": 7,
    "#5": 8,
}


def pychord_quality_to_quality(pychord_quality: str) -> Quality:
    """Convert a pychord quality string to a triad quality.

    Raises
    ------
    ValueError
        If the quality is not a triad quality.

    Examples
    --------
    >>> pychord_quality_to_quality("m")
    <Quality.MINOR: 'minor'>
    """
    if pychord_quality in PYCHORD_TO_QUALITY:
        return PYCHORD_TO_QUALITY[pychord_quality]
    msg = f"Unknown pychord quality: {pychord_quality}"
    raise ValueError(msg)


def quality_to_pychord(quality: Quality | str) -> str:
    """Convert a triad quality to its pychord quality string.

    Examples
    --------
    >>> quality_to_pychord("diminished")
    'dim'
    """
    return QUALITY_TO_PYCHORD[Quality(quality)]


def harte_quality_to_quality(harte_quality: str) -> Quality:
    """Convert a Harte shorthand to a triad quality.

    Raises
    ------
    ValueError
        If the shorthand is not a triad.
    """
    if harte_quality in HARTE_TO_QUALITY:
        return HARTE_TO_QUALITY[harte_quality]
    msg = f"Unknown Harte quality: {harte_quality}"
    raise ValueError(msg)


def quality_to_harte(quality: Quality | str) -> str:
    """Convert a triad quality to its Harte shorthand.

    Examples
    --------
    >>> quality_to_harte("augmented")
    'aug'
    """
    return QUALITY_TO_HARTE[Quality(quality)]


def _root_pitch(note: str, octave: int) -> Pitch:
    spelling = note if note in PITCH_SPELLINGS else SHARP_NAMES[note_to_pc(note)]
    return Pitch(note=spelling, octave=octave)


def to_pychord(chord: Chord) -> str:
    """Render a chord as a pychord symbol with a slash bass for inversions.

    Examples
    --------
    >>> to_pychord(Chord("C4", "minor", "first"))
    'Cm/Eb'
    """
    symbol = f"{chord.root.note}{QUALITY_TO_PYCHORD[chord.quality]}"
    if chord.inversion is not Inversion.ROOT:
        symbol = f"{symbol}/{chord.bass.note}"
    return symbol


def to_harte(chord: Chord) -> str:
    """Render a chord in Harte notation with an interval-degree bass.

    Examples
    --------
    >>> to_harte(Chord("C4", "diminished", "second"))
    'C:dim/b5'
    """
    symbol = f"{chord.root.note}:{QUALITY_TO_HARTE[chord.quality]}"
    if chord.inversion is not Inversion.ROOT:
        third, fifth = HARTE_BASS_DEGREES[chord.quality]
        symbol = f"{symbol}/{third if chord.inversion is Inversion.FIRST else fifth}"
    return symbol


def _inversion_from_bass_note(chord: Chord, bass: str, symbol: str) -> Inversion:
    tones = [note_to_pc(tone) for tone in chord.get_chord_tones()]
    try:
        position = tones.index(note_to_pc(bass))
    except ValueError:
        msg = f"Bass {bass} of {symbol!r} is not a chord tone"
        raise InvalidChordName(msg) from None
    return list(Inversion)[position]


def from_pychord(chord_str: str, octave: int = DEFAULT_OCTAVE) -> Chord:
    """Parse a pychord notation string into a closed-voiced Chord.

    Parameters
    ----------
    chord_str : str
        Triad in pychord notation (e.g., "C", "F#m", "Bbdim/E").
    octave : int
        Octave of the root.

    Returns
    -------
    Chord
        The triad, inverted so that the slash bass is lowest.

    Raises
    ------
    InvalidChordName
        If pychord rejects the symbol, the chord is not a triad, or the
        slash bass is not a chord tone.

    Examples
    --------
    >>> from_pychord("Am/E").get_standard_name()
    'A_minor_second_closed'
    """
    from pychord import Chord as PyChord

    try:
        pc = PyChord(chord_str)
    except ValueError as exc:
        msg = f"Invalid pychord symbol {chord_str!r}: {exc}"
        raise InvalidChordName(msg) from exc

    try:
        quality = pychord_quality_to_quality(str(pc.quality))
    except ValueError as exc:
        raise InvalidChordName(str(exc)) from exc

    chord = Chord(_root_pitch(pc.root, octave), quality)
    if pc.on:
        chord = Chord(chord.root, quality, _inversion_from_bass_note(chord, pc.on, chord_str))
    logger.debug("Parsed pychord %r as %s", chord_str, chord)
    return chord


def _harte_quality(chord_str: str, shorthand: str | None) -> Quality:
    """Read the triad quality of a Harte symbol.

    A bare root means major. An interval list such as ``(1,b3,5)`` is
    matched against the triad interval sets; shorthands with added or
    omitted degrees are not triads.
    """
    body = chord_str.split("/")[0]
    if ":" not in body:
        return Quality.MAJOR

    quality_part = body.split(":", 1)[1]
    if quality_part.startswith("("):
        degrees = [degree.strip() for degree in quality_part.strip("()").split(",")]
        if not all(degree in HARTE_DEGREE_TO_SEMITONES for degree in degrees):
            msg = f"Unsupported degree list in {chord_str!r}"
            raise InvalidChordName(msg)
        semitones = frozenset({0} | {HARTE_DEGREE_TO_SEMITONES[degree] for degree in degrees})
        for quality, intervals in QUALITY_TO_INTERVALS.items():
            if semitones == frozenset(intervals):
                return quality
        msg = f"Degree list of {chord_str!r} is not a triad"
        raise InvalidChordName(msg)

    if "(" in quality_part:
        msg = f"Harte symbol {chord_str!r} adds or omits degrees"
        raise InvalidChordName(msg)

    try:
        return harte_quality_to_quality(shorthand or quality_part)
    except ValueError as exc:
        raise InvalidChordName(str(exc)) from exc


def from_harte(chord_str: str, octave: int = DEFAULT_OCTAVE) -> Chord:
    """Parse a Harte notation string into a closed-voiced Chord.

    Parameters
    ----------
    chord_str : str
        Triad in Harte notation (e.g., "G:min", "C:maj/3", "F#:dim/b5").
    octave : int
        Octave of the root.

    Raises
    ------
    InvalidChordName
        If the symbol does not parse, the chord is not a triad, or the
        bass degree is not a chord tone.

    Examples
    --------
    >>> from_harte("C:maj/5").inversion
    <Inversion.SECOND: 'second'>
    """
    from harte.harte import Harte

    try:
        hc = Harte(chord_str)
    except Exception as exc:  # harte raises lark parse errors
        msg = f"Invalid Harte symbol {chord_str!r}: {exc}"
        raise InvalidChordName(msg) from exc

    root = hc.get_root()
    quality = _harte_quality(chord_str, hc.get_shorthand())

    inversion = Inversion.ROOT
    if "/" in chord_str:
        degree = chord_str.split("/")[-1]
        degrees = ("1", *HARTE_BASS_DEGREES[quality])
        if degree not in degrees:
            msg = f"Bass degree {degree} of {chord_str!r} is not a chord tone"
            raise InvalidChordName(msg)
        inversion = list(Inversion)[degrees.index(degree)]

    chord = Chord(_root_pitch(root, octave), quality, inversion)
    logger.debug("Parsed Harte %r as %s", chord_str, chord)
    return chord
