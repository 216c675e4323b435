"""Pitch class operations on bare note names.

This module works with note names that carry no octave ("C", "F#",
"Bb") and their pitch classes (0-11, C=0). It holds the spelling tables
shared by :mod:`triad_theory.pitch` and :mod:`triad_theory.models`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

# Spellings a Pitch may carry: naturals plus the single-accidental
# black-key names. E#, B#, Fb and Cb are recognised as input only.
PITCH_SPELLINGS: dict[str, int] = {
    note: pc for note, pc in NOTE_TO_PC.items() if note not in ("Fb", "E#", "Cb", "B#")
}

SHARP_NAMES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NAMES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

LETTERS = "CDEFGAB"
NATURAL_PC: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb", "E#").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("C")
    0
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("Cb")
    11
    """
    if note in NOTE_TO_PC:
        return NOTE_TO_PC[note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int, *, prefer_flats: bool = False) -> str:
    """Spell a pitch class with the sharp (default) or flat table.

    Examples
    --------
    >>> pc_to_note(1)
    'C#'
    >>> pc_to_note(13, prefer_flats=True)
    'Db'
    """
    names = FLAT_NAMES if prefer_flats else SHARP_NAMES
    return names[pc % 12]


def normalize_note(note: str) -> str:
    """Normalize a note name to its sharp-table spelling.

    Surrounding whitespace is ignored and the letter may be lowercase.

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> normalize_note(" db ")
    'C#'
    >>> normalize_note("E#")
    'F'
    """
    cleaned = note.strip()
    if cleaned:
        cleaned = cleaned[0].upper() + cleaned[1:]
    return pc_to_note(note_to_pc(cleaned))


def interval_between(lower: str, upper: str) -> int:
    """Ascending distance in semitones from ``lower`` up to ``upper`` (0-11).

    Examples
    --------
    >>> interval_between("C", "E")
    4
    >>> interval_between("A", "C")
    3
    """
    return (note_to_pc(upper) - note_to_pc(lower)) % 12


def pitch_class_set(notes: Iterable[str]) -> frozenset[int]:
    """Convert note names to a set of pitch classes.

    Examples
    --------
    >>> sorted(pitch_class_set(["C", "E", "G", "C"]))
    [0, 4, 7]
    >>> pitch_class_set(["C#"]) == pitch_class_set(["Db"])
    True
    """
    return frozenset(note_to_pc(note) for note in notes)


def pitch_class_jaccard(pc1: frozenset[int], pc2: frozenset[int]) -> float:
    """Compute Jaccard similarity between two pitch class sets.

    Parameters
    ----------
    pc1 : frozenset[int]
        First set of pitch classes.
    pc2 : frozenset[int]
        Second set of pitch classes.

    Returns
    -------
    float
        Jaccard similarity (0.0 to 1.0).

    Examples
    --------
    >>> pitch_class_jaccard(frozenset({0, 4, 7}), frozenset({0, 4, 7}))
    1.0
    >>> pitch_class_jaccard(frozenset({0, 4, 7}), frozenset({0, 3, 7}))
    0.5
    """
    if not pc1 or not pc2:
        return 0.0
    intersection = len(pc1 & pc2)
    union = len(pc1 | pc2)
    return intersection / union if union > 0 else 0.0


def _spell_on_letter(letter: str, pc: int) -> str | None:
    """Spell ``pc`` on ``letter`` with at most one accidental."""
    alter = (pc - NATURAL_PC[letter]) % 12
    if alter == 0:
        return letter
    if alter == 1:
        return f"{letter}#"
    if alter == 11:
        return f"{letter}b"
    return None


def spell_triad(root: str, intervals: Sequence[int]) -> list[str]:
    """Spell the tones of a stacked-thirds chord.

    Tone ``i`` sits ``2 * i`` letters above the root letter, with whatever
    single accidental reaches its pitch class. Tones that would need a
    double accidental, or land on E#, B#, Fb or Cb, fall back to the flat
    table for flat-spelled roots and the sharp table otherwise.

    Parameters
    ----------
    root : str
        Root note name, kept as given.
    intervals : Sequence[int]
        Semitones above the root, starting with 0.

    Returns
    -------
    list[str]
        One note name per interval.

    Examples
    --------
    >>> spell_triad("C", [0, 3, 6])
    ['C', 'Eb', 'Gb']
    >>> spell_triad("Db", [0, 4, 7])
    ['Db', 'F', 'Ab']
    >>> spell_triad("C#", [0, 4, 7])
    ['C#', 'F', 'G#']
    """
    root_pc = note_to_pc(root)
    prefer_flats = root.endswith("b")
    letter_index = LETTERS.index(root[0])

    tones: list[str] = []
    for position, interval in enumerate(intervals):
        pc = (root_pc + interval) % 12
        if position == 0:
            tones.append(root)
            continue
        letter = LETTERS[(letter_index + 2 * position) % len(LETTERS)]
        name = _spell_on_letter(letter, pc)
        if name is None or name not in PITCH_SPELLINGS:
            name = pc_to_note(pc, prefer_flats=prefer_flats)
        tones.append(name)
    return tones
