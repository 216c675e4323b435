"""Chord parsing, generation, enumeration and recognition.

:class:`ChordTheory` is the service layer over :class:`~triad_theory.models.Chord`.
It reads standard chord names such as ``C4_major_root_closed``, draws
random triads under constraints, enumerates the voicings of a triad and
identifies triads from an unordered collection of note names.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, fields
from itertools import product
from typing import TYPE_CHECKING, Any

from triad_theory.errors import (
    EmptyConstraintSet,
    InvalidChordName,
    InvalidPitchNotation,
    TriadTheoryError,
)
from triad_theory.models import (
    QUALITY_TO_INTERVALS,
    Chord,
    Inversion,
    Quality,
    Voicing,
    to_inversion,
    to_quality,
    to_voicing,
)
from triad_theory.pitch import Pitch
from triad_theory.pitch_class import (
    PITCH_SPELLINGS,
    SHARP_NAMES,
    note_to_pc,
    pitch_class_jaccard,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

DEFAULT_OCTAVE = 4
NAME_SEPARATOR = "_"

# Root field of a standard name: note with optional octave digits
ROOT_FIELD_RE = re.compile(r"([A-G][#b]?)([0-9]+)?")


@dataclass(frozen=True)
class GenerationConstraints:
    """Domains that :meth:`ChordTheory.generate_random_chord` draws from.

    Parameters
    ----------
    roots : tuple[str, ...]
        Root note names (default: the twelve sharp-spelled pitch classes).
    qualities : tuple[Quality, ...]
        Allowed qualities (default: all four).
    inversions : tuple[Inversion, ...]
        Allowed inversions (default: all three).
    voicings : tuple[Voicing, ...]
        Allowed voicings (default: both).

    A single string counts as a one-value domain and ``None`` as the
    default domain. Repeated values are kept once, in first-seen order.

    Raises
    ------
    EmptyConstraintSet
        If any domain is empty.
    InvalidPitchNotation
        If a root is not a note name.
    InvalidQuality, InvalidInversion, InvalidVoicing
        If a domain holds an unknown value.
    """

    roots: tuple[str, ...] = SHARP_NAMES
    qualities: tuple[Quality, ...] = tuple(Quality)
    inversions: tuple[Inversion, ...] = tuple(Inversion)
    voicings: tuple[Voicing, ...] = tuple(Voicing)

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                value = field.default
            elif isinstance(value, str):
                value = (value,)
            values = tuple(value)
            if not values:
                msg = f"Constraint '{field.name}' must not be empty"
                raise EmptyConstraintSet(msg)
            object.__setattr__(self, field.name, values)

        for root in self.roots:
            if root not in PITCH_SPELLINGS:
                msg = f"Invalid root note: {root!r}"
                raise InvalidPitchNotation(msg)
        # Repeated entries would weight the draw
        object.__setattr__(self, "roots", tuple(dict.fromkeys(self.roots)))
        object.__setattr__(self, "qualities", tuple(dict.fromkeys(to_quality(q) for q in self.qualities)))
        object.__setattr__(self, "inversions", tuple(dict.fromkeys(to_inversion(i) for i in self.inversions)))
        object.__setattr__(self, "voicings", tuple(dict.fromkeys(to_voicing(v) for v in self.voicings)))

    @classmethod
    def from_mapping(cls, config: Mapping[str, Iterable[Any]]) -> GenerationConstraints:
        """Build constraints from a plain mapping; absent keys keep their defaults.

        Raises
        ------
        ValueError
            If the mapping has keys other than ``roots``, ``qualities``,
            ``inversions`` and ``voicings``.
        EmptyConstraintSet
            If a supplied collection is empty.

        Examples
        --------
        >>> GenerationConstraints.from_mapping({"roots": ["D"]}).roots
        ('D',)
        """
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            msg = f"Unknown constraint keys: {', '.join(unknown)}"
            raise ValueError(msg)
        return cls(**config)

    @property
    def size(self) -> int:
        """Number of distinct (root, quality, inversion, voicing) combinations."""
        return len(self.roots) * len(self.qualities) * len(self.inversions) * len(self.voicings)


def _parse_root(field: str, default_octave: int) -> Pitch:
    match = ROOT_FIELD_RE.fullmatch(field)
    if match is None:
        msg = f"Invalid root: {field!r}"
        raise InvalidPitchNotation(msg)
    note, octave = match.groups()
    return Pitch(note=note, octave=int(octave) if octave is not None else default_octave)


class ChordTheory:
    """Builds, parses, enumerates and identifies triads.

    Parameters
    ----------
    rng : random.Random | None
        Source of randomness for :meth:`generate_random_chord`. Pass a
        seeded instance for reproducible draws.

    Examples
    --------
    >>> theory = ChordTheory()
    >>> theory.parse_chord_name("D4_minor_root_closed").get_chord_tones()
    ['D', 'F', 'A']
    >>> [c.get_standard_name() for c in theory.identify_chord_from_notes(["E", "G", "C"])]
    ['C_major_root_closed']
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def parse_chord_name(self, name: str, *, default_octave: int = DEFAULT_OCTAVE) -> Chord:
        """Parse a standard chord name into a :class:`Chord`.

        Parameters
        ----------
        name : str
            ``<Root>[Octave]_<quality>_<inversion>_<voicing>``, e.g.
            ``C_major_root_closed`` or ``Bb3_minor_first_open``.
        default_octave : int
            Octave used when the root field carries none.

        Returns
        -------
        Chord
            The parsed chord.

        Raises
        ------
        InvalidChordName
            If the name does not have four fields or any field is invalid.
        """
        if not isinstance(name, str):
            msg = f"Chord name must be a string, got {type(name).__name__}"
            raise InvalidChordName(msg)

        parts = name.split(NAME_SEPARATOR)
        if len(parts) != 4:
            msg = f"Invalid chord name {name!r}: expected 4 fields, got {len(parts)}"
            raise InvalidChordName(msg)

        root, quality, inversion, voicing = parts
        try:
            return Chord(_parse_root(root, default_octave), quality, inversion, voicing)
        except TriadTheoryError as exc:
            msg = f"Invalid chord name {name!r}: {exc}"
            raise InvalidChordName(msg) from exc

    def generate_random_chord(
        self,
        constraints: GenerationConstraints | Mapping[str, Iterable[Any]] | None = None,
        *,
        octave: int = DEFAULT_OCTAVE,
    ) -> Chord:
        """Draw a chord uniformly from the constrained combinations.

        Parameters
        ----------
        constraints : GenerationConstraints | Mapping | None
            Restrictions on roots, qualities, inversions and voicings.
            A mapping uses those names as keys. Absent keys and ``None``
            mean the full domain.
        octave : int
            Octave of the root.

        Raises
        ------
        EmptyConstraintSet
            If a supplied constraint is empty.
        """
        if constraints is None:
            constraints = GenerationConstraints()
        elif not isinstance(constraints, GenerationConstraints):
            constraints = GenerationConstraints.from_mapping(constraints)

        root = self._rng.choice(constraints.roots)
        quality = self._rng.choice(constraints.qualities)
        inversion = self._rng.choice(constraints.inversions)
        voicing = self._rng.choice(constraints.voicings)
        logger.debug(
            "Drew %s %s %s %s from %d combinations",
            root,
            quality.value,
            inversion.value,
            voicing.value,
            constraints.size,
        )
        return Chord(Pitch(note=root, octave=octave), quality, inversion, voicing)

    def validate_progression(self, names: Iterable[str]) -> bool:
        """Check that every name in a progression parses to a chord.

        This is a structural check only; it does not judge harmony or
        voice leading. An empty progression is valid.
        """
        for position, name in enumerate(names):
            try:
                self.parse_chord_name(name)
            except InvalidChordName as exc:
                logger.debug("Progression rejected at position %d: %s", position, exc)
                return False
        return True

    def get_all_chord_variations(
        self,
        root: str,
        quality: Quality | str,
        *,
        octave: int = DEFAULT_OCTAVE,
    ) -> list[Chord]:
        """Return the chord in every inversion and voicing.

        Chords are ordered by inversion (root, first, second), then by
        voicing (closed, open).

        Parameters
        ----------
        root : str
            Root note, optionally with an octave ("C" or "C3").
        quality : Quality | str
            Triad quality.
        octave : int
            Octave used when ``root`` carries none.
        """
        root_pitch = _parse_root(root, octave)
        return [
            Chord(root_pitch, quality, inversion, voicing)
            for inversion, voicing in product(Inversion, Voicing)
        ]

    def identify_chord_from_notes(self, note_names: Iterable[str]) -> list[Chord]:
        """Find every triad whose chord tones are exactly the given notes.

        Notes are compared as pitch classes, so ``Db`` matches ``C#`` and
        repeated notes are ignored. Each note is tried as a root against
        every quality. Without bass information the inversion cannot be
        recovered, so matches are returned in root position, closed, at
        octave 4.

        Parameters
        ----------
        note_names : Iterable[str]
            Note names without octave, in any order.

        Returns
        -------
        list[Chord]
            All matches; empty when nothing matches or a name is unknown.

        Examples
        --------
        >>> theory = ChordTheory()
        >>> [str(c.root) for c in theory.identify_chord_from_notes(["C", "E", "G#"])]
        ['C4', 'E4', 'G#4']
        """
        names = list(note_names)
        try:
            target = frozenset(note_to_pc(name) for name in names)
        except ValueError as exc:
            logger.debug("Cannot identify %s: %s", names, exc)
            return []

        matches: list[Chord] = []
        tried_roots: set[int] = set()
        for name in names:
            root_pc = note_to_pc(name)
            if root_pc in tried_roots:
                continue
            tried_roots.add(root_pc)

            spelling = name if name in PITCH_SPELLINGS else SHARP_NAMES[root_pc]
            for quality, intervals in QUALITY_TO_INTERVALS.items():
                expected = frozenset((root_pc + interval) % 12 for interval in intervals)
                if expected == target:
                    logger.debug("Notes %s match %s %s", names, spelling, quality.value)
                    matches.append(Chord(Pitch(note=spelling, octave=DEFAULT_OCTAVE), quality))
        return matches

    def closest_chords(self, note_names: Iterable[str], limit: int = 5) -> list[tuple[Chord, float]]:
        """Rank triads by pitch-class overlap with the given notes.

        Useful for incomplete or noisy input where
        :meth:`identify_chord_from_notes` finds nothing. Similarity is the
        Jaccard index of the pitch-class sets; chords sharing no note are
        left out. Ties keep chromatic root order, then quality order.

        Parameters
        ----------
        note_names : Iterable[str]
            Note names without octave.
        limit : int
            Maximum number of results.

        Returns
        -------
        list[tuple[Chord, float]]
            ``(chord, similarity)`` pairs, best first.

        Raises
        ------
        ValueError
            If a note name is not recognized.
        """
        pcs: set[int] = set()
        spellings: dict[int, str] = {}
        for name in note_names:
            pc = note_to_pc(name)
            pcs.add(pc)
            if name in PITCH_SPELLINGS:
                spellings.setdefault(pc, name)
        target = frozenset(pcs)
        if not target:
            return []

        scored: list[tuple[Chord, float]] = []
        for root_pc, (quality, intervals) in product(range(12), QUALITY_TO_INTERVALS.items()):
            candidate = frozenset((root_pc + interval) % 12 for interval in intervals)
            score = pitch_class_jaccard(candidate, target)
            if score > 0:
                root = Pitch(note=spellings.get(root_pc, SHARP_NAMES[root_pc]), octave=DEFAULT_OCTAVE)
                scored.append((Chord(root, quality), score))

        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:limit]
