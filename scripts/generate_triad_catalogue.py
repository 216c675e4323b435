#!/usr/bin/env python3
"""Generate a catalogue of every triad variation and write it to JSON.

Each entry is one root x quality x inversion x voicing combination, with
its standard name, realized pitches and chord tones.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass
from itertools import product
from pathlib import Path
from typing import TYPE_CHECKING

from triad_theory import ChordTheory, Quality
from triad_theory.errors import InvalidOctaveRange
from triad_theory.pitch_class import SHARP_NAMES

if TYPE_CHECKING:
    from collections.abc import Iterable

    from triad_theory import Chord


@dataclass(frozen=True)
class TriadEntry:
    """A single triad entry in the catalogue."""

    name: str
    pitches: list[str]
    chord_tones: list[str]


def generate_triads(
    roots: Iterable[str] | None = None,
    qualities: Iterable[Quality | str] | None = None,
    octave: int = 4,
) -> list[Chord]:
    """Enumerate every inversion and voicing of every root and quality.

    Combinations whose pitches leave the 0-9 octave range are skipped.
    """
    theory = ChordTheory()
    roots = list(roots) if roots is not None else list(SHARP_NAMES)
    qualities = list(qualities) if qualities is not None else list(Quality)

    chords: list[Chord] = []
    for root, quality in product(roots, qualities):
        for chord in theory.get_all_chord_variations(root, quality, octave=octave):
            try:
                chord.get_pitches()
            except InvalidOctaveRange:
                continue
            chords.append(chord)
    return chords


def to_entry(chord: Chord) -> TriadEntry:
    return TriadEntry(
        name=chord.get_standard_name(include_octave=True),
        pitches=[str(p) for p in chord.get_pitches()],
        chord_tones=chord.get_chord_tones(),
    )


def write_json(path: Path, chords: Iterable[Chord]) -> int:
    """Write triad entries to a JSON file and return the entry count."""
    entries = [asdict(to_entry(chord)) for chord in chords]
    payload: dict[str, object] = {
        "schema": "triad-catalogue/v1",
        "count": len(entries),
        "chords": entries,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=False), encoding="utf-8")
    return len(entries)


def main() -> None:
    """Generate the triad catalogue and write it to JSON."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(__file__).parent.parent / "testdata" / "triad_catalogue.json",
        help="Destination JSON file",
    )
    parser.add_argument("--octave", type=int, default=4, help="Octave of every root")
    args = parser.parse_args()

    args.output.parent.mkdir(parents=True, exist_ok=True)
    count = write_json(args.output, generate_triads(octave=args.octave))
    print(f"Wrote {count} triads to {args.output.resolve()}")


if __name__ == "__main__":
    main()
