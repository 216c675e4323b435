"""Tests for note-name pitch class helpers."""

import pytest

from triad_theory.pitch_class import (
    interval_between,
    normalize_note,
    note_to_pc,
    pc_to_note,
    pitch_class_jaccard,
    pitch_class_set,
    spell_triad,
)


class TestNoteToPc:
    @pytest.mark.parametrize(
        ("note", "pc"),
        [("C", 0), ("C#", 1), ("Db", 1), ("E", 4), ("Fb", 4), ("E#", 5), ("B", 11), ("Cb", 11), ("B#", 0)],
    )
    def test_known_notes(self, note: str, pc: int) -> None:
        assert note_to_pc(note) == pc

    def test_unknown_note_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown note"):
            note_to_pc("H")


class TestSpelling:
    def test_pc_to_note(self) -> None:
        assert pc_to_note(10) == "A#"
        assert pc_to_note(10, prefer_flats=True) == "Bb"
        assert pc_to_note(-1) == "B"

    @pytest.mark.parametrize(
        ("note", "expected"),
        [("Db", "C#"), (" bb", "A#"), ("E#", "F"), ("Cb", "B"), ("g", "G"), ("F#", "F#")],
    )
    def test_normalize_note(self, note: str, expected: str) -> None:
        assert normalize_note(note) == expected

    def test_normalize_invalid(self) -> None:
        with pytest.raises(ValueError):
            normalize_note("X")

    def test_spell_triad_keeps_letters_ascending(self) -> None:
        assert spell_triad("Eb", [0, 4, 7]) == ["Eb", "G", "Bb"]
        assert spell_triad("B", [0, 4, 7]) == ["B", "D#", "F#"]

    def test_spell_triad_falls_back_on_double_accidentals(self) -> None:
        assert spell_triad("D#", [0, 4, 7]) == ["D#", "G", "A#"]
        assert spell_triad("Gb", [0, 3, 7]) == ["Gb", "A", "Db"]


class TestIntervalsAndSets:
    def test_interval_between(self) -> None:
        assert interval_between("C", "G") == 7
        assert interval_between("G", "C") == 5
        assert interval_between("C#", "Db") == 0

    def test_pitch_class_set_is_enharmonic(self) -> None:
        assert pitch_class_set(["C#", "F", "G#"]) == pitch_class_set(["Db", "E#", "Ab"])

    def test_jaccard(self) -> None:
        assert pitch_class_jaccard(frozenset({0, 4, 7}), frozenset({0, 4, 7})) == 1.0
        assert pitch_class_jaccard(frozenset({0, 4, 7}), frozenset({0, 3, 7})) == 0.5
        assert pitch_class_jaccard(frozenset(), frozenset({0})) == 0.0
