"""Tests for ChordTheory parsing, generation, enumeration and identification."""

import random
from collections import Counter

import pytest

from triad_theory import (
    ChordTheory,
    EmptyConstraintSet,
    GenerationConstraints,
    InvalidChordName,
    InvalidPitchNotation,
    InvalidQuality,
    Inversion,
    Pitch,
    Quality,
    Voicing,
)


@pytest.fixture
def theory() -> ChordTheory:
    """ChordTheory with a seeded random source."""
    return ChordTheory(rng=random.Random(1234))


class TestParseChordName:
    def test_without_octave_defaults_to_four(self, theory: ChordTheory) -> None:
        chord = theory.parse_chord_name("C_major_root_closed")
        assert chord.root == Pitch("C", 4)
        assert chord.quality is Quality.MAJOR

    def test_with_octave(self, theory: ChordTheory) -> None:
        chord = theory.parse_chord_name("Bb3_minor_first_open")
        assert chord.root == Pitch("Bb", 3)
        assert chord.inversion is Inversion.FIRST
        assert chord.voicing is Voicing.OPEN

    def test_custom_default_octave(self, theory: ChordTheory) -> None:
        assert theory.parse_chord_name("D_minor_root_closed", default_octave=2).root == Pitch("D", 2)

    def test_round_trips_standard_name(self, theory: ChordTheory) -> None:
        for name in ["F#_diminished_second_open", "Ab_augmented_first_closed"]:
            assert theory.parse_chord_name(name).get_standard_name() == name

    @pytest.mark.parametrize(
        "name",
        [
            "C_major_root",
            "C_major_root_closed_extra",
            "",
            "H_major_root_closed",
            "C_dominant_root_closed",
            "C_major_third_closed",
            "C_major_root_wide",
            "C10_major_root_closed",
            "c_major_root_closed",
            "C_Major_root_closed",
            "C4\n_major_root_closed",
            "C\u0664_major_root_closed",
        ],
    )
    def test_invalid_names(self, theory: ChordTheory, name: str) -> None:
        with pytest.raises(InvalidChordName):
            theory.parse_chord_name(name)

    def test_cause_is_chained(self, theory: ChordTheory) -> None:
        with pytest.raises(InvalidChordName) as excinfo:
            theory.parse_chord_name("C_dominant_root_closed")
        assert isinstance(excinfo.value.__cause__, InvalidQuality)

    def test_non_string(self, theory: ChordTheory) -> None:
        with pytest.raises(InvalidChordName):
            theory.parse_chord_name(None)  # type: ignore[arg-type]


class TestGenerateRandomChord:
    def test_unconstrained(self, theory: ChordTheory) -> None:
        chord = theory.generate_random_chord()
        assert chord.root.octave == 4
        assert len(chord.get_pitches()) == 3

    def test_respects_constraints(self, theory: ChordTheory) -> None:
        constraints = {
            "roots": ["D", "Eb"],
            "qualities": ["minor"],
            "inversions": ["first", "second"],
            "voicings": ["open"],
        }
        for _ in range(50):
            chord = theory.generate_random_chord(constraints)
            assert chord.root.note in {"D", "Eb"}
            assert chord.quality is Quality.MINOR
            assert chord.inversion in {Inversion.FIRST, Inversion.SECOND}
            assert chord.voicing is Voicing.OPEN

    def test_partial_constraints_keep_defaults(self, theory: ChordTheory) -> None:
        seen = Counter(theory.generate_random_chord({"roots": ["G"]}).quality for _ in range(200))
        assert set(seen) == set(Quality)

    def test_covers_every_combination(self, theory: ChordTheory) -> None:
        constraints = GenerationConstraints(roots=("C", "F"), qualities=(Quality.MAJOR,))
        names = {theory.generate_random_chord(constraints).get_standard_name() for _ in range(500)}
        assert len(names) == constraints.size == 12

    def test_seeded_generation_is_reproducible(self) -> None:
        first = ChordTheory(rng=random.Random(99))
        second = ChordTheory(rng=random.Random(99))
        assert [str(first.generate_random_chord()) for _ in range(10)] == [
            str(second.generate_random_chord()) for _ in range(10)
        ]

    def test_octave(self, theory: ChordTheory) -> None:
        assert theory.generate_random_chord(octave=2).root.octave == 2

    @pytest.mark.parametrize("key", ["roots", "qualities", "inversions", "voicings"])
    def test_empty_constraint(self, theory: ChordTheory, key: str) -> None:
        with pytest.raises(EmptyConstraintSet):
            theory.generate_random_chord({key: []})

    def test_unknown_constraint_key(self, theory: ChordTheory) -> None:
        with pytest.raises(ValueError, match="Unknown constraint keys"):
            theory.generate_random_chord({"tempo": [120]})

    def test_invalid_constraint_values(self) -> None:
        with pytest.raises(InvalidQuality):
            GenerationConstraints(qualities=("sus4",))
        with pytest.raises(InvalidPitchNotation):
            GenerationConstraints(roots=("H",))

    def test_repeated_values_do_not_weight_the_draw(self, theory: ChordTheory) -> None:
        constraints = GenerationConstraints.from_mapping(
            {"roots": ["C", "C", "C", "D"], "qualities": ["minor", "minor"]}
        )
        assert constraints.roots == ("C", "D")
        assert constraints.qualities == (Quality.MINOR,)
        assert constraints.size == 2 * 1 * 3 * 2

        seen = Counter(theory.generate_random_chord(constraints).root.note for _ in range(4000))
        assert set(seen) == {"C", "D"}
        assert 1700 < seen["C"] < 2300

    def test_single_string_is_one_value(self) -> None:
        constraints = GenerationConstraints.from_mapping({"roots": "Bb", "qualities": "diminished"})
        assert constraints.roots == ("Bb",)
        assert constraints.qualities == (Quality.DIMINISHED,)

    def test_none_keeps_default_domain(self, theory: ChordTheory) -> None:
        constraints = GenerationConstraints.from_mapping({"roots": ["E"], "qualities": None})
        assert constraints.qualities == tuple(Quality)
        assert theory.generate_random_chord({"voicings": None}).voicing in set(Voicing)


class TestValidateProgression:
    def test_valid(self, theory: ChordTheory) -> None:
        names = ["C_major_root_closed", "A3_minor_first_closed", "F_major_second_open", "G_major_root_closed"]
        assert theory.validate_progression(names) is True

    def test_empty_is_valid(self, theory: ChordTheory) -> None:
        assert theory.validate_progression([]) is True

    def test_invalid_name_returns_false(self, theory: ChordTheory) -> None:
        assert theory.validate_progression(["C_major_root_closed", "C_major"]) is False

    def test_unrecognised_field_returns_false(self, theory: ChordTheory) -> None:
        assert theory.validate_progression(["C_sus4_root_closed"]) is False


class TestGetAllChordVariations:
    def test_count_and_order(self, theory: ChordTheory) -> None:
        variations = theory.get_all_chord_variations("C", "major")
        assert [(c.inversion.value, c.voicing.value) for c in variations] == [
            ("root", "closed"),
            ("root", "open"),
            ("first", "closed"),
            ("first", "open"),
            ("second", "closed"),
            ("second", "open"),
        ]

    def test_share_root_and_quality(self, theory: ChordTheory) -> None:
        variations = theory.get_all_chord_variations("F#", Quality.DIMINISHED)
        assert {str(c.root) for c in variations} == {"F#4"}
        assert {c.quality for c in variations} == {Quality.DIMINISHED}

    def test_contains_required_variants(self, theory: ChordTheory) -> None:
        variations = theory.get_all_chord_variations("C", "major")
        assert len(variations) >= 6
        assert any(c.inversion is Inversion.FIRST for c in variations)
        assert any(c.inversion is Inversion.ROOT for c in variations)
        assert any(c.voicing is Voicing.OPEN for c in variations)

    def test_root_with_octave(self, theory: ChordTheory) -> None:
        assert {str(c.root) for c in theory.get_all_chord_variations("A2", "minor")} == {"A2"}

    def test_invalid_quality(self, theory: ChordTheory) -> None:
        with pytest.raises(InvalidQuality):
            theory.get_all_chord_variations("C", "power")


class TestIdentifyChordFromNotes:
    def test_c_major(self, theory: ChordTheory) -> None:
        names = [c.get_standard_name() for c in theory.identify_chord_from_notes(["C", "E", "G"])]
        assert names == ["C_major_root_closed"]
        assert any(name.startswith("C_major") for name in names)

    def test_order_does_not_matter(self, theory: ChordTheory) -> None:
        names = [c.get_standard_name() for c in theory.identify_chord_from_notes(["G", "C", "E"])]
        assert names == ["C_major_root_closed"]

    @pytest.mark.parametrize(
        ("notes", "expected"),
        [
            (["A", "C", "E"], "A_minor_root_closed"),
            (["B", "D", "F"], "B_diminished_root_closed"),
            (["Db", "F", "Ab"], "Db_major_root_closed"),
            (["F#", "A", "C#"], "F#_minor_root_closed"),
        ],
    )
    def test_single_matches(self, theory: ChordTheory, notes, expected) -> None:
        assert [c.get_standard_name() for c in theory.identify_chord_from_notes(notes)] == [expected]

    def test_enharmonic_input(self, theory: ChordTheory) -> None:
        names = [c.get_standard_name() for c in theory.identify_chord_from_notes(["C", "Fb", "G"])]
        assert names == ["C_major_root_closed"]

    def test_enharmonic_root_is_respelled(self, theory: ChordTheory) -> None:
        chords = theory.identify_chord_from_notes(["E#", "A", "C"])
        assert [c.get_standard_name() for c in chords] == ["F_major_root_closed"]

    def test_augmented_is_ambiguous(self, theory: ChordTheory) -> None:
        chords = theory.identify_chord_from_notes(["C", "E", "G#"])
        assert [c.get_standard_name() for c in chords] == [
            "C_augmented_root_closed",
            "E_augmented_root_closed",
            "G#_augmented_root_closed",
        ]

    def test_duplicates_are_ignored(self, theory: ChordTheory) -> None:
        chords = theory.identify_chord_from_notes(["C", "E", "G", "C", "G"])
        assert [c.get_standard_name() for c in chords] == ["C_major_root_closed"]

    def test_enharmonic_duplicate_root_emitted_once(self, theory: ChordTheory) -> None:
        chords = theory.identify_chord_from_notes(["C#", "Db", "F", "G#"])
        assert [c.get_standard_name() for c in chords] == ["C#_major_root_closed"]

    def test_defaults_position(self, theory: ChordTheory) -> None:
        (chord,) = theory.identify_chord_from_notes(["E", "G", "C"])
        assert chord.inversion is Inversion.ROOT
        assert chord.voicing is Voicing.CLOSED
        assert chord.root.octave == 4

    @pytest.mark.parametrize(
        "notes",
        [[], ["C"], ["C", "E"], ["C", "E", "G", "B"], ["C", "D", "E"], ["C", "E", "H"]],
    )
    def test_no_match_returns_empty(self, theory: ChordTheory, notes) -> None:
        assert theory.identify_chord_from_notes(notes) == []

    def test_every_generated_chord_is_identified(self, theory: ChordTheory) -> None:
        for _ in range(100):
            chord = theory.generate_random_chord()
            matches = theory.identify_chord_from_notes(chord.get_chord_tones())
            assert any(
                m.root.pitch_class == chord.root.pitch_class and m.quality is chord.quality for m in matches
            )


class TestClosestChords:
    def test_exact_match_ranks_first(self, theory: ChordTheory) -> None:
        chord, score = theory.closest_chords(["C", "E", "G"])[0]
        assert chord.get_standard_name() == "C_major_root_closed"
        assert score == 1.0

    def test_partial_input(self, theory: ChordTheory) -> None:
        results = theory.closest_chords(["C", "E"], limit=3)
        assert len(results) == 3
        assert all(score == pytest.approx(2 / 3) for _, score in results)
        assert results[0][0].get_standard_name() == "C_major_root_closed"

    def test_keeps_input_spelling(self, theory: ChordTheory) -> None:
        chord, _ = theory.closest_chords(["Eb", "G", "Bb"])[0]
        assert chord.get_standard_name() == "Eb_major_root_closed"

    def test_empty(self, theory: ChordTheory) -> None:
        assert theory.closest_chords([]) == []
