import random
import sys

from triad_theory import ChordTheory, to_pychord

theory = ChordTheory(rng=random.Random(7))

# Realize a chord from its standard name
chord = theory.parse_chord_name("A3_minor_first_open")
sys.stdout.write(" ".join(str(p) for p in chord.get_pitches()) + "\n")  # "C4 A4 E5"
sys.stdout.write(chord.get_display_name() + "\n")  # "A Minor 1st inversion"

# Draw a practice chord
drawn = theory.generate_random_chord({"qualities": ["major", "minor"], "voicings": ["closed"]})
sys.stdout.write(f"{drawn.get_standard_name()} ({to_pychord(drawn)})\n")

# Name the chord a set of notes spells
for match in theory.identify_chord_from_notes(["Eb", "G", "C"]):
    sys.stdout.write(match.get_standard_name() + "\n")  # "C_minor_root_closed"
