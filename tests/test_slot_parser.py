import random

from slot_parser import parse, parse_lab_slots, render, toggle
from timeslots import ALL_THEORY_SLOTS


def test_parse_basic_pattern():
    assert parse("A1+TG1") == ["A1", "TG1"]


def test_parse_mixed_delimiters_collapse():
    assert parse("A1 ++ B1,,C1\tD1  ,+E1") == ["A1", "B1", "C1", "D1", "E1"]


def test_parse_drops_unknown_tokens_keeping_order():
    assert parse("X9+B2+foo+A1+T") == ["B2", "A1"]


def test_parse_is_case_sensitive():
    assert parse("a1+A1") == ["A1"]


def test_parse_dedupes_first_occurrence_wins():
    assert parse("B1+A1+B1") == ["B1", "A1"]


def test_parse_empty_and_none():
    assert parse("") == []
    assert parse("   ,+ ") == []
    assert parse(None) == []


def test_round_trip_random_samples():
    rng = random.Random(7)
    for _ in range(50):
        sample = rng.sample(ALL_THEORY_SLOTS, rng.randint(0, 8))
        assert parse(render(sample)) == sample


def test_toggle_adds_and_removes():
    slots = toggle([], "A1")
    assert slots == ["A1"]
    slots = toggle(slots, "TG1")
    assert slots == ["A1", "TG1"]
    slots = toggle(slots, "A1")
    assert slots == ["TG1"]
    assert parse(render(slots)) == slots


def test_toggle_does_not_mutate_input():
    original = ["A1"]
    toggle(original, "B1")
    assert original == ["A1"]


def test_parse_lab_slots():
    assert parse_lab_slots("L1+L2, A1 L99 L1") == ["L1", "L2"]
