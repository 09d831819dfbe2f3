from types import SimpleNamespace

import pytest

from clinic.domain.doctors.filters import TimeOfDay, filter_doctors, is_no_filter


def doctor(name, specialty, slots):
    return SimpleNamespace(name=name, specialty=specialty, available_times=slots)


MORNING_ONLY = doctor("Alice Morgan", "Cardiology", ["09:00-10:00"])
AFTERNOON_ONLY = doctor("Bob Stone", "Dermatology", ["14:00-15:00"])
MIXED = doctor("Carol Alison", "cardiology", ["11:00-12:00", "12:00-13:00"])
BROKEN = doctor("Dan Broken", "Cardiology", ["garbage", "15:00-16:00"])
DOCTORS = [MORNING_ONLY, AFTERNOON_ONLY, MIXED, BROKEN]


@pytest.mark.parametrize("value", [None, "", "  ", "null", "NULL", " Null "])
def test_no_filter_sentinels(value):
    assert is_no_filter(value)
    assert TimeOfDay.parse(value) is None


@pytest.mark.parametrize("value", ["all", "none", "any"])
def test_other_words_are_search_terms(value):
    assert not is_no_filter(value)
    with pytest.raises(ValueError):
        TimeOfDay.parse(value)


def test_name_all_matches_only_names_containing_it():
    allison = doctor("Allison Hart", "Cardiology", ["09:00-10:00"])
    bob = doctor("Bob Stone", "Cardiology", ["09:00-10:00"])
    assert filter_doctors([allison, bob], name="all") == [allison]


def test_parse_time_of_day():
    assert TimeOfDay.parse("AM") is TimeOfDay.MORNING
    assert TimeOfDay.parse("afternoon") is TimeOfDay.AFTERNOON
    with pytest.raises(ValueError):
        TimeOfDay.parse("evening")


def test_no_filters_returns_everyone_in_order():
    assert filter_doctors(DOCTORS, "null", "null", None) == DOCTORS


def test_morning_predicate():
    assert filter_doctors(DOCTORS, time_of_day=TimeOfDay.MORNING) == [MORNING_ONLY, MIXED]


def test_afternoon_predicate_skips_malformed_slot():
    # 12:00 counts as afternoon
    assert filter_doctors(DOCTORS, time_of_day=TimeOfDay.AFTERNOON) == [
        AFTERNOON_ONLY,
        MIXED,
        BROKEN,
    ]


def test_name_is_case_insensitive_substring():
    assert filter_doctors(DOCTORS, name="ALI") == [MORNING_ONLY, MIXED]


def test_specialty_is_case_insensitive_equality():
    assert filter_doctors(DOCTORS, specialty="Cardiology") == [MORNING_ONLY, MIXED, BROKEN]
    assert filter_doctors(DOCTORS, specialty="Cardio") == []


def test_predicates_combine():
    assert filter_doctors(DOCTORS, specialty="cardiology", time_of_day=TimeOfDay.MORNING) == [
        MORNING_ONLY,
        MIXED,
    ]
