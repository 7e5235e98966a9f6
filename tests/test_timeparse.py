"""Tests for the meeting-time parser and day-code tokenizer."""
import pytest

from class_planner.models import TimeInterval
from class_planner.solver.timeparse import parse_times, tokenize_days


def _days(text: str) -> set:
    return {t.day for t in parse_times(text)}


def test_mwf_colon_format() -> None:
    assert parse_times("MWF 09:00-10:00") == [
        TimeInterval(1, 540, 600),
        TimeInterval(3, 540, 600),
        TimeInterval(5, 540, 600),
    ]


def test_tth_is_tuesday_and_thursday() -> None:
    # "TTH" must read as T + TH, never T + T + <unknown H>
    assert _days("TTH 13:00-14:30") == {2, 4}
    assert all((t.start, t.end) == (780, 870) for t in parse_times("TTH 13:00-14:30"))


def test_th_alone_is_thursday_not_tuesday() -> None:
    assert _days("TH 13:00-14:30") == {4}


def test_four_digit_times() -> None:
    assert parse_times("SAT 0800-1100") == [TimeInterval(6, 480, 660)]


def test_single_digit_hour() -> None:
    assert parse_times("M 7:30-9:00") == [TimeInterval(1, 450, 540)]


@pytest.mark.parametrize("text", ["TBA", "tba", "Lecture TBA", "", None])
def test_tba_and_empty_give_no_intervals(text) -> None:
    assert parse_times(text) == []


def test_multiple_clauses() -> None:
    got = parse_times("TTH 10:30-12:00; F 14:00-17:00")
    assert TimeInterval(2, 630, 720) in got
    assert TimeInterval(4, 630, 720) in got
    assert TimeInterval(5, 840, 1020) in got
    assert len(got) == 3


def test_separators_are_skipped() -> None:
    assert _days("M | W - F 09:00-10:00") == {1, 3, 5}


def test_bad_clause_skipped_not_fatal() -> None:
    # second clause has no time range, third has no day code
    got = parse_times("MW 08:00-09:00; F morning; 10:00-11:00")
    assert {t.day for t in got} == {1, 3}


def test_garbage_returns_empty() -> None:
    assert parse_times("see department") == []


def test_tokenizer_greedy_longest_match() -> None:
    assert tokenize_days("SAT") == [6]
    assert tokenize_days("TTH") == [2, 4]
    assert tokenize_days("MTWTHF") == [1, 2, 3, 4, 5]
    assert tokenize_days("M-W|F") == [1, 3, 5]


def test_tokenizer_collapses_repeats() -> None:
    assert tokenize_days("MM W") == [1, 3]


def test_end_before_start_clause_dropped() -> None:
    # no am/pm: "11:30-1:00" reads as 690-60 and is treated as malformed
    assert parse_times("TTH 11:30-1:00") == []
    assert parse_times("TTH 11:30-1:00; F 09:00-10:00") == [TimeInterval(5, 540, 600)]
