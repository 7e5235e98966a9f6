"""Tests for schedule canonicalisation and duplicate removal."""
from class_planner.models import CourseSection
from class_planner.solver.dedupe import dedupe, schedule_key


A = CourseSection("CS101", "A")
B = CourseSection("CS101", "B")
M = CourseSection("MATH1", "A")


def test_key_is_sorted_by_requirement_id() -> None:
    assert schedule_key({"MATH1": M, "CS101": A}) == "CS101:CS101:A|MATH1:MATH1:A"
    assert schedule_key({"CS101": A, "MATH1": M}) == schedule_key({"MATH1": M, "CS101": A})


def test_first_occurrence_kept_in_order() -> None:
    s1 = {"CS101": A, "MATH1": M}
    s2 = {"CS101": B, "MATH1": M}
    s3 = {"MATH1": M, "CS101": A}   # same as s1
    assert dedupe([s1, s2, s3]) == [s1, s2]
    assert dedupe([s1, s2, s3])[0] is s1


def test_dedupe_is_idempotent() -> None:
    scheds = [{"CS101": A}, {"CS101": B}, {"CS101": A}, {}]
    once = dedupe(scheds)
    assert [schedule_key(s) for s in dedupe(once)] == [schedule_key(s) for s in once]


def test_empty_input() -> None:
    assert dedupe([]) == []
