"""Tests for catalog ingestion, plan load/save roundtrip and structural validation."""
import json
from pathlib import Path

import pytest

from class_planner.io_json import (CatalogError, ConfigError, apply_overrides, load_catalog,
    load_plan, parse_catalog, save_plan, unique_courses)
from class_planner.models import (CourseSection, Plan, Requirement, SectionOverride,
    SectionRef)


def _make_minimal_plan() -> Plan:
    plan = Plan()
    plan.requirements = [
        Requirement(id="CS101", name="CS101"),
        Requirement(id="group_1", kind="group", name="PE", courses=["PE1", "PE2"]),
    ]
    plan.selections = {"CS101": SectionRef("CS101", "A", locked=True)}
    plan.overrides  = [SectionOverride("CS101", "B", priority=5)]
    return plan


def test_catalog_defaults_applied() -> None:
    catalog = parse_catalog({"courses": [
        {"Subject Code": "CS101", "Course Title": "Intro", "Section": "A",
         "Time": "MWF 09:00-10:00", "Room": "R1", "Instructor": "Reyes",
         "Free Slots": 12},
        {"Subject Code": "CS101", "Course Title": "Intro", "Section": "B",
         "Time": "TBA", "Room": "R2", "Instructor": "Santos"},
    ]})
    a, b = catalog
    assert a.slots == 12 and b.slots == 0
    assert a.priority == 100 and not a.excluded
    assert b.remarks == ""
    assert a.time == "MWF 09:00-10:00"


def test_catalog_accepts_bare_list_and_old_slots_key() -> None:
    catalog = parse_catalog([{"Subject Code": "X", "Section": "1", "Slots": "7"}])
    assert catalog[0].slots == 7


def test_catalog_negative_slots_clamped() -> None:
    catalog = parse_catalog([{"Subject Code": "X", "Section": "1", "Free Slots": -3}])
    assert catalog[0].slots == 0


def test_catalog_missing_section_raises() -> None:
    with pytest.raises(CatalogError, match="Section"):
        parse_catalog({"courses": [{"Subject Code": "X"}]})


def test_catalog_duplicate_section_raises() -> None:
    rec = {"Subject Code": "X", "Section": "1"}
    with pytest.raises(CatalogError, match="Duplicate"):
        parse_catalog([rec, dict(rec)])


def test_catalog_bad_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_unique_courses_first_title_wins() -> None:
    catalog = [
        CourseSection("CS101", "A", title="Intro"),
        CourseSection("CS101", "B", title="Intro (old)"),
        CourseSection("MATH1", "A", title="Calc"),
    ]
    assert unique_courses(catalog) == {"CS101": "Intro", "MATH1": "Calc"}


def test_roundtrip(tmp_path: Path) -> None:
    plan = _make_minimal_plan()
    path = tmp_path / "plans" / "plan.json"
    save_plan(plan, path)
    plan2 = load_plan(path)
    assert [r.id for r in plan2.requirements] == ["CS101", "group_1"]
    assert plan2.requirements[1].courses == ["PE1", "PE2"]
    assert plan2.selections["CS101"].locked is True
    assert plan2.overrides[0].priority == 5
    assert plan2.overrides[0].excluded is None
    assert plan2.scheduler.max_results == 100


def test_custom_sections_roundtrip(tmp_path: Path) -> None:
    plan = _make_minimal_plan()
    plan.requirements.append(Requirement(id="custom_1", kind="custom", name="ORG"))
    plan.custom_sections.append(CourseSection(
        "ORG", "1", title="Org meeting", time="F 18:00-20:00", slots=99,
        priority=50, is_custom=True, requirement_id="custom_1"))
    path = tmp_path / "plan.json"
    save_plan(plan, path)
    custom = load_plan(path).custom_sections[0]
    assert custom.is_custom and custom.requirement_id == "custom_1"
    assert custom.priority == 50


def test_missing_key_raises(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"selections": {}}))
    with pytest.raises(ConfigError):
        load_plan(path)


def test_null_meta_allowed(tmp_path: Path) -> None:
    """meta: null should not crash."""
    plan = _make_minimal_plan()
    path = tmp_path / "null_meta.json"
    save_plan(plan, path)
    raw = json.loads(path.read_text())
    raw["meta"] = None
    path.write_text(json.dumps(raw))
    assert isinstance(load_plan(path).meta, dict)


def test_duplicate_ids_raise(tmp_path: Path) -> None:
    plan = _make_minimal_plan()
    plan.requirements.append(Requirement(id="CS101"))
    path = tmp_path / "dup.json"
    save_plan(plan, path)
    with pytest.raises(ConfigError, match="Duplicate"):
        load_plan(path)


def test_dangling_selection_raises(tmp_path: Path) -> None:
    path = tmp_path / "dangling.json"
    path.write_text(json.dumps({
        "requirements": [],
        "selections": {"GHOST": {"subject_code": "X", "section": "1"}},
    }))
    with pytest.raises(ConfigError, match="GHOST"):
        load_plan(path)


def test_bad_max_results_raises(tmp_path: Path) -> None:
    path = tmp_path / "cap.json"
    path.write_text(json.dumps({"requirements": [], "scheduler": {"max_results": 0}}))
    with pytest.raises(ConfigError):
        load_plan(path)


def test_apply_overrides() -> None:
    catalog = [CourseSection("CS101", "A"), CourseSection("CS101", "B")]
    plan = Plan(overrides=[
        SectionOverride("CS101", "B", priority=5, excluded=True),
        SectionOverride("GONE", "Z", priority=1),
    ])
    unmatched = apply_overrides(catalog, plan)
    assert catalog[1].priority == 5 and catalog[1].excluded
    assert catalog[0].priority == 100
    assert [o.key for o in unmatched] == [("GONE", "Z")]
