"""
Parameterized fixture-based tests for PlanParser.

Loads YAML fixture files from tests/fixtures/plan_scenarios/ and runs each
through PlanParser.parse(), asserting against the expected output defined in
the fixture.
"""

import yaml
import pytest
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "plan_scenarios"


def load_fixtures():
    fixtures = []
    for f in sorted(FIXTURES_DIR.glob("*.yaml")):
        with open(f, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
            data["_file"] = f.name
            fixtures.append(data)
    return fixtures


def _template(cycle, name):
    matches = [t for t in cycle.workout_templates if t.name == name]
    assert matches, f"No template named {name!r}; got {[t.name for t in cycle.workout_templates]}"
    return matches[0]


def _exercise(template, name):
    matches = [e for e in template.exercises if e.exercise_name == name]
    assert matches, (
        f"No exercise {name!r} in {template.name!r}; got {[e.exercise_name for e in template.exercises]}"
    )
    return matches[0]


FIELD_MAP = {
    "sets": "target_sets",
    "reps_min": "target_reps_min",
    "reps_max": "target_reps_max",
    "weight": "target_weight",
    "progression_value": "progression_value",
}


@pytest.mark.parametrize("fixture", load_fixtures(), ids=lambda f: f["_file"])
def test_plan_scenario(fixture, plan_parser):
    cycle = plan_parser.parse(fixture["input"], fixture.get("cycle_number", 1))
    expected = fixture["expected"]

    assert cycle.length_in_weeks == expected["length_in_weeks"]

    if "warning_count" in expected:
        assert len(plan_parser.warnings) == expected["warning_count"], (
            f"Expected {expected['warning_count']} warnings, got {plan_parser.warnings}"
        )

    # Templates, in order
    names = [t.name for t in cycle.workout_templates]
    assert names == [t["name"] for t in expected["templates"]]
    for actual, exp in zip(cycle.workout_templates, expected["templates"]):
        if "day_of_week" in exp:
            assert actual.day_of_week == exp["day_of_week"], (
                f"{actual.name}: expected day {exp['day_of_week']}, got {actual.day_of_week}"
            )
        if "workout_type" in exp:
            assert actual.workout_type == exp["workout_type"]
        if "exercise_count" in exp:
            assert len(actual.exercises) == exp["exercise_count"], (
                f"{actual.name}: expected {exp['exercise_count']} exercises, "
                f"got {[e.exercise_name for e in actual.exercises]}"
            )

    # Individual exercises
    for exp_ex in expected.get("exercises", []):
        actual = _exercise(_template(cycle, exp_ex["template"]), exp_ex["name"])

        for key, attr in FIELD_MAP.items():
            if key in exp_ex:
                assert getattr(actual, attr) == exp_ex[key], (
                    f"{exp_ex['name']}: expected {attr}={exp_ex[key]!r}, got {getattr(actual, attr)!r}"
                )

        for week, values in exp_ex.get("overrides", {}).items():
            assert week in actual.weekly_overrides, (
                f"{exp_ex['name']}: no override for week {week}; got {sorted(actual.weekly_overrides)}"
            )
            override = actual.weekly_overrides[week]
            for attr, value in values.items():
                assert getattr(override, attr) == value, (
                    f"{exp_ex['name']} week {week}: expected {attr}={value!r}, got {getattr(override, attr)!r}"
                )
