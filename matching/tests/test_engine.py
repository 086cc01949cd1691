"""
End-to-end tests of the matching engine pipeline (no database).
"""

import copy

from matching.logic import MatchingEngine, get_matching_universities


CATALOG = [
    {"id": 1, "name": "Harbor Tech", "country": "USA", "avg_tuition_per_year": 42000,
     "interests": ["Engineering", "Computer Science"], "acceptance_rate": 12, "min_gpa": 3.8},
    {"id": 2, "name": "Prairie State", "country": "USA", "tuition": 18000,
     "focus_areas": ["Agriculture", "Engineering"], "acceptance_rate": 70},
    {"id": 3, "name": "Maple College", "location_country": "Canada", "tuition_international": 26000,
     "interests": ["Business"], "acceptance_rate": 45, "gpa_requirement": 3.2},
    {"id": 4, "name": "Alpine Institute", "country": "Switzerland",
     "interests": ["Engineering", "Computer Science"], "required_tests": []},
    {"id": 5, "name": "Coastal University", "country": "Australia", "avg_tuition_per_year": 31000},
]


def _names(output):
    return [u["name"] for u in output.matches]


def test_empty_criteria_score_everything_100():
    output = get_matching_universities({}, CATALOG, "free")

    assert output.total_count == len(CATALOG)
    assert all(u["matchPercentage"] == 100 for u in output.matches)
    # ties broken by tuition, tuition-less last
    assert _names(output) == [
        "Prairie State", "Maple College", "Coastal University", "Harbor Tech", "Alpine Institute",
    ]


def test_country_scenario_orders_cheaper_first():
    catalog = [{"tuition": 10000, "country": "USA"}, {"tuition": 5000, "country": "USA"}]

    output = get_matching_universities({"country": "USA"}, catalog, "free")

    assert [u["matchPercentage"] for u in output.matches] == [100, 100]
    assert [u["tuition"] for u in output.matches] == [5000, 10000]
    assert output.total_count == 2


def test_missing_gpa_is_vacuous_match():
    criteria = {"academics": {"enabled": True, "filters": {"minGpa": 3.5}}}

    output = get_matching_universities(criteria, [{"name": "No GPA"}], "free")

    assert output.matches[0]["matchPercentage"] == 100


def test_mixed_criteria_percentages():
    criteria = {
        "country": "USA",
        "maxTuition": 30000,
        "interests": ["engineering"],
        "admissions": {"enabled": True, "filters": {"maxAcceptanceRate": 50}},
    }

    output = get_matching_universities(criteria, CATALOG, "free")
    by_name = {u["name"]: u["matchPercentage"] for u in output.matches}

    assert by_name == {
        "Harbor Tech": 75,         # country, interests, acceptance; tuition too high
        "Prairie State": 75,       # country, tuition, interests; acceptance too high
        "Maple College": 50,       # tuition and acceptance; country, interests miss
        "Alpine Institute": 50,    # interests hit, country miss, rest not applicable
        "Coastal University": 0,   # country miss, tuition miss
    }
    assert _names(output)[:2] == ["Prairie State", "Harbor Tech"]


def test_threshold_limits_matches_and_total():
    criteria = {"country": "USA", "maxTuition": 30000, "minMatchPercentage": 60}

    output = get_matching_universities(criteria, CATALOG, "free")

    assert all(u["matchPercentage"] >= 60 for u in output.matches)
    assert output.total_count == len(output.matches)
    assert "Coastal University" not in _names(output)


def test_anonymous_gating_keeps_total():
    catalog = [{"name": f"U{i}", "tuition": 1000 * i} for i in range(10)]

    anonymous = get_matching_universities({}, catalog, "anonymous")
    free = get_matching_universities({}, catalog, "free")

    assert len(anonymous.matches) == 3
    assert anonymous.total_count == 10
    assert len(free.matches) == 10
    assert free.total_count == 10


def test_engine_fallback_plan_applies_when_plan_missing():
    catalog = [{"name": f"U{i}"} for i in range(5)]

    assert len(MatchingEngine().match({}, catalog, None).matches) == 5
    assert len(MatchingEngine(fallback_plan_key="anonymous").match({}, catalog, None).matches) == 3


def test_empty_catalog():
    output = get_matching_universities({"country": "USA"}, [], "anonymous")
    assert output.matches == []
    assert output.total_count == 0


def test_idempotent_and_catalog_untouched():
    criteria = {"country": "USA", "interests": ["Engineering"], "minMatchPercentage": 10}
    before = copy.deepcopy(CATALOG)

    first = get_matching_universities(criteria, CATALOG, "free")
    second = get_matching_universities(criteria, CATALOG, "free")

    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)
    assert CATALOG == before
    assert all("matchPercentage" not in u for u in CATALOG)


def test_malformed_criteria_never_raise():
    criteria = {"country": ["USA"], "minMatchPercentage": "all", "academics": "yes"}

    output = get_matching_universities(criteria, CATALOG, "free")

    assert output.total_count == len(CATALOG)
    assert all(u["matchPercentage"] == 100 for u in output.matches)


def test_oversized_numbers_never_raise():
    catalog = [{"name": "Huge", "tuition": 10 ** 400}, {"name": "Cheap", "tuition": 4000}]

    output = get_matching_universities({"maxTuition": 5000}, catalog, "free")

    assert [u["matchPercentage"] for u in output.matches] == [100, 100]
    assert get_matching_universities({"maxTuition": 10 ** 400}, catalog, "free").total_count == 2
