from datetime import datetime, timezone

from question_bank.models import QUESTION_FIELD_TYPES
from question_bank.query.translator import (
    RESERVED_PARAMETERS,
    RewriteMode,
    parse_query_params,
    rewrite_operators,
    translate,
)


def test_reserved_parameters_are_dropped():
    raw = {"select": "chapter", "sort": "-points", "page": "2", "limit": "5", "solved": "true", "level": "easy"}
    assert translate(raw) == {"level": "easy"}


def test_non_reserved_keys_survive_with_prefixed_operators():
    raw = {"level": "easy", "points": {"gte": "2", "lt": "5"}, "chapter": {"in": ["Algebra", "Calculus"]}}
    result = translate(raw, RESERVED_PARAMETERS)
    assert set(result) == {"level", "points", "chapter"}
    assert result["level"] == "easy"
    assert result["points"] == {"$gte": "2", "$lt": "5"}
    assert result["chapter"] == {"$in": ["Algebra", "Calculus"]}


def test_text_rewrite_also_touches_operator_words_in_values():
    raw = {"questionText": "what is in a set"}
    assert translate(raw) == {"questionText": "what is $in a set"}


def test_structural_rewrite_leaves_values_alone():
    raw = {"questionText": "what is in a set", "points": {"gt": "1"}}
    result = translate(raw, mode=RewriteMode.STRUCTURAL)
    assert result == {"questionText": "what is in a set", "points": {"$gt": "1"}}


def test_operator_names_inside_words_are_not_rewritten():
    assert rewrite_operators({"chapter": "Integration"}) == {"chapter": "Integration"}


def test_solved_true_restricts_to_answered_ids():
    result = translate({"solved": "true"}, solved_answer_ids=["a", "b"], solved_flag="true")
    assert result == {"_id": {"$in": ["a", "b"]}}


def test_solved_false_excludes_answered_ids():
    result = translate({"level": "hard", "solved": "false"}, solved_answer_ids=["a"], solved_flag="false")
    assert result == {"level": "hard", "_id": {"$nin": ["a"]}}


def test_other_solved_values_are_ignored():
    assert translate({"solved": "yes"}, solved_answer_ids=["a"], solved_flag="yes") == {}
    assert translate({"solved": "TRUE"}, solved_answer_ids=["a"], solved_flag="TRUE") == {}


def test_solved_intersects_with_an_explicit_id_filter():
    result = translate({"_id": {"in": ["a", "c"]}}, solved_answer_ids=["a"], solved_flag="true")
    assert result == {"$and": [{"_id": {"$in": ["a", "c"]}}, {"_id": {"$in": ["a"]}}]}


def test_declared_field_types_are_coerced():
    raw = {"points": {"gte": "2"}, "createdAt": {"lt": "2024-01-01T00:00:00Z"}, "level": "3"}
    result = translate(raw, field_types=QUESTION_FIELD_TYPES)
    assert result["points"] == {"$gte": 2}
    assert result["createdAt"] == {"$lt": datetime(2024, 1, 1, tzinfo=timezone.utc)}
    # undeclared fields stay strings
    assert result["level"] == "3"


def test_unparseable_values_pass_through():
    result = translate({"points": {"gt": "many"}}, field_types=QUESTION_FIELD_TYPES)
    assert result == {"points": {"$gt": "many"}}


def test_parse_query_params_nests_brackets_and_collects_repeats():
    params = parse_query_params([
        ("level", "easy"),
        ("points[gte]", "2"),
        ("points[lte]", "3"),
        ("chapter[in]", "Algebra"),
        ("chapter[in]", "Calculus"),
        ("tag", "a"),
        ("tag", "b"),
    ])
    assert params == {
        "level": "easy",
        "points": {"gte": "2", "lte": "3"},
        "chapter": {"in": ["Algebra", "Calculus"]},
        "tag": ["a", "b"],
    }


def test_oversized_integer_literal_passes_through():
    huge = "9" * 5000
    result = translate({"points": huge, "createdAt": {"gt": huge}}, field_types=QUESTION_FIELD_TYPES)
    assert result["points"] == huge
    assert result["createdAt"] == {"$gt": huge}
    assert translate({"points": {"lt": huge}}, field_types=QUESTION_FIELD_TYPES) == {"points": {"$lt": huge}}
