import pytest

from src.app.queries.filter_compiler import FilterCompiler, FilterCriterion, Predicate


@pytest.fixture
def compiler():
    return FilterCompiler()


def test_empty_input_matches_all(compiler):
    assert compiler.compile([]).is_match_all
    assert compiler.compile({}).is_match_all
    assert compiler.compile(None) == Predicate.match_all()


def test_non_collection_payload_is_discarded(compiler):
    predicate = compiler.compile("serial")

    assert predicate.is_match_all
    assert predicate.discarded == 1


def test_valid_criteria_compile_to_clauses(compiler):
    predicate = compiler.compile(
        [
            {"field": "date_mod", "operator": "eq", "value": "2024-05-01"},
            {"field": "users_id", "operator": "in", "value": [1, 2]},
            {"field": "field", "operator": "neq", "value": "serial"},
        ]
    )

    assert len(predicate.clauses) == 3
    assert predicate.discarded == 0
    assert predicate.summary == "date_mod eq, users_id in, field neq"


@pytest.mark.parametrize(
    "criterion",
    [
        "not an object",
        {"operator": "eq", "value": 1},
        {"field": "password", "operator": "eq", "value": "x"},
        {"field": "id", "operator": "contains", "value": "1"},
        {"field": "id", "operator": "eq", "value": "one"},
        {"field": "id", "operator": "eq", "value": True},
        {"field": "date_mod", "operator": "eq", "value": "yesterday"},
        {"field": "change", "operator": "eq", "value": "x"},
        {"field": "user_name", "operator": "contains", "value": "   "},
        {"field": "linked_action", "operator": "in", "value": []},
        {"field": "field", "operator": 3, "value": "serial"},
    ],
)
def test_malformed_criterion_is_dropped(compiler, criterion):
    predicate = compiler.compile([criterion, {"field": "id", "operator": "gt", "value": 5}])

    assert len(predicate.clauses) == 1
    assert predicate.discarded == 1
    assert predicate.summary == "id gt"


def test_mapping_payload_uses_default_operators(compiler):
    predicate = compiler.compile({"user_name": "tech", "linked_action": [0, 20], "id": "7"})

    assert predicate.discarded == 0
    assert predicate.summary == "user_name contains, linked_action in, id eq"


def test_single_criterion_object(compiler):
    predicate = compiler.compile({"field": "id", "operator": ">=", "value": 3})

    assert predicate.summary == "id gte"


def test_mapping_on_field_column(compiler):
    predicate = compiler.compile({"field": "serial"})

    assert predicate.summary == "field eq"


def test_values_are_bound_parameters(compiler):
    hostile = "x' OR '1'='1"
    predicate = compiler.compile([{"field": "change", "operator": "contains", "value": hostile}])

    compiled = predicate.clauses[0].compile()
    assert hostile not in str(compiled)
    assert hostile in compiled.params.values()


def test_criterion_operator_aliases():
    criterion = FilterCriterion.from_raw({"field": "id", "operator": "<=", "value": 1})

    assert criterion == FilterCriterion(field="id", operator="lte", value=1)


@pytest.mark.parametrize(
    "criterion",
    [
        {"field": "id", "operator": "gt", "value": "99999999999999999999"},
        {"field": "id", "operator": "eq", "value": 2**63},
        {"field": "users_id", "operator": "in", "value": [1, -(2**63) - 1]},
        {"field": "id", "operator": "eq", "value": "1" * 5000},
    ],
)
def test_integer_beyond_64_bits_is_dropped(compiler, criterion):
    predicate = compiler.compile([criterion])

    assert predicate.is_match_all
    assert predicate.discarded == 1


def test_largest_64_bit_integer_is_kept(compiler):
    predicate = compiler.compile([{"field": "id", "operator": "lte", "value": str(2**63 - 1)}])

    assert predicate.summary == "id lte"
    assert predicate.discarded == 0


@pytest.mark.parametrize(
    "value",
    ["9999-12-31", "9999-12-31T23:30:00-01:00", "0001-01-01T00:30:00+01:00"],
)
def test_dates_at_the_calendar_edge_are_dropped(compiler, value):
    predicate = compiler.compile([{"field": "date_mod", "operator": "eq", "value": value}])

    assert predicate.is_match_all
    assert predicate.discarded == 1


def test_user_name_matches_the_displayed_name(compiler):
    predicate = compiler.compile([{"field": "user_name", "operator": "eq", "value": "Admin Super"}])

    compiled = str(predicate.clauses[0].compile()).lower()
    assert "trim" in compiled
    assert "coalesce" in compiled
