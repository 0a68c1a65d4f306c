import pytest

from sqlcommenter.runner import run_contributors
from sqlcommenter.types import SingleQuery, SqlCommenterContext


def _ctx():
    return SqlCommenterContext(query=SingleQuery("findMany", "User"))


def test_contributors_called_once_in_order_with_same_context():
    calls = []
    ctx = _ctx()

    def first(c):
        calls.append(("first", c))
        return {"a": "1"}

    def second(c):
        calls.append(("second", c))
        return {"a": "2"}

    results = run_contributors([first, second], ctx)
    assert results == [{"a": "1"}, {"a": "2"}]
    assert [name for name, _ in calls] == ["first", "second"]
    assert all(c is ctx for _, c in calls)


def test_no_contributors():
    assert run_contributors([], _ctx()) == []


def test_contributor_error_propagates_unchanged_and_stops_run():
    boom = RuntimeError("tracing unavailable")
    later = []

    def failing(c):
        raise boom

    def after(c):
        later.append(c)
        return {}

    with pytest.raises(RuntimeError) as exc_info:
        run_contributors([failing, after], _ctx())
    assert exc_info.value is boom
    assert later == []


def test_non_mapping_result_is_a_type_error():
    with pytest.raises(TypeError, match="must return a mapping"):
        run_contributors([lambda c: [("a", "1")]], _ctx())


def test_non_string_value_is_a_type_error():
    with pytest.raises(TypeError, match="non-string"):
        run_contributors([lambda c: {"a": 1}], _ctx())
