from sqlcommenter import annotate_sql
from sqlcommenter.contributors import query_info, query_tags, static_tags, trace_context, with_query_tags
from sqlcommenter.types import CompactedQuery, SingleQuery, SqlCommenterContext

SAMPLED = "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01"
NOT_SAMPLED = "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-00"


def _ctx(query=None):
    return SqlCommenterContext(query=query or SingleQuery("findMany", "User"))


def test_static_tags_returns_fresh_copy():
    source = {"application": "my-app"}
    contribute = static_tags(source)
    first = contribute(_ctx())
    first["application"] = "changed"
    source["application"] = "also-changed"
    assert contribute(_ctx()) == {"application": "my-app"}


def test_query_tags_empty_outside_scope():
    assert query_tags()(_ctx()) == {}


def test_query_tags_nested_scopes_layer_and_restore():
    contribute = query_tags()
    with with_query_tags({"route": "/users", "tenant": "a"}):
        with with_query_tags({"tenant": "b"}):
            assert contribute(_ctx()) == {"route": "/users", "tenant": "b"}
        assert contribute(_ctx()) == {"route": "/users", "tenant": "a"}
    assert contribute(_ctx()) == {}


def test_query_tags_override_static_defaults():
    contributors = [static_tags({"tenant": "default", "application": "app"}), query_tags()]
    with with_query_tags({"tenant": "acme"}):
        out = annotate_sql(contributors, SingleQuery("queryRaw"), "SELECT 1")
    assert out == "SELECT 1 /*application='app',tenant='acme'*/"


def test_trace_context_only_for_sampled_traces():
    assert trace_context(lambda: SAMPLED)(_ctx()) == {"traceparent": SAMPLED}
    assert trace_context(lambda: NOT_SAMPLED)(_ctx()) == {}
    assert trace_context(lambda: None)(_ctx()) == {}


def test_trace_context_ignores_malformed_headers():
    assert trace_context(lambda: "not-a-traceparent")(_ctx()) == {}
    assert trace_context(lambda: "00-" + "0" * 32 + "-b7ad6b7169203331-01")(_ctx()) == {}
    assert trace_context(lambda: SAMPLED.upper())(_ctx()) == {}


def test_query_info_single():
    assert query_info()(_ctx(SingleQuery("findMany", "User"))) == {"action": "findMany", "model": "User"}


def test_query_info_raw_query_has_no_model():
    assert query_info()(_ctx(SingleQuery("queryRaw"))) == {"action": "queryRaw"}


def test_query_info_compacted_same_action():
    q = CompactedQuery([SingleQuery("findUnique", "User"), SingleQuery("findUnique", "User")])
    assert query_info()(_ctx(q)) == {"action": "findUnique", "model": "batch", "batch_size": "2"}


def test_query_info_mixed_batch_is_not_tagged_as_first_query():
    q = CompactedQuery([SingleQuery("createOne", "User"), SingleQuery("updateOne", "Post")])
    out = annotate_sql([query_info()], q, "SELECT 1")
    assert out == "SELECT 1 /*batch_size='2',model='batch'*/"
