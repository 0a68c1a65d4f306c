from sqlcommenter.comment import append_comment, format_comment, merge_contributions


def test_merge_last_write_wins():
    assert merge_contributions([{"a": "1"}, {"a": "2"}]) == {"a": "2"}


def test_merge_keeps_keys_from_all_maps():
    merged = merge_contributions([{"a": "1", "b": "x"}, {}, {"c": "3", "a": "9"}])
    assert merged == {"a": "9", "b": "x", "c": "3"}


def test_merge_empty_input():
    assert merge_contributions([]) == {}
    assert merge_contributions([{}, {}]) == {}


def test_format_empty_map_is_empty_string():
    assert format_comment({}) == ""


def test_format_sorts_keys_and_quotes_values():
    comment = format_comment({"version": "1.0.0", "application": "my-app", "model": "User"})
    assert comment == "/*application='my-app',model='User',version='1.0.0'*/"


def test_format_escapes_quote_after_encoding():
    assert format_comment({"route": "it's fine"}) == "/*route='it\\'s%20fine'*/"


def test_format_sorts_on_encoded_key():
    # " " encodes to "%20", which sorts before "A".
    comment = format_comment({"A": "1", " ": "2"})
    assert comment == "/*%20='2',A='1'*/"


def test_format_output_has_no_duplicate_keys_and_is_sorted():
    merged = merge_contributions([{"b": "1", "a": "1"}, {"b": "2", "c": "3"}])
    body = format_comment(merged)[2:-2]
    keys = [seg.split("=", 1)[0] for seg in body.split(",")]
    assert keys == sorted(set(keys))
    assert keys == ["a", "b", "c"]


def test_format_is_deterministic():
    merged = {"z": "1", "a": "2", "m": "3"}
    assert format_comment(merged) == format_comment(dict(reversed(list(merged.items()))))


def test_append_empty_comment_returns_sql_unchanged():
    sql = "  SELECT 1 ;\n"
    assert append_comment(sql, "") is sql


def test_append_adds_single_space_after_existing_text():
    assert append_comment("SELECT 1;", "/*a='b'*/") == "SELECT 1; /*a='b'*/"
    assert append_comment("SELECT 1", "/*a='b'*/") == "SELECT 1 /*a='b'*/"
