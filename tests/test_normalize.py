import pytest

from api.normalize import normalize_list, unwrap_single


def test_bare_list_is_returned_unchanged():
    body = [{"id": "1"}, {"id": "2"}]
    assert normalize_list(body, "quizzes") is body


def test_named_field_is_unwrapped():
    records = [{"id": "1"}]
    assert normalize_list({"quizzes": records, "total": 1}, "quizzes") is records


def test_data_field_is_unwrapped():
    records = [{"id": "s1"}]
    assert normalize_list({"data": records}, "students") is records


def test_named_field_takes_priority_over_data():
    named, data = [{"id": "a"}], [{"id": "b"}]
    assert normalize_list({"data": data, "bookmarks": named}, "bookmarks") is named


def test_named_field_that_is_not_a_list_falls_through_to_data():
    data = [{"id": "b"}]
    assert normalize_list({"folders": {"id": "x"}, "data": data}, "folders") is data


def test_other_resource_name_is_ignored():
    assert normalize_list({"students": [{"id": "s1"}]}, "quizzes") == []


@pytest.mark.parametrize("body", [
    None,
    "",
    "not json",
    42,
    {},
    {"quizzes": None},
    {"data": {"quizzes": []}},
    {"message": "ok"},
])
def test_unrecognized_shapes_yield_empty_list(body):
    assert normalize_list(body, "quizzes") == []


def test_order_is_preserved():
    body = {"data": [{"id": "3"}, {"id": "1"}, {"id": "2"}]}
    assert [r["id"] for r in normalize_list(body, "students")] == ["3", "1", "2"]


def test_unwrap_single_returns_named_record():
    assert unwrap_single({"folder": {"id": "f1"}, "message": "created"}, "folder") == {"id": "f1"}


def test_unwrap_single_falls_back_to_whole_body():
    body = {"id": "f1", "name": "Maths"}
    assert unwrap_single(body, "folder") is body
    assert unwrap_single(None, "folder") is None
    assert unwrap_single([1, 2], "folder") == [1, 2]


def test_unwrap_single_keeps_empty_record():
    assert unwrap_single({"folder": {}}, "folder") == {}
    body = {"folder": None, "message": "ok"}
    assert unwrap_single(body, "folder") is body
