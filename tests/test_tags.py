from app.tags import (
    DirectoryTag,
    FunctionalTag,
    PlainTag,
    directory_paths,
    group_by_directory,
    is_functional,
    list_tags,
    parse_tag,
)
from tests.conftest import make_post


def test_parse_tag_distinguishes_kinds():
    assert parse_tag("python") == PlainTag("python")
    assert parse_tag("_pinned") == FunctionalTag("_pinned")
    assert parse_tag("_dir:/foo/bar/") == DirectoryTag("foo/bar")
    assert parse_tag("_dir:foo").name == "_dir:foo"


def test_is_functional():
    assert is_functional("_dir:x") is True
    assert is_functional("_x") is True
    assert is_functional("x_") is False


def test_directory_paths_keeps_tag_order():
    tags = ["a", "_dir:b/c", "_other", "_dir:a"]
    assert directory_paths(tags) == ["b/c", "a"]


def test_list_tags_ignores_functional_and_sorts():
    posts = [
        make_post(tags=["c", "a", "b", "_dir:/foo"]),
        make_post(tags=["e", "d", "_dir:/foo/bar"]),
    ]

    assert list_tags(posts, ignore_functional=True) == ["a", "b", "c", "d", "e"]
    assert list_tags(posts) == [
        "_dir:/foo",
        "_dir:/foo/bar",
        "a",
        "b",
        "c",
        "d",
        "e",
    ]


def test_list_tags_is_distinct_and_case_sensitive():
    posts = [make_post(tags=["a", "A", "a"]), make_post(tags=["a"])]
    assert list_tags(posts) == ["A", "a"]


def test_group_by_directory_appends_for_each_dir_tag():
    first = make_post("first", tags=["_dir:foo", "_dir:/foo/bar"])
    second = make_post("second", tags=["_dir:foo/"])
    untagged = make_post("untagged", tags=["foo"])

    folders = group_by_directory([first, second, untagged])

    assert folders == {"foo": [first, second], "foo/bar": [first]}
