from app.repos.post_filters import (
    ListPostOptions,
    build_filters,
    content_filter,
    matches,
    tags_filter,
)
from tests.conftest import make_post


def test_no_options_match_everything():
    assert build_filters(ListPostOptions()) == []
    assert matches(make_post(), []) is True


def test_content_filter_checks_title_or_content_case_insensitively():
    f = content_filter("Needle")

    assert f(make_post(title="a needle here")) is True
    assert f(make_post(content="NEEDLE")) is True
    assert f(make_post(title="hay", content="stack")) is False


def test_tags_filter_checks_every_post_tag():
    f = tags_filter({"tag5", "tag9"})

    # the matching tag is not the first one on the post
    assert f(make_post(tags=["x", "y", "tag5"])) is True
    assert f(make_post(tags=["TAG5"])) is False
    assert f(make_post(tags=[])) is False


def test_search_and_tags_are_combined_with_and():
    filters = build_filters(ListPostOptions(search_term="foo", tags_filter={"t"}))

    assert len(filters) == 2
    assert matches(make_post(title="foo", tags=["t"]), filters) is True
    assert matches(make_post(title="foo", tags=["u"]), filters) is False
    assert matches(make_post(title="bar", tags=["t"]), filters) is False
