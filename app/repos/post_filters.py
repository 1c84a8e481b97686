from dataclasses import dataclass, field
from typing import AbstractSet, Callable, Iterable, List

from app.schemas.post import Post

FilterFunc = Callable[[Post], bool]


@dataclass
class ListPostOptions:
    search_term: str = ""
    tags_filter: AbstractSet[str] = field(default_factory=frozenset)


def content_filter(search_term: str) -> FilterFunc:
    needle = search_term.casefold()

    def matches(post: Post) -> bool:
        return needle in post.title.casefold() or needle in post.content.casefold()

    return matches


def tags_filter(tags: Iterable[str]) -> FilterFunc:
    wanted = frozenset(tags)

    def matches(post: Post) -> bool:
        return any(tag in wanted for tag in post.tags)

    return matches


def build_filters(options: ListPostOptions) -> List[FilterFunc]:
    """
    Predicates a post must all satisfy: text search AND tag match, where a
    tag match means any one of the requested tags.
    """
    filters: List[FilterFunc] = []
    if options.search_term:
        filters.append(content_filter(options.search_term))
    if options.tags_filter:
        filters.append(tags_filter(options.tags_filter))
    return filters


def matches(post: Post, filters: Iterable[FilterFunc]) -> bool:
    return all(f(post) for f in filters)
