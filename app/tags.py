from dataclasses import dataclass
from typing import Dict, Iterable, List, Union

from app.schemas.post import Post

FUNCTIONAL_PREFIX = "_"
DIRECTORY_PREFIX = "_dir:"
TAG_PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class PlainTag:
    name: str


@dataclass(frozen=True)
class FunctionalTag:
    name: str


@dataclass(frozen=True)
class DirectoryTag:
    """A `_dir:<path>` tag placing its post at `path` in the folder tree."""

    path: str

    @property
    def name(self) -> str:
        return f"{DIRECTORY_PREFIX}{self.path}"


Tag = Union[PlainTag, FunctionalTag, DirectoryTag]


def parse_tag(raw: str) -> Tag:
    if raw.startswith(DIRECTORY_PREFIX):
        path = raw[len(DIRECTORY_PREFIX) :].strip(TAG_PATH_SEPARATOR)
        return DirectoryTag(path)
    if raw.startswith(FUNCTIONAL_PREFIX):
        return FunctionalTag(raw)
    return PlainTag(raw)


def is_functional(raw: str) -> bool:
    return raw.startswith(FUNCTIONAL_PREFIX)


def directory_paths(tags: Iterable[str]) -> List[str]:
    paths = []
    for tag in map(parse_tag, tags):
        if isinstance(tag, DirectoryTag):
            paths.append(tag.path)
    return paths


def list_tags(posts: Iterable[Post], ignore_functional: bool = False) -> List[str]:
    """Return the sorted, distinct tags of all posts."""
    unique = set()
    for post in posts:
        for tag in post.tags:
            if ignore_functional and is_functional(tag):
                continue
            unique.add(tag)
    return sorted(unique)


def group_by_directory(posts: Iterable[Post]) -> Dict[str, List[Post]]:
    """
    Group posts by the path of each of their `_dir:` tags.
    A post with several directory tags is listed under every one of them.
    """
    folders: Dict[str, List[Post]] = {}
    for post in posts:
        for path in directory_paths(post.tags):
            folders.setdefault(path, []).append(post)
    return folders
