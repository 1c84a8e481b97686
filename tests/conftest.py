import datetime

import pytest

from app.errors import PostNotFound
from app.repos.posts_repo import FilePostsRepo
from app.schemas.post import Post

START_TIME = datetime.datetime(2024, 1, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


class FakeClock:
    """
    Deterministic clock for the repository.
    Each call advances by `step`; set step to zero to freeze time.
    """

    def __init__(self, start=START_TIME, step=datetime.timedelta(seconds=1)):
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime.datetime:
        current = self.now
        self.now = self.now + self.step
        self.calls += 1
        return current


class FakeRepo:
    """
    Minimal in-memory repo stand-in used in service tests.
    Records the options each listing was called with.
    """

    def __init__(self, posts=None):
        self.posts = {p.id: p for p in posts or []}
        self.list_calls = []
        self.updated = []

    def list_posts(self, options=None):
        self.list_calls.append(options)
        return list(self.posts.values())

    def get_post(self, post_id):
        if post_id not in self.posts:
            raise PostNotFound(post_id)
        return self.posts[post_id]

    def create_post(self, post):
        created = post.model_copy(update={"id": f"id{len(self.posts)}"})
        self.posts[created.id] = created
        return created

    def update_post(self, post):
        self.get_post(post.id)
        self.posts[post.id] = post
        self.updated.append(post)
        return post


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, error=None):
        self._list_posts_return = list_posts_return or []
        self.error = error
        self.calls = []

    def list_posts(self, search_term="", tags=None):
        self.calls.append((search_term, list(tags or [])))
        if self.error:
            raise self.error
        return self._list_posts_return

    def get_post(self, post_id):
        if self.error:
            raise self.error
        raise PostNotFound(post_id)

    def list_tags(self, ignore_functional=False):
        if self.error:
            raise self.error
        return []


def make_post(title="", content="", tags=None, post_id=""):
    return Post(id=post_id, title=title, content=content, tags=list(tags or []))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo(tmp_path, clock):
    return FilePostsRepo(tmp_path, clock=clock)


@pytest.fixture
def numbered_posts(repo):
    """Ten posts: title0/content0/tag0 ... title9/content9/tag9."""
    return [
        repo.create_post(make_post(f"title{i}", f"content{i}", [f"tag{i}"]))
        for i in range(10)
    ]
