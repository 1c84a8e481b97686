import datetime
import os
import re
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from app.errors import CorruptPost, PostNotFound, StorageError
from app.ids import new_id
from app.repos.post_filters import ListPostOptions, build_filters, matches
from app.schemas.post import Post, StoredPost, utcnow

POST_SUFFIX = ".json"
TEMP_SUFFIX = ".tmp"
FILE_MODE = 0o640
DIR_MODE = 0o750
_POST_ID_PATTERN = re.compile(r"\w+")


class FilePostsRepo:
    """
    Stores every post as one JSON file named after its id, directly below
    `root`.

    Nothing is cached and no locks are taken: two concurrent updates of the
    same post both succeed and the last write wins.
    """

    def __init__(
        self, root: Path, clock: Callable[[], datetime.datetime] = utcnow
    ):
        self.root = Path(root)
        self.clock = clock

    def ensure_root(self) -> None:
        try:
            self.root.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create data dir {self.root}: {e}") from e

    def get_post(self, post_id: str) -> Post:
        if not _POST_ID_PATTERN.fullmatch(post_id or ""):
            raise PostNotFound(post_id)

        try:
            raw = self._path(post_id).read_bytes()
        except FileNotFoundError as e:
            raise PostNotFound(post_id) from e
        except OSError as e:
            raise StorageError(f"failed to read post {post_id}: {e}") from e

        try:
            stored = StoredPost.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptPost(post_id, str(e)) from e

        if stored.id != post_id:
            raise CorruptPost(post_id, f"stored id is {stored.id!r}")
        return Post(**stored.model_dump())

    def list_posts(self, options: Optional[ListPostOptions] = None) -> List[Post]:
        """
        Return all posts passing `options`, ordered by id (creation order).
        A single unreadable post fails the whole listing. Files removed
        between the directory scan and the read are left out.
        """
        filters = build_filters(options or ListPostOptions())
        posts = []
        for post_id in self._list_ids():
            try:
                post = self.get_post(post_id)
            except PostNotFound:
                continue
            if matches(post, filters):
                posts.append(post)
        return posts

    def create_post(self, post: Post) -> Post:
        now = self.clock()
        created = post.model_copy(
            update={"id": new_id(now), "createdTime": now, "modifiedTime": now}
        )
        self._write(created)
        return created

    def update_post(self, post: Post) -> Post:
        existing = self.get_post(post.id)

        now = self.clock()
        if now <= existing.modifiedTime:
            now = existing.modifiedTime + datetime.timedelta(microseconds=1)
        now = max(now, post.createdTime)

        updated = post.model_copy(update={"modifiedTime": now})
        self._write(updated)
        return updated

    def _list_ids(self) -> List[str]:
        try:
            names = [
                entry.name
                for entry in self.root.iterdir()
                if entry.suffix == POST_SUFFIX
                and not entry.name.startswith(".")
                and entry.is_file()
            ]
        except OSError as e:
            raise StorageError(f"failed to list posts in {self.root}: {e}") from e
        post_ids = (name[: -len(POST_SUFFIX)] for name in names)
        # names that get_post would refuse are not posts
        return sorted(i for i in post_ids if _POST_ID_PATTERN.fullmatch(i))

    def _path(self, post_id: str) -> Path:
        return self.root / f"{post_id}{POST_SUFFIX}"

    def _write(self, post: Post) -> None:
        """Write the whole post to a temp file, then rename it into place."""
        data = post.model_dump_json(indent=2)
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.root, prefix=f".{post.id}.", suffix=TEMP_SUFFIX
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
                os.chmod(tmp_path, FILE_MODE)
                os.replace(tmp_path, self._path(post.id))
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"failed to write post {post.id}: {e}") from e
