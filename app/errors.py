class RepositoryError(Exception):
    """Base class for failures raised by the posts repository."""


class PostNotFound(RepositoryError):
    def __init__(self, post_id: str):
        super().__init__(f"post not found: {post_id}")
        self.post_id = post_id


class CorruptPost(RepositoryError):
    def __init__(self, post_id: str, reason: str):
        super().__init__(f"post {post_id} could not be decoded: {reason}")
        self.post_id = post_id
        self.reason = reason


class StorageError(RepositoryError):
    """Reading, writing or enumerating the storage root failed."""


class IDGenerationError(RepositoryError):
    """A new post identifier could not be allocated."""
