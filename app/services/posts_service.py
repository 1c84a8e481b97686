import logging
from typing import Iterable, List, Optional

from app.repos.post_filters import ListPostOptions
from app.schemas.post import NodeOut, Post, PostCreate, PostRef, PostUpdate
from app.tags import group_by_directory, list_tags
from app.tree import Node, build_tree

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo):
        self.repo = repo

    def list_posts(
        self, search_term: str = "", tags: Optional[Iterable[str]] = None
    ) -> List[Post]:
        options = ListPostOptions(
            search_term=search_term or "", tags_filter=frozenset(tags or ())
        )
        posts = self.repo.list_posts(options)
        logger.debug(
            f"Listed {len(posts)} posts (q={options.search_term!r}, "
            f"tags={sorted(options.tags_filter)})"
        )
        return posts

    def get_post(self, post_id: str) -> Post:
        return self.repo.get_post(post_id)

    def create_post(self, request: PostCreate) -> Post:
        post = self.repo.create_post(Post(**request.model_dump()))
        logger.info(f"Created post {post.id}")
        return post

    def update_post(self, post_id: str, request: PostUpdate) -> Post:
        """Fetch the stored post, replace its editable fields and save it."""
        post = self.repo.get_post(post_id)
        post = post.model_copy(
            update={
                "title": request.title,
                "content": request.content,
                "tags": list(request.tags),
            }
        )
        post = self.repo.update_post(post)
        logger.info(f"Updated post {post.id}")
        return post

    def list_tags(self, ignore_functional: bool = False) -> List[str]:
        return list_tags(self.repo.list_posts(), ignore_functional=ignore_functional)

    def get_folder_tree(self) -> Node:
        folders = group_by_directory(self.repo.list_posts())
        logger.debug(f"Building folder tree from {len(folders)} directories")
        return build_tree(folders)


def node_to_schema(node: Node) -> NodeOut:
    return NodeOut(
        label=node.label,
        path=node.full_name(),
        posts=[PostRef(id=post.id, title=post.title) for post in node.value],
        children=[node_to_schema(child) for child in node.children],
    )
