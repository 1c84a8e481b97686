import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.errors import PostNotFound
from app.schemas.post import NodeOut, Post, PostCreate, PostDetail, PostUpdate
from app.services.markdown_service import render_markdown
from app.services.posts_service import PostsService, node_to_schema
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[Post])
def list_posts(
    q: str = "",
    tag: List[str] = Query(default=[]),
    service: PostsService = Depends(deps.get_posts_service),
):
    """List posts matching the search term and any of the given tags."""
    try:
        return service.list_posts(search_term=q, tags=tag)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/api/search", response_model=List[Post])
def search_posts(
    q: str = "",
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.list_posts(search_term=q)
    except Exception as e:
        logger.error(f"Unexpected error searching posts for {q!r}: {e}")
        raise HTTPException(status_code=500, detail="Failed to search posts")


@router.post("/posts", response_model=Post, status_code=201)
def create_post(
    request: PostCreate,
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.create_post(request)
    except Exception as e:
        logger.error(f"Unexpected error creating post: {e}")
        raise HTTPException(status_code=500, detail="Failed to create post")

    response.headers["Location"] = f"/posts/{post.id}"
    return post


@router.get("/posts/{post_id}", response_model=PostDetail)
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post, with its markdown rendered to safe HTML."""
    try:
        post = service.get_post(post_id)
        return PostDetail(**post.model_dump(), contentHtml=render_markdown(post.content))
    except PostNotFound:
        raise HTTPException(status_code=404, detail="Post not found")
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.put("/posts/{post_id}", response_model=Post)
def update_post(
    post_id: str,
    request: PostUpdate,
    service: PostsService = Depends(deps.get_posts_service),
):
    return _update_post(post_id, request, service)


@router.post("/posts/{post_id}/edit", response_model=Post, status_code=201)
def edit_post(
    post_id: str,
    request: PostUpdate,
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Form-style update kept for the editor page; answers like a create."""
    post = _update_post(post_id, request, service)
    response.headers["Location"] = f"/posts/{post.id}"
    return post


@router.get("/tags", response_model=List[str])
def list_tags(
    ignore_functional: bool = False,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.list_tags(ignore_functional=ignore_functional)
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tree", response_model=NodeOut)
def get_folder_tree(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return node_to_schema(service.get_folder_tree())
    except Exception as e:
        logger.error(f"Unexpected error building folder tree: {e}")
        raise HTTPException(status_code=500, detail="Failed to build folder tree")


@router.get("/tree.html", response_class=HTMLResponse)
def get_folder_tree_html(
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    try:
        tree = service.get_folder_tree()
    except Exception as e:
        logger.error(f"Unexpected error building folder tree: {e}")
        raise HTTPException(status_code=500, detail="Failed to build folder tree")

    return tree.unpack_html(
        dir_class=current_settings.TREE_DIR_CLASS,
        post_class=current_settings.TREE_POST_CLASS,
    )


def _update_post(post_id: str, request: PostUpdate, service: PostsService) -> Post:
    try:
        return service.update_post(post_id, request)
    except PostNotFound:
        raise HTTPException(status_code=404, detail="Post not found")
    except Exception as e:
        logger.error(f"Unexpected error updating post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update post")
