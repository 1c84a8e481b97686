from fastapi import Depends

from app.repos.posts_repo import FilePostsRepo
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilePostsRepo(current_settings.DATA_DIR)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)
