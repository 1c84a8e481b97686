import logging
import sys

from app.errors import RepositoryError
from app.repos.posts_repo import FilePostsRepo
from app.services.posts_service import PostsService
from app.settings import settings

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    service = PostsService(FilePostsRepo(settings.DATA_DIR))
    try:
        tree = service.get_folder_tree()
    except RepositoryError as e:
        logger.error(f"Failed to build folder tree: {e}", exc_info=True)
        sys.exit(1)

    sys.stdout.write(
        tree.unpack_html(
            dir_class=settings.TREE_DIR_CLASS, post_class=settings.TREE_POST_CLASS
        )
    )
