from .app.main import get_issues, get_repo_issues, get_issue, find_projects

__all__ = [
    "get_issues",
    "get_repo_issues",
    "get_issue",
    "find_projects",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
