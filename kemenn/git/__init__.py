"""Git operations module.

Usage:
    from kemenn.git import GitInspector

    url = GitInspector().remote_url(repo / ".git")
"""

from kemenn.git.repository import (
    GitError,
    GitInspector,
    RepositoryInspector,
)

__all__ = [
    "GitError",
    "GitInspector",
    "RepositoryInspector",
]
