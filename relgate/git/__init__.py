"""Git operations used to resolve and check out release tags.

Usage:
    from relgate.git import Repository

    repo = Repository(Path("."))
    tag = repo.describe_latest_tag("v*")
"""

from relgate.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]
