"""Git operations: remotes, branches, rebase/merge, history, commits, push."""

from prmerge.services.git._run import GitRunnerError
from prmerge.services.git.base import VersionControl
from prmerge.services.git.branches import pr_branch_name, repo_name_from_url
from prmerge.services.git.cli import GitCLI
from prmerge.services.git.commits import AUTHORED_BY, authored_by_lines

__all__ = [
    "AUTHORED_BY",
    "GitCLI",
    "GitRunnerError",
    "VersionControl",
    "authored_by_lines",
    "pr_branch_name",
    "repo_name_from_url",
]
