"""Local branch operations: checkout, create, reset, delete; naming of
temporary PR branches."""

import logging
import re
from pathlib import Path

from prmerge.services.git._run import _run_git

_GIT_SUFFIX_RE = re.compile(r"\.git$")


def repo_name_from_url(url: str) -> str:
    """Return the repository name from a clone URL.

    Takes the trailing path segment and drops a ``.git`` suffix:
    ``https://host/user/repo.git`` and ``git@host:user/repo.git`` both
    give ``repo``.

    Raises:
        ValueError: If no name can be extracted.
    """
    path = url.strip().rstrip("/")
    # scp-like syntax: git@host:repo.git
    segment = re.split(r"[/:]", path)[-1]
    name = _GIT_SUFFIX_RE.sub("", segment)
    if not name:
        raise ValueError(f"Cannot derive repository name from URL: {url!r}")
    return name


def pr_branch_name(suffix: str | int) -> str:
    """Name used for both the temporary remote and local branch: pr-<suffix>."""
    return f"pr-{suffix}"


def checkout_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    quiet: bool = False,
) -> None:
    """Checkout the given branch."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args = ["checkout", "-q", branch_name] if quiet else ["checkout", branch_name]
    _run_git(args, cwd=cwd, log=log)
    if log:
        log.debug("Checked out branch %s", branch_name)


def reset_branch(
    branch_name: str,
    start_point: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Create or reset <branch_name> to <start_point> and check it out."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["checkout", "-B", branch_name, start_point], cwd=cwd, log=log)
    if log:
        log.info("Branch %s reset to %s", branch_name, start_point)


def create_branch(
    branch_name: str,
    start_point: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Create <branch_name> from <start_point> (no upstream) and check it
    out; fails if it exists."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["checkout", "--no-track", "-b", branch_name, start_point], cwd=cwd, log=log)
    if log:
        log.info("Created branch %s from %s", branch_name, start_point)


def delete_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Force-delete a local branch (fails if it does not exist)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["branch", "-q", "-D", branch_name], cwd=cwd, log=log)
