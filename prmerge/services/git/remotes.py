"""Temporary remotes for the PR source repository and fetching from them."""

import logging
from pathlib import Path

from prmerge.services.git._run import _run_git


def add_remote(
    name: str,
    url: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Register remote <name> pointing at <url>."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["remote", "add", name, url], cwd=cwd, log=log)
    if log:
        log.info("Added remote %s -> %s", name, url)


def remove_remote(
    name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Remove remote <name> (fails if it does not exist)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["remote", "remove", name], cwd=cwd, log=log)


def fetch(
    remote: str,
    branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Fetch <branch> from <remote>, updating <remote>/<branch>."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["fetch", remote, branch], cwd=cwd, log=log)
    if log:
        log.info("Fetched %s/%s", remote, branch)
