"""Rebase and merge: rebase onto base, fast-forward and squash merges, abort."""

import logging
from pathlib import Path

from prmerge.services.git._run import _run_git


def rebase(
    upstream: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Rebase the current branch onto <upstream>.

    Conflicts are left to git: the command fails and the rebase stays in
    progress until abort_rebase() is called.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["rebase", upstream], cwd=cwd, log=log, capture=False)
    if log:
        log.info("Rebased onto %s", upstream)


def abort_rebase(repo_dir: Path | None = None, log: logging.Logger | None = None) -> None:
    """Abort an in-progress rebase (fails if none)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["rebase", "--abort"], cwd=cwd, log=log)


def merge_ff_only(
    ref: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Fast-forward the current branch to <ref>; fails if histories
    diverged."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["merge", "--ff-only", ref], cwd=cwd, log=log)
    if log:
        log.info("Fast-forwarded to %s", ref)


def merge_squash(
    ref: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Stage the changes of <ref> as one uncommitted change; git writes the
    squash message to SQUASH_MSG."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["merge", "--squash", ref], cwd=cwd, log=log)
    if log:
        log.info("Squashed %s", ref)


def abort_merge(repo_dir: Path | None = None, log: logging.Logger | None = None) -> None:
    """Abort an in-progress merge (fails if none)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["merge", "--abort"], cwd=cwd, log=log)


def reset_merge(repo_dir: Path | None = None, log: logging.Logger | None = None) -> None:
    """Drop staged merge results (e.g. an uncommitted squash), keeping
    unrelated working tree changes."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["reset", "-q", "--merge"], cwd=cwd, log=log)
