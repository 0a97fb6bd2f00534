"""Signed, signed-off commits and squash message attribution."""

import logging
from pathlib import Path

from prmerge.services.git._run import _run_git
from prmerge.services.git.history import git_dir

SQUASH_MSG = "SQUASH_MSG"
AUTHORED_BY = "Authored-by: "


def authored_by_lines(authors: list[str]) -> str:
    """One ``Authored-by:`` trailer line per author."""
    return "".join(f"{AUTHORED_BY}{author}\n" for author in authors)


def append_authors_to_squash_message(
    authors: list[str],
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> Path:
    """Append Authored-by lines to the pending squash message.

    Git has no multi-author commits, so co-authors are recorded in the
    message. Returns the path of the message file.
    """
    path = git_dir(repo_dir=repo_dir, log=log) / SQUASH_MSG
    with path.open("a", encoding="utf-8") as f:
        f.write("\n" + authored_by_lines(authors))
    if log:
        log.info("Recorded %d authors in commit message", len(authors))
    return path


def commit_signed(
    author: str | None = None,
    amend: bool = False,
    signing_key: str | None = None,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Commit with a cryptographic signature and Signed-off-by trailer.

    A new commit opens the editor on the prepared message. amend=True
    re-signs HEAD keeping its message and author.

    Args:
        author: ``Name <email>`` to record as author; committer if None.
        amend: Rewrite HEAD instead of creating a new commit.
        signing_key: Key id for --gpg-sign; git's configured key if None.
        repo_dir: Repository directory; uses cwd if None.
        log: Optional logger.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args = ["commit", f"--gpg-sign={signing_key}" if signing_key else "--gpg-sign", "--signoff"]
    if amend:
        args += ["--amend", "--no-edit"]
    if author:
        args.append(f"--author={author}")
    _run_git(args, cwd=cwd, log=log, capture=False)
    if log:
        log.info("Signed commit created%s", f" (author {author})" if author else "")
