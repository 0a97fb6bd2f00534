"""Read-only history queries and terminal display of patches and
signatures."""

import logging
from pathlib import Path

from prmerge.services.git._run import _run_git


def count_commits(
    base: str,
    head: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> int:
    """Number of commits reachable from <head> but not from <base>."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    out = _run_git(["rev-list", "--count", f"{base}..{head}"], cwd=cwd, log=log)
    return int(out.strip() or 0)


def list_authors(
    base: str,
    head: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> list[str]:
    """Distinct ``Name <email>`` authors of <base>..<head>, sorted."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    out = _run_git(["log", "--format=%an <%ae>", f"{base}..{head}"], cwd=cwd, log=log)
    return sorted({line.strip() for line in out.splitlines() if line.strip()})


def show_patch(
    base: str,
    head: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Show ``git log -p <base>..<head>`` on the terminal."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["log", "-p", f"{base}..{head}"], cwd=cwd, log=log, capture=False)


def show_signature(
    ref: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Show ``git show --show-signature <ref>`` on the terminal."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["show", "--show-signature", ref], cwd=cwd, log=log, capture=False)


def git_dir(repo_dir: Path | None = None, log: logging.Logger | None = None) -> Path:
    """Absolute path of the repository's .git directory."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    out = _run_git(["rev-parse", "--git-dir"], cwd=cwd, log=log).strip()
    return (cwd / out).resolve()


def current_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Name of the checked-out branch; GitRunnerError on a detached HEAD."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["symbolic-ref", "--short", "-q", "HEAD"], cwd=cwd, log=log).strip()
