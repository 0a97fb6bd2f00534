"""Push to remotes."""

import logging
from pathlib import Path

from prmerge.services.git._run import _run_git


def push_branch(
    remote: str,
    refspec: str,
    force: bool = False,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Push <refspec> to <remote>; force only when asked (PR branch, never
    base)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args = ["push", "-f", remote, refspec] if force else ["push", remote, refspec]
    _run_git(args, cwd=cwd, log=log, capture=False)
    if log:
        log.info("Pushed %s to %s%s", refspec, remote, " (forced)" if force else "")
