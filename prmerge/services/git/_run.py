"""Internal helpers: run git commands, GitRunnerError."""

import logging
import subprocess
from pathlib import Path


class GitRunnerError(Exception):
    """Raised when a git command fails."""

    pass


def _run_git(
    args: list[str],
    cwd: Path,
    log: logging.Logger | None = None,
    capture: bool = True,
) -> str:
    """Run git command; raise GitRunnerError on non-zero exit.

    With capture=False the command inherits the terminal (pager, editor,
    conflict messages) and an empty string is returned.
    """
    cmd = ["git"] + args
    if log:
        log.debug("Running %s", " ".join(cmd))
    try:
        if not capture:
            subprocess.run(cmd, cwd=cwd, check=True)
            return ""
        result = subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or f"exit status {e.returncode}").strip()
        if log:
            log.debug("Git %s failed: %s", args, err)
        raise GitRunnerError(f"git {' '.join(args)}: {err}") from e
    except FileNotFoundError as e:
        raise GitRunnerError("git not found") from e
    return result.stdout
