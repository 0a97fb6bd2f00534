"""Resolve the command-line input into a PRDescriptor.

Numeric mode asks the hosting API for the PR's head repository and
branch; explicit mode takes them from the command line. Both derive the
temporary remote and local branch name ``pr-<suffix>``.
"""

import logging
import shutil
from typing import Callable, Iterable

from prmerge.adapters.base import GitPlatformAdapter, GitPlatformError
from prmerge.config import MergeConfig
from prmerge.errors import MissingToolError, PRClosedError, UsageError
from prmerge.models import PRDescriptor
from prmerge.services.git import pr_branch_name, repo_name_from_url

REQUIRED_TOOLS = ("git",)


def require_tools(
    tools: Iterable[str] = REQUIRED_TOOLS,
    which: Callable[[str], str | None] | None = None,
) -> None:
    """Raise MissingToolError for the first tool not found on PATH."""
    which = which or shutil.which
    for tool in tools:
        if which(tool) is None:
            raise MissingToolError(f"{tool}(1) is not found, cannot merge PR")


def parse_pr_number(value: str) -> int:
    """Parse a PR number argument; UsageError if it is not a positive
    integer."""
    try:
        number = int(value)
    except ValueError as e:
        raise UsageError(f"PR must be a number, got {value!r}") from e
    if number <= 0:
        raise UsageError(f"PR must be a positive number, got {value!r}")
    return number


def validate_args(args: list[str]) -> None:
    """Check the argument shape without side effects: ``PR`` or
    ``REPO_URL BRANCH``."""
    if len(args) == 1:
        parse_pr_number(args[0])
    elif len(args) != 2:
        raise UsageError("expected PR or REPO_URL BRANCH")


def resolve_from_number(
    adapter: GitPlatformAdapter,
    config: MergeConfig,
    pr_number: int,
    log: logging.Logger | None = None,
) -> PRDescriptor:
    """Query the hosting API for PR <pr_number> of owner/repo."""
    repo = f"{config.owner}/{config.repo}"
    try:
        pr = adapter.get_pr(repo, pr_number)
    except GitPlatformError as e:
        raise GitPlatformError(f"Unable to get PR info from {adapter.pr_info_url(repo, pr_number)}: {e}") from e
    if pr.is_closed:
        raise PRClosedError(f"PR {pr_number} is closed, will not merge")
    if pr.html_url and log:
        log.info("PR %d: %s", pr_number, pr.html_url)
    if not pr.maintainer_can_modify and log:
        log.warning("PR does not allow 'edits from maintainers', so it will be kept open")
    name = pr_branch_name(pr_number)
    return PRDescriptor(
        url=pr.head_repo_ssh_url,
        branch=pr.head_ref,
        remote_name=name,
        local_branch=name,
        writable=pr.maintainer_can_modify,
        number=pr_number,
    )


def resolve_from_url(url: str, branch: str) -> PRDescriptor:
    """Build the descriptor for an explicit repository URL and branch."""
    if not branch.strip():
        raise UsageError("BRANCH must not be empty")
    try:
        name = pr_branch_name(repo_name_from_url(url))
    except ValueError as e:
        raise UsageError(str(e)) from e
    return PRDescriptor(url=url, branch=branch, remote_name=name, local_branch=name)


def resolve(
    args: list[str],
    config: MergeConfig,
    adapter_factory: Callable[[], GitPlatformAdapter],
    log: logging.Logger | None = None,
) -> PRDescriptor:
    """Dispatch on argument count: ``PR`` or ``REPO_URL BRANCH``.

    The adapter is only built in numeric mode.
    """
    validate_args(args)
    if log:
        log.info("[ Reading PR info ]")
    if len(args) == 1:
        return resolve_from_number(adapter_factory(), config, parse_pr_number(args[0]), log=log)
    return resolve_from_url(args[0], args[1])
