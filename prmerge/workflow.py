"""Merge workflow: fetch, rebase, review, squash, sign, verify, merge.

Steps run strictly in order and any failure aborts the run. TemporaryRefs
guards the temporary remote and branches: they are removed on every exit
path, including errors, declined prompts and Ctrl-C.
"""

import logging
from typing import Callable

from prmerge.config import MergeConfig
from prmerge.errors import ConfirmationDeclined, MergeError
from prmerge.models import PRDescriptor, SquashResult
from prmerge.services.git import GitRunnerError, VersionControl

InputFn = Callable[[str], str]


def confirm(question: str, input_fn: InputFn = input) -> None:
    """Ask the user to type 'yes'; raise ConfirmationDeclined otherwise.

    EOF on stdin counts as a decline.
    """
    try:
        answer = input_fn(f"{question} (type 'yes' to continue) ")
    except EOFError:
        answer = ""
    if answer.strip() != "yes":
        raise ConfirmationDeclined(question)


class TemporaryRefs:
    """Context manager that removes the run's temporary refs on exit.

    Cleanup is best effort: each git failure (usually "does not exist")
    is logged at DEBUG and the next action still runs.
    """

    def __init__(
        self,
        vcs: VersionControl,
        config: MergeConfig,
        pr: PRDescriptor,
        log: logging.Logger | None = None,
    ) -> None:
        self._vcs = vcs
        self._config = config
        self._pr = pr
        self._log = log

    def _best_effort(self, action: Callable[..., None], *args: str, **kwargs: bool) -> None:
        try:
            action(*args, **kwargs)
        except GitRunnerError as e:
            if self._log:
                self._log.debug("Cleanup: %s", e)

    def cleanup(self) -> None:
        """Return to the base branch and delete the temporary refs.

        A squash left uncommitted (failed signing, aborted editor) is
        reset first so its staged changes do not follow the checkout onto
        the base branch.
        """
        self._best_effort(self._vcs.abort_rebase)
        self._best_effort(self._vcs.abort_merge)
        try:
            current = self._vcs.current_branch()
        except GitRunnerError as e:
            current = None
            if self._log:
                self._log.debug("Cleanup: %s", e)
        if current == self._pr.squashed_branch:
            self._best_effort(self._vcs.reset_merge)
        self._best_effort(self._vcs.checkout, self._config.branch, quiet=True)
        self._best_effort(self._vcs.delete_branch, self._pr.local_branch)
        self._best_effort(self._vcs.delete_branch, self._pr.squashed_branch)
        self._best_effort(self._vcs.remove_remote, self._pr.remote_name)

    def __enter__(self) -> "TemporaryRefs":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False


class MergeWorkflow:
    """Drives one merge of an external PR into the base branch."""

    def __init__(
        self,
        vcs: VersionControl,
        config: MergeConfig,
        pr: PRDescriptor,
        input_fn: InputFn = input,
        log: logging.Logger | None = None,
    ) -> None:
        self._vcs = vcs
        self._config = config
        self._pr = pr
        self._input = input_fn
        self._log = log or logging.getLogger("prmerge.workflow")

    def run(self) -> None:
        """Run all steps; stale refs of an earlier run are removed first."""
        guard = TemporaryRefs(self._vcs, self._config, self._pr, log=self._log)
        guard.cleanup()
        with guard:
            self.fetch_pr()
            self.refresh_base_branch()
            self.rebase_pr()
            self.confirm_pr()
            result = self.squash_pr()
            self.sign_pr(result)
            self.verify_pr()
            self.merge_pr()
        self._log.info("Merged %s into %s", self._pr.label, self._config.branch)

    def fetch_pr(self) -> None:
        self._log.info("[ Fetching PR ]")
        self._vcs.add_remote(self._pr.remote_name, self._pr.url)
        self._vcs.fetch(self._pr.remote_name, self._pr.branch)

    def refresh_base_branch(self) -> None:
        self._log.info("[ Refreshing %s ]", self._config.base_ref)
        self._vcs.fetch(self._config.remote, self._config.branch)

    def rebase_pr(self) -> None:
        self._log.info("[ Rebasing PR onto %s ]", self._config.base_ref)
        self._vcs.reset_branch(self._pr.local_branch, self._pr.remote_ref)
        self._vcs.rebase(self._config.base_ref)

    def confirm_pr(self) -> None:
        self._vcs.show_patch(self._config.base_ref, self._pr.local_branch)
        confirm("Do you like this PR?", self._input)

    def squash_pr(self) -> SquashResult:
        """Squash the rebased PR onto a new branch from base.

        A single commit is fast-forwarded as is. Several commits are
        squashed; one author becomes the commit author, several are
        listed as Authored-by lines in the message.
        """
        self._log.info("[ Squashing PR ]")
        base = self._config.base_ref
        local = self._pr.local_branch
        self._vcs.create_branch(self._pr.squashed_branch, base)
        count = self._vcs.count_commits(base, local)
        if count == 0:
            raise MergeError(f"{local} has no commits on top of {base}, nothing to merge")
        authors = self._vcs.list_authors(base, local)
        if count == 1:
            self._vcs.merge_ff_only(local)
            return SquashResult(commit_count=count)
        self._vcs.merge_squash(local)
        if len(authors) == 1:
            return SquashResult(commit_count=count, author=authors[0])
        self._vcs.append_authors_to_message(authors)
        return SquashResult(commit_count=count)

    def sign_pr(self, result: SquashResult) -> None:
        self._log.info("[ Signing commit ]")
        if result.fast_forwarded:
            self._vcs.commit_signed(amend=True, signing_key=self._config.signing_key)
        else:
            self._vcs.commit_signed(author=result.author, signing_key=self._config.signing_key)

    def verify_pr(self) -> None:
        self._vcs.show_signature(self._pr.squashed_branch)
        confirm("Is the signature on the commit correct?", self._input)

    def merge_pr(self) -> None:
        """Push back to the PR branch when allowed, then fast-forward and
        push base."""
        self._log.info("[ Merging into %s ]", self._config.branch)
        squashed = self._pr.squashed_branch
        if self._pr.writable:
            # Marks the PR as merged upstream
            self._vcs.push(self._pr.remote_name, f"{squashed}:{self._pr.branch}", force=True)
        self._vcs.checkout(self._config.branch)
        self._vcs.merge_ff_only(squashed)
        self._vcs.push(self._config.remote, self._config.branch)
