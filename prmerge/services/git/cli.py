"""VersionControl backed by the git command-line tool."""

import logging
from pathlib import Path

from prmerge.services.git import branches, commits, history, merge, push_pull, remotes
from prmerge.services.git.base import VersionControl


class GitCLI(VersionControl):
    """Runs git in repo_dir (cwd if None)."""

    def __init__(self, repo_dir: Path | None = None, log: logging.Logger | None = None) -> None:
        self._repo_dir = Path(repo_dir) if repo_dir is not None else Path.cwd()
        self._log = log

    def add_remote(self, name: str, url: str) -> None:
        remotes.add_remote(name, url, repo_dir=self._repo_dir, log=self._log)

    def remove_remote(self, name: str) -> None:
        remotes.remove_remote(name, repo_dir=self._repo_dir, log=self._log)

    def fetch(self, remote: str, branch: str) -> None:
        remotes.fetch(remote, branch, repo_dir=self._repo_dir, log=self._log)

    def checkout(self, branch: str, quiet: bool = False) -> None:
        branches.checkout_branch(branch, repo_dir=self._repo_dir, log=self._log, quiet=quiet)

    def reset_branch(self, branch: str, start_point: str) -> None:
        branches.reset_branch(branch, start_point, repo_dir=self._repo_dir, log=self._log)

    def create_branch(self, branch: str, start_point: str) -> None:
        branches.create_branch(branch, start_point, repo_dir=self._repo_dir, log=self._log)

    def delete_branch(self, branch: str) -> None:
        branches.delete_branch(branch, repo_dir=self._repo_dir, log=self._log)

    def rebase(self, upstream: str) -> None:
        merge.rebase(upstream, repo_dir=self._repo_dir, log=self._log)

    def abort_rebase(self) -> None:
        merge.abort_rebase(repo_dir=self._repo_dir, log=self._log)

    def abort_merge(self) -> None:
        merge.abort_merge(repo_dir=self._repo_dir, log=self._log)

    def reset_merge(self) -> None:
        merge.reset_merge(repo_dir=self._repo_dir, log=self._log)

    def current_branch(self) -> str:
        return history.current_branch(repo_dir=self._repo_dir, log=self._log)

    def show_patch(self, base: str, head: str) -> None:
        history.show_patch(base, head, repo_dir=self._repo_dir, log=self._log)

    def count_commits(self, base: str, head: str) -> int:
        return history.count_commits(base, head, repo_dir=self._repo_dir, log=self._log)

    def list_authors(self, base: str, head: str) -> list[str]:
        return history.list_authors(base, head, repo_dir=self._repo_dir, log=self._log)

    def merge_ff_only(self, ref: str) -> None:
        merge.merge_ff_only(ref, repo_dir=self._repo_dir, log=self._log)

    def merge_squash(self, ref: str) -> None:
        merge.merge_squash(ref, repo_dir=self._repo_dir, log=self._log)

    def append_authors_to_message(self, authors: list[str]) -> None:
        commits.append_authors_to_squash_message(authors, repo_dir=self._repo_dir, log=self._log)

    def commit_signed(self, author: str | None = None, amend: bool = False, signing_key: str | None = None) -> None:
        commits.commit_signed(
            author=author,
            amend=amend,
            signing_key=signing_key,
            repo_dir=self._repo_dir,
            log=self._log,
        )

    def show_signature(self, ref: str) -> None:
        history.show_signature(ref, repo_dir=self._repo_dir, log=self._log)

    def push(self, remote: str, refspec: str, force: bool = False) -> None:
        push_pull.push_branch(remote, refspec, force=force, repo_dir=self._repo_dir, log=self._log)
