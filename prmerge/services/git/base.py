"""Abstract version-control capability used by the merge workflow."""

from abc import ABC, abstractmethod


class VersionControl(ABC):
    """Narrow set of git operations the workflow needs.

    Every method raises GitRunnerError on failure. GitCLI runs the real
    git binary; tests substitute an in-memory fake.
    """

    @abstractmethod
    def add_remote(self, name: str, url: str) -> None: ...

    @abstractmethod
    def remove_remote(self, name: str) -> None: ...

    @abstractmethod
    def fetch(self, remote: str, branch: str) -> None: ...

    @abstractmethod
    def checkout(self, branch: str, quiet: bool = False) -> None: ...

    @abstractmethod
    def reset_branch(self, branch: str, start_point: str) -> None:
        """``checkout -B``: create or reset <branch> at <start_point>."""
        ...

    @abstractmethod
    def create_branch(self, branch: str, start_point: str) -> None: ...

    @abstractmethod
    def delete_branch(self, branch: str) -> None: ...

    @abstractmethod
    def rebase(self, upstream: str) -> None: ...

    @abstractmethod
    def abort_rebase(self) -> None: ...

    @abstractmethod
    def abort_merge(self) -> None: ...

    @abstractmethod
    def reset_merge(self) -> None:
        """``reset --merge``: drop a staged, uncommitted squash."""
        ...

    @abstractmethod
    def current_branch(self) -> str: ...

    @abstractmethod
    def show_patch(self, base: str, head: str) -> None: ...

    @abstractmethod
    def count_commits(self, base: str, head: str) -> int: ...

    @abstractmethod
    def list_authors(self, base: str, head: str) -> list[str]: ...

    @abstractmethod
    def merge_ff_only(self, ref: str) -> None: ...

    @abstractmethod
    def merge_squash(self, ref: str) -> None: ...

    @abstractmethod
    def append_authors_to_message(self, authors: list[str]) -> None:
        """Add Authored-by lines to the pending squash message."""
        ...

    @abstractmethod
    def commit_signed(self, author: str | None = None, amend: bool = False, signing_key: str | None = None) -> None: ...

    @abstractmethod
    def show_signature(self, ref: str) -> None: ...

    @abstractmethod
    def push(self, remote: str, refspec: str, force: bool = False) -> None: ...
