"""Data models for the pull request being merged (Pydantic)."""

from pydantic import BaseModel, ConfigDict


class PullRequest(BaseModel):
    """Pull request as reported by the hosting API."""

    number: int
    state: str
    maintainer_can_modify: bool = False
    head_repo_ssh_url: str
    head_ref: str
    html_url: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.state == "closed"


class PRDescriptor(BaseModel):
    """Where the PR lives and which temporary names the run uses."""

    model_config = ConfigDict(frozen=True)

    url: str
    branch: str
    remote_name: str
    local_branch: str
    # Maintainer may push to the PR branch; the squashed commit is pushed back to close it
    writable: bool = False
    number: int | None = None

    @property
    def squashed_branch(self) -> str:
        return f"{self.local_branch}-squashed"

    @property
    def label(self) -> str:
        """Human-readable name for log messages."""
        if self.number is not None:
            return f"PR #{self.number}"
        return f"{self.url} {self.branch}"

    @property
    def remote_ref(self) -> str:
        """Remote-tracking ref of the fetched PR branch."""
        return f"{self.remote_name}/{self.branch}"


class SquashResult(BaseModel):
    """Outcome of the squash step, consumed by the sign step."""

    model_config = ConfigDict(frozen=True)

    commit_count: int
    # Single author to record on the commit; None keeps the committer as author
    author: str | None = None

    @property
    def fast_forwarded(self) -> bool:
        """True when the PR had one commit and was merged without squashing."""
        return self.commit_count == 1
