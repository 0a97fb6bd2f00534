"""In-memory VersionControl for workflow tests.

Commits are plain tuples; a branch is the list of its commits from the
root. Remote repositories are keyed by URL so that remotes added during
a run can fetch from them and pushes are visible to assertions.
"""

from typing import NamedTuple

from prmerge.services.git import GitRunnerError, VersionControl, authored_by_lines

COMMITTER = "Maintainer <maintainer@example.com>"
CANONICAL_URL = "git@github.com:owner/repo.git"


class Commit(NamedTuple):
    sha: str
    author: str
    message: str
    signed: bool = False


def commits(*specs: tuple[str, str]) -> list[Commit]:
    """Build commits from (sha, author) pairs; message is 'change <sha>'."""
    return [Commit(sha=sha, author=author, message=f"change {sha}") for sha, author in specs]


def _shas(history: list[Commit]) -> list[str]:
    return [c.sha for c in history]


class FakeVersionControl(VersionControl):
    """Fake git repository.

    Mutation Tracking:
    - calls: every operation as (method_name, *args), in order
    - pending_message: staged, uncommitted squash; like the git index it
      survives checkout until commit_signed or reset_merge
    """

    def __init__(
        self,
        *,
        remote_repos: dict[str, dict[str, list[Commit]]],
        branches: dict[str, list[Commit]] | None = None,
        remotes: dict[str, str] | None = None,
        current: str = "develop",
        conflicts: set[str] | None = None,
        committer: str = COMMITTER,
        signing_error: str | None = None,
    ) -> None:
        self.remote_repos = remote_repos
        self.branches = {k: list(v) for k, v in (branches or {}).items()}
        self.remotes = dict(remotes if remotes is not None else {"origin": CANONICAL_URL})
        self.tracking: dict[str, list[Commit]] = {}
        self.current = current
        self.conflicts = conflicts or set()
        self.committer = committer
        self.signing_error = signing_error
        self.rebase_in_progress = False
        self.merge_in_progress = False
        self.pending_message: str | None = None
        self.calls: list[tuple] = []
        self._seq = 0

    def _next_sha(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}{self._seq}"

    def _resolve(self, ref: str) -> list[Commit]:
        if ref in self.branches:
            return self.branches[ref]
        if ref in self.tracking:
            return self.tracking[ref]
        raise GitRunnerError(f"fatal: unknown revision {ref!r}")

    def _range(self, base: str, head: str) -> list[Commit]:
        seen = set(_shas(self._resolve(base)))
        return [c for c in self._resolve(head) if c.sha not in seen]

    def add_remote(self, name: str, url: str) -> None:
        self.calls.append(("add_remote", name, url))
        if name in self.remotes:
            raise GitRunnerError(f"error: remote {name} already exists.")
        self.remotes[name] = url

    def remove_remote(self, name: str) -> None:
        self.calls.append(("remove_remote", name))
        if name not in self.remotes:
            raise GitRunnerError(f"error: No such remote: '{name}'")
        del self.remotes[name]
        for ref in [r for r in self.tracking if r.startswith(f"{name}/")]:
            del self.tracking[ref]

    def fetch(self, remote: str, branch: str) -> None:
        self.calls.append(("fetch", remote, branch))
        if remote not in self.remotes:
            raise GitRunnerError(f"fatal: '{remote}' does not appear to be a git repository")
        repo = self.remote_repos.get(self.remotes[remote], {})
        if branch not in repo:
            raise GitRunnerError(f"fatal: couldn't find remote ref {branch}")
        self.tracking[f"{remote}/{branch}"] = list(repo[branch])

    def checkout(self, branch: str, quiet: bool = False) -> None:
        self.calls.append(("checkout", branch))
        if branch not in self.branches:
            raise GitRunnerError(f"error: pathspec '{branch}' did not match")
        if self.rebase_in_progress:
            raise GitRunnerError("error: you need to resolve your current index first")
        self.current = branch

    def reset_branch(self, branch: str, start_point: str) -> None:
        self.calls.append(("reset_branch", branch, start_point))
        self.branches[branch] = list(self._resolve(start_point))
        self.current = branch

    def create_branch(self, branch: str, start_point: str) -> None:
        self.calls.append(("create_branch", branch, start_point))
        if branch in self.branches:
            raise GitRunnerError(f"fatal: a branch named '{branch}' already exists")
        self.branches[branch] = list(self._resolve(start_point))
        self.current = branch

    def delete_branch(self, branch: str) -> None:
        self.calls.append(("delete_branch", branch))
        if branch not in self.branches:
            raise GitRunnerError(f"error: branch '{branch}' not found")
        if branch == self.current:
            raise GitRunnerError(f"error: cannot delete branch '{branch}' checked out")
        del self.branches[branch]

    def rebase(self, upstream: str) -> None:
        self.calls.append(("rebase", upstream))
        if self.current in self.conflicts:
            self.rebase_in_progress = True
            raise GitRunnerError("CONFLICT (content): Merge conflict")
        onto = self._resolve(upstream)
        own = self._range(upstream, self.current)
        rebased = [c._replace(sha=c.sha + "'") for c in own]
        self.branches[self.current] = list(onto) + rebased

    def abort_rebase(self) -> None:
        self.calls.append(("abort_rebase",))
        if not self.rebase_in_progress:
            raise GitRunnerError("fatal: No rebase in progress?")
        self.rebase_in_progress = False

    def abort_merge(self) -> None:
        self.calls.append(("abort_merge",))
        if not self.merge_in_progress:
            raise GitRunnerError("fatal: There is no merge to abort (MERGE_HEAD missing).")
        self.merge_in_progress = False

    def reset_merge(self) -> None:
        self.calls.append(("reset_merge",))
        self.pending_message = None

    def current_branch(self) -> str:
        self.calls.append(("current_branch",))
        return self.current

    def show_patch(self, base: str, head: str) -> None:
        self.calls.append(("show_patch", base, head))

    def count_commits(self, base: str, head: str) -> int:
        self.calls.append(("count_commits", base, head))
        return len(self._range(base, head))

    def list_authors(self, base: str, head: str) -> list[str]:
        self.calls.append(("list_authors", base, head))
        return sorted({c.author for c in self._range(base, head)})

    def merge_ff_only(self, ref: str) -> None:
        self.calls.append(("merge_ff_only", ref))
        mine = _shas(self.branches[self.current])
        target = self._resolve(ref)
        if _shas(target)[: len(mine)] != mine:
            raise GitRunnerError("fatal: Not possible to fast-forward, aborting.")
        self.branches[self.current] = list(target)

    def merge_squash(self, ref: str) -> None:
        self.calls.append(("merge_squash", ref))
        incoming = self._range(self.current, ref)
        lines = ["Squashed commit of the following:", ""]
        lines += [f"commit {c.sha}\nAuthor: {c.author}\n\n    {c.message}\n" for c in incoming]
        self.pending_message = "\n".join(lines)

    def append_authors_to_message(self, authors: list[str]) -> None:
        self.calls.append(("append_authors_to_message", list(authors)))
        if self.pending_message is None:
            raise GitRunnerError("no squash message")
        self.pending_message += "\n" + authored_by_lines(authors)

    def commit_signed(self, author: str | None = None, amend: bool = False, signing_key: str | None = None) -> None:
        self.calls.append(("commit_signed", author, amend, signing_key))
        if self.signing_error:
            raise GitRunnerError(self.signing_error)
        history = self.branches[self.current]
        signoff = f"\n\nSigned-off-by: {self.committer}"
        if amend:
            last = history[-1]
            history[-1] = last._replace(
                sha=self._next_sha("s"),
                author=author or last.author,
                message=last.message + signoff,
                signed=True,
            )
            return
        if self.pending_message is None:
            raise GitRunnerError("nothing to commit, working tree clean")
        history.append(
            Commit(
                sha=self._next_sha("s"),
                author=author or self.committer,
                message=self.pending_message + signoff,
                signed=True,
            )
        )
        self.pending_message = None

    def show_signature(self, ref: str) -> None:
        self.calls.append(("show_signature", ref))

    def push(self, remote: str, refspec: str, force: bool = False) -> None:
        self.calls.append(("push", remote, refspec, force))
        src, _, dst = refspec.partition(":")
        dst = dst or src
        repo = self.remote_repos.setdefault(self.remotes[remote], {})
        incoming = list(self._resolve(src))
        existing = _shas(repo.get(dst, []))
        if not force and _shas(incoming)[: len(existing)] != existing:
            raise GitRunnerError(f"! [rejected] {dst} (non-fast-forward)")
        repo[dst] = incoming
