"""GitHub API adapter."""

from typing import Any, Dict

import requests
from pydantic import ValidationError

from prmerge.adapters.base import GitPlatformAdapter, GitPlatformError
from prmerge.models import PullRequest


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    if not isinstance(data, dict):
        raise GitPlatformError(f"Unexpected PR payload: {type(data).__name__}")
    head = data.get("head") or {}
    head_repo = head.get("repo") or {}
    ssh_url = head_repo.get("ssh_url")
    if not ssh_url:
        # Head repository was deleted (fork removed); nothing to fetch from
        raise GitPlatformError(f"PR #{data.get('number')} has no head repository")
    try:
        return PullRequest(
            number=data["number"],
            state=data.get("state", "open"),
            maintainer_can_modify=bool(data.get("maintainer_can_modify")),
            head_repo_ssh_url=ssh_url,
            head_ref=head.get("ref", ""),
            html_url=data.get("html_url"),
        )
    except (KeyError, ValidationError) as e:
        raise GitPlatformError(f"Malformed PR payload: {e}") from e


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(self, token: str | None = None, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(self, method: str, path: str) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, timeout=30)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                msg = body.get("message", msg)
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def pr_info_url(self, repo: str, pr_number: int) -> str:
        return f"{self._api_url}/repos/{repo}/pulls/{pr_number}"

    def get_pr(self, repo: str, pr_number: int) -> PullRequest:
        resp = self._request("GET", f"/repos/{repo}/pulls/{pr_number}")
        try:
            data = resp.json()
        except ValueError as e:
            raise GitPlatformError(f"Invalid JSON for PR #{pr_number}") from e
        return _pr_from_api(data)
