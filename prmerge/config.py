"""Configuration loading from an optional key=value override file and
environment.

The override file uses the shell assignment syntax of the original
``merge-external-pr.conf`` (``OWNER=...``, ``export BRANCH="main"``).
Values from the file win over environment variables, which win over
defaults. The GitHub token may also be given as a file path in
``GITHUB_TOKEN_FILE`` (Docker secrets).
"""

import os
import re
import shlex
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prmerge.errors import ConfigError

DEFAULT_CONFIG_FILE = Path("merge-external-pr.conf")

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_VAR_RE = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")

# Override file key -> (section, field)
_FILE_KEYS = {
    "OWNER": ("merge", "owner"),
    "REPO": ("merge", "repo"),
    "REMOTE": ("merge", "remote"),
    "BRANCH": ("merge", "branch"),
    "SIGNING_KEY": ("merge", "signing_key"),
    "GITHUB_API_URL": ("github", "api_url"),
    "GITHUB_TOKEN": ("github", "token"),
    "LOGGING_LEVEL": ("logging", "level"),
    "LOGGING_FORMAT": ("logging", "format"),
}


def _read_secret(file_env_key: str) -> str | None:
    """Read secret from file path in env (e.g. Docker secrets)."""
    file_path = os.environ.get(file_env_key)
    if file_path:
        try:
            return Path(file_path).read_text().strip()
        except OSError as e:
            raise ConfigError(f"{file_env_key}: cannot read {file_path}: {e.strerror or e}") from e
    return None


class MergeConfig(BaseSettings):
    """Target repository and base branch the PR is merged into."""

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    owner: str = Field(default="status-im", description="Owner of the canonical repository")
    repo: str = Field(default="status-react", description="Name of the canonical repository")
    remote: str = Field(default="origin", description="Local git remote pointing at the canonical repository")
    branch: str = Field(default="develop", description="Protected base branch")
    signing_key: str | None = Field(default=None, description="Key id for --gpg-sign; git default if unset")

    @property
    def base_ref(self) -> str:
        """Remote-tracking ref of the base branch (e.g. origin/develop)."""
        return f"{self.remote}/{self.branch}"


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore", frozen=True)

    token: str | None = Field(default=None, description="Optional token; public PRs need none")
    api_url: str = Field(default="https://api.github.com", description="API base URL")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore", frozen=True)

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(levelname)s: %(message)s", description="Log format")


class AppConfig(BaseSettings):
    """Root config: override file + env."""

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    merge: MergeConfig = Field(default_factory=MergeConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config/env or Docker secret file."""
        if self.github.token:
            return self.github.token
        return _read_secret("GITHUB_TOKEN_FILE")


def _expand(value: str) -> str:
    """Substitute $NAME and ${NAME} from the environment; unset names become
    empty, as in the shell."""
    return _VAR_RE.sub(lambda m: os.environ.get(m.group(1) or m.group(2), ""), value)


def parse_overrides(text: str, source: str = "<string>") -> dict[str, str]:
    """Parse shell-style ``KEY=value`` assignments.

    Blank lines and ``#`` comments are skipped, an ``export`` prefix is
    accepted and values may be quoted. Variable references are expanded
    unless the value is single-quoted. Raises ConfigError on anything
    else.
    """
    values: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, rest = line.partition("=")
        if not sep or not _KEY_RE.match(key):
            raise ConfigError(f"{source}:{lineno}: expected KEY=value, got {raw.strip()!r}")
        try:
            words = shlex.split(rest, comments=True)
        except ValueError as e:
            raise ConfigError(f"{source}:{lineno}: {e}") from e
        if len(words) > 1:
            raise ConfigError(f"{source}:{lineno}: unquoted whitespace in value of {key}")
        value = words[0] if words else ""
        if not rest.lstrip().startswith("'"):
            value = _expand(value)
        values[key] = value
    return values


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from the override file (if present) and environment.

    Unknown keys in the file are ignored; empty values fall back to env
    or defaults.
    """
    path = config_path or DEFAULT_CONFIG_FILE
    overrides: dict[str, str] = {}
    if path.is_file():
        overrides = parse_overrides(path.read_text(), source=str(path))

    sections: dict[str, dict[str, str]] = {"merge": {}, "github": {}, "logging": {}}
    for key, value in overrides.items():
        target = _FILE_KEYS.get(key)
        if target is None or value == "":
            continue
        section, field = target
        sections[section][field] = value

    return AppConfig(
        merge=MergeConfig(**sections["merge"]),
        github=GitHubConfig(**sections["github"]),
        logging=LoggingConfig(**sections["logging"]),
    )
