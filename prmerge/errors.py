"""Application errors and the exit status each one maps to.

Errors of external collaborators live next to them
(GitRunnerError in prmerge.services.git, GitPlatformError in
prmerge.adapters) and exit with EXIT_FATAL.
"""

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2
EXIT_DECLINED = 3
# 128 + SIGINT, as shells report it
EXIT_INTERRUPTED = 130


class MergeError(Exception):
    """Base for errors that abort the merge."""

    exit_code = EXIT_FATAL


class UsageError(MergeError):
    """Wrong command-line arguments."""

    exit_code = EXIT_USAGE


class ConfigError(MergeError):
    """Malformed override file."""


class MissingToolError(MergeError):
    """A required external program is not on PATH."""


class PRClosedError(MergeError):
    """The pull request is already closed."""


class ConfirmationDeclined(MergeError):
    """The user answered something other than 'yes'."""

    exit_code = EXIT_DECLINED
