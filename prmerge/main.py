"""merge-external-pr entry point.

Usage:
  merge-external-pr REPO_URL BRANCH
  merge-external-pr PR

Exit status: 0 merged, 1 fatal error, 2 usage error, 3 confirmation
declined.
"""

import argparse
import logging
import signal
import sys
from pathlib import Path

import yaml

from prmerge.adapters import GitHubAdapter, GitPlatformError
from prmerge.config import DEFAULT_CONFIG_FILE, AppConfig, load_config
from prmerge.errors import (
    EXIT_DECLINED,
    EXIT_FATAL,
    EXIT_INTERRUPTED,
    EXIT_OK,
    EXIT_USAGE,
    ConfirmationDeclined,
    MergeError,
    UsageError,
)
from prmerge.logging import MergeLogging
from prmerge.resolver import require_tools, resolve, validate_args
from prmerge.services.git import GitCLI, GitRunnerError
from prmerge.workflow import InputFn, MergeWorkflow

USAGE = """\
  merge-external-pr REPO_URL BRANCH
  merge-external-pr PR"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="merge-external-pr",
        usage=USAGE,
        description="Rebase, review, squash, sign and fast-forward merge an external PR",
    )
    parser.add_argument("args", nargs="*", metavar="ARG", help="PR number, or repository URL and branch")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        help="Path to key=value override file (default: merge-external-pr.conf)",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and print config, then exit",
    )
    return parser


def _usage_error(parser: argparse.ArgumentParser, e: UsageError) -> int:
    parser.print_usage(sys.stderr)
    print(f"{parser.prog}: error: {e}", file=sys.stderr)
    return EXIT_USAGE


def _raise_on_sigterm(signum, frame):
    # Unwinds through the cleanup guard like Ctrl-C does
    raise SystemExit(128 + signum)


def run(
    args: list[str],
    config: AppConfig,
    input_fn: InputFn | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Check prerequisites, resolve the PR and run the merge workflow."""
    log = log or logging.getLogger("prmerge")
    validate_args(args)
    require_tools()

    def adapter_factory() -> GitHubAdapter:
        return GitHubAdapter(token=config.github_token_resolved, api_url=config.github.api_url)

    pr = resolve(args, config.merge, adapter_factory, log=log)
    vcs = GitCLI(log=logging.getLogger("prmerge.git"))
    workflow_log = logging.getLogger("prmerge.workflow")
    workflow = MergeWorkflow(vcs, config.merge, pr, input_fn=input_fn or input, log=workflow_log)
    workflow.run()


def main(argv: list[str] | None = None) -> int:
    """Entry point: returns the process exit status."""
    parser = build_parser()
    ns = parser.parse_args(argv if argv is not None else sys.argv[1:])
    if not ns.check:
        try:
            validate_args(ns.args)
        except UsageError as e:
            return _usage_error(parser, e)

    try:
        config = load_config(ns.config)
    except MergeError as e:
        print(f"merge-external-pr: {e}", file=sys.stderr)
        return e.exit_code
    MergeLogging(config.logging, level=ns.log_level).setup()
    log = logging.getLogger("prmerge")

    if ns.check:
        print(yaml.safe_dump(config.model_dump(exclude={"github": {"token"}}), sort_keys=False), end="")
        return EXIT_OK

    original_sigterm = signal.getsignal(signal.SIGTERM)
    signal.signal(signal.SIGTERM, _raise_on_sigterm)
    try:
        run(ns.args, config, log=log)
    except UsageError as e:
        return _usage_error(parser, e)
    except ConfirmationDeclined:
        return EXIT_DECLINED
    except (MergeError, GitRunnerError, GitPlatformError) as e:
        log.error("%s", e)
        return getattr(e, "exit_code", EXIT_FATAL)
    except KeyboardInterrupt:
        log.error("Interrupted")
        return EXIT_INTERRUPTED
    finally:
        signal.signal(signal.SIGTERM, original_sigterm)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
