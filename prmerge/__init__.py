"""Merge an external contributor's pull request: rebase, review, squash, sign,
fast-forward."""

__version__ = "0.1.0"
