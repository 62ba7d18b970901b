"""Errors raised at the document boundary.

The layout core itself never raises on bad references; it records a
``LayoutIssue`` and carries on.
"""

from __future__ import annotations


class DocumentError(ValueError):
    """A document revision failed validation and cannot enter the pipeline."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
