"""Linear undo/redo history of document revisions."""

from __future__ import annotations

import logging

from sld_layout.document import Document

logger = logging.getLogger(__name__)


class RevisionHistory:
    """Revisions in order with a cursor on the current one.

    Pushing after an undo drops the redo tail. A push equal to the current
    revision is ignored, so a click without movement leaves no undo step.
    """

    def __init__(self, initial: Document | None = None) -> None:
        self._revisions: list[Document] = [initial if initial is not None else Document.initial()]
        self._index = 0

    @property
    def current(self) -> Document:
        return self._revisions[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._revisions) - 1

    def __len__(self) -> int:
        return len(self._revisions)

    def push(self, revision: Document) -> Document:
        if revision == self.current:
            logger.debug("Skipping revision identical to the current one")
            return self.current
        del self._revisions[self._index + 1 :]
        self._revisions.append(revision)
        self._index = len(self._revisions) - 1
        return revision

    def undo(self) -> Document:
        if self.can_undo:
            self._index -= 1
        return self.current

    def redo(self) -> Document:
        if self.can_redo:
            self._index += 1
        return self.current
