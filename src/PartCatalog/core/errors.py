from __future__ import annotations

from typing import Sequence


class StoreError(RuntimeError):
    """Raised by record stores when a chunk cannot be retrieved."""


class IndexRequiredError(StoreError):
    """Raised when the store needs an index it does not have.

    Unlike transient failures this is fixable by the operator, so callers
    surface it with its own message.

    Attributes:
        fields: Catalog fields lacking an index.
    """

    def __init__(self, fields: Sequence[str]) -> None:
        self.fields = tuple(fields)
        super().__init__(f"Missing index for field(s): {', '.join(self.fields)}")
