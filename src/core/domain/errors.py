"""Domain exceptions.

Only the batch coordinator raises these; validators and the health
aggregator report failures as data.
"""

from __future__ import annotations


class RefcheckError(Exception):
    """Base class for errors raised by this package."""


class BatchValidationError(RefcheckError):
    """A batch was rejected at its first failing entry.

    Attributes:
    - `failed_key`: caller-chosen key of the failing request.
    - `failed_kind`: kind of the failing request (raw string, may be unknown).
    - `original_error`: underlying cause; a message from the validator or an
      exception describing the missing reference / unknown kind.
    """

    def __init__(
        self,
        message: str,
        *,
        failed_key: str,
        failed_kind: str,
        original_error: BaseException | str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.failed_key = failed_key
        self.failed_kind = failed_kind
        self.original_error = original_error

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"failed_key={self.failed_key!r}, failed_kind={self.failed_kind!r})"
        )
