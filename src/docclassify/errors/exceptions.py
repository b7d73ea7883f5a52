"""Custom exception hierarchy for docclassify."""

from __future__ import annotations

from typing import Any


class ClassifierError(Exception):
    """Base exception for all docclassify errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class RegistryUnavailable(ClassifierError):
    """No type catalog could be obtained; classification aborts.

    Raised when no registry was supplied and the built-in catalog is
    disabled, or when the registry itself failed while listing types.
    """

    def __init__(
        self,
        message: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.original = original


class InvalidResult(ClassifierError):
    """An assembled result broke its own structural invariants.

    Indicates an engine bug. Never corrected silently.
    """

    def __init__(
        self,
        message: str = "",
        errors: list[str] | None = None,
        result_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = list(errors or [])
        self.result_id = result_id


class ClassificationTimeout(ClassifierError):
    """The caller-supplied timeout expired; partial output is discarded."""

    def __init__(
        self,
        message: str = "",
        document_id: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(message)
        self.document_id = document_id
        self.timeout = timeout


class ScorerDegraded(ClassifierError):
    """A signal scorer lacked the data to compare.

    Internal only: the composite scorer turns it into a fallback score and a
    reason string on the candidate.
    """

    def __init__(
        self,
        message: str = "",
        default: float = 0.5,
        signal: str = "",
    ) -> None:
        super().__init__(message)
        self.default = default
        self.signal = signal


class ListenerFailure(ClassifierError):
    """An event listener raised. Logged and recorded, never propagated."""

    def __init__(
        self,
        message: str = "",
        listener: str = "",
        event_type: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.listener = listener
        self.event_type = event_type
        self.original = original
