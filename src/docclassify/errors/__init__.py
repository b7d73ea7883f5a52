"""Error handling: the classifier's exception hierarchy."""

from docclassify.errors.exceptions import (
    ClassificationTimeout,
    ClassifierError,
    InvalidResult,
    ListenerFailure,
    RegistryUnavailable,
    ScorerDegraded,
)

__all__ = [
    "ClassifierError",
    "RegistryUnavailable",
    "InvalidResult",
    "ClassificationTimeout",
    "ScorerDegraded",
    "ListenerFailure",
]
