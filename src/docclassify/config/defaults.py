"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Decision thresholds
DEFAULT_CONFIDENCE_THRESHOLD = 0.7
DEFAULT_AMBIGUITY_THRESHOLD = 0.2
DEFAULT_STRONG_MATCH_THRESHOLD = 0.7

# Signal weights (need not sum to 1)
DEFAULT_SCORING_WEIGHTS: dict[str, float] = {
    "structure": 0.30,
    "terminology": 0.25,
    "compliance": 0.20,
    "metadata": 0.15,
    "ordering": 0.10,
}

# Engine behaviour
DEFAULT_APPLY_RANKING = False
DEFAULT_AUTO_SAVE_RESULTS = True
DEFAULT_MAX_WORKERS = 8
DEFAULT_CACHE_MAX_ENTRIES = 1000
DEFAULT_MAX_LISTENER_FAILURES = 100

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "confidence_threshold": DEFAULT_CONFIDENCE_THRESHOLD,
        "ambiguity_threshold": DEFAULT_AMBIGUITY_THRESHOLD,
        "scoring_weights": dict(DEFAULT_SCORING_WEIGHTS),
        "apply_ranking": DEFAULT_APPLY_RANKING,
        "auto_save_results": DEFAULT_AUTO_SAVE_RESULTS,
        "max_workers": DEFAULT_MAX_WORKERS,
        "cache_max_entries": DEFAULT_CACHE_MAX_ENTRIES,
        "max_listener_failures": DEFAULT_MAX_LISTENER_FAILURES,
        "timeout_seconds": None,
        "log_level": DEFAULT_LOG_LEVEL,
    }
