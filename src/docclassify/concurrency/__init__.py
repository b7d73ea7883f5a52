"""Concurrency: bounded async pool for scoring fan-out."""

from docclassify.concurrency.pool import ScoringPool

__all__ = ["ScoringPool"]
