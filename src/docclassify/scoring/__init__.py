"""Multi-signal scoring of a document against one type definition."""

from docclassify.scoring.combiner import SignalScore, combine_signals
from docclassify.scoring.composite import score_candidate

__all__ = ["SignalScore", "combine_signals", "score_candidate"]
