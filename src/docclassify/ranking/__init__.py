"""Candidate ranking: breakdown-consistency re-ordering pass."""

from docclassify.ranking.ranker import (
    RankingAnalysis,
    RankingResult,
    get_ranking_analysis,
    rank_candidates,
)

__all__ = ["RankingAnalysis", "RankingResult", "get_ranking_analysis", "rank_candidates"]
