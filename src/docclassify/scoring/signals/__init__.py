"""Signal scorer implementations."""

from docclassify.scoring.signals.compliance import score_compliance
from docclassify.scoring.signals.metadata import score_metadata
from docclassify.scoring.signals.ordering import score_ordering
from docclassify.scoring.signals.structure import score_structure
from docclassify.scoring.signals.terminology import score_terminology

__all__ = [
    "score_structure",
    "score_terminology",
    "score_compliance",
    "score_metadata",
    "score_ordering",
]
