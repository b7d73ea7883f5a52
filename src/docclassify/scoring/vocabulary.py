"""Keyword tables used by the signal scorers.

All entries are lowercase. Categories not listed simply contribute nothing.
"""

from __future__ import annotations

from docclassify.types import Complexity

# Words expected in documents of each category
CATEGORY_TERMINOLOGY: dict[str, list[str]] = {
    "survey": ["survey", "site", "assessment", "observation", "measurement", "data", "findings"],
    "assessment": ["assessment", "evaluation", "analysis", "review", "appraisal", "judgment"],
    "method": ["method", "procedure", "process", "approach", "technique", "protocol"],
    "condition": ["condition", "state", "status", "health", "integrity", "deterioration"],
    "safety": ["safety", "risk", "hazard", "danger", "precaution", "protection"],
    "insurance": ["insurance", "claim", "coverage", "policy", "premium", "liability"],
    "custom": ["custom", "specific", "unique", "tailored", "bespoke"],
}

# Phrases that indicate a category when found in the text
CATEGORY_INDICATORS: dict[str, list[str]] = {
    "survey": ["survey", "site visit", "observation", "measurement", "data collection"],
    "assessment": ["assessment", "evaluation", "analysis", "appraisal", "review"],
    "method": ["method", "procedure", "process", "approach", "technique", "protocol"],
    "condition": ["condition", "state", "status", "health", "integrity", "deterioration"],
    "safety": ["safety", "risk", "hazard", "danger", "precaution", "protection"],
    "insurance": ["insurance", "claim", "coverage", "policy", "premium", "liability"],
}

# Related words that count as a mention of an audience
AUDIENCE_SYNONYMS: dict[str, list[str]] = {
    "planners": ["planning", "development", "design"],
    "developers": ["development", "construction", "builder"],
    "clients": ["client", "customer", "owner", "stakeholder"],
    "technical": ["technical", "expert", "specialist", "engineer"],
    "contractors": ["contractor", "subcontractor", "worker", "crew"],
    "safety officers": ["safety", "health", "hse", "officer"],
    "regulators": ["regulator", "authority", "compliance", "enforcement"],
}

# Complexity levels typical for each category
CATEGORY_COMPLEXITY: dict[str, tuple[Complexity, ...]] = {
    "survey": (Complexity.MEDIUM, Complexity.COMPLEX),
    "assessment": (Complexity.COMPLEX,),
    "method": (Complexity.MEDIUM,),
    "condition": (Complexity.SIMPLE, Complexity.MEDIUM),
    "safety": (Complexity.MEDIUM, Complexity.COMPLEX),
    "insurance": (Complexity.COMPLEX,),
    "custom": (Complexity.SIMPLE, Complexity.MEDIUM, Complexity.COMPLEX),
}

# Recognised standards and the phrases that reference them
COMPLIANCE_STANDARDS: dict[str, list[str]] = {
    "bs5837": ["bs5837", "5837", "british standard", "tree survey"],
    "arboricultural association": ["arboricultural association", "aa", "tree work"],
    "iso": ["iso", "international standard", "quality standard"],
    "health and safety": ["health and safety", "hse", "risk assessment", "coshh"],
    "planning": ["planning", "local authority", "development", "permission"],
    "insurance": ["insurance", "indemnity", "liability", "cover", "policy"],
}

# Typical section sequences per category
ORDERING_TEMPLATES: dict[str, list[list[str]]] = {
    "survey": [
        ["introduction", "methodology", "results", "conclusion", "recommendations"],
        ["executive summary", "introduction", "site description", "findings", "conclusion"],
        ["background", "scope", "method", "data", "analysis", "summary"],
    ],
    "assessment": [
        ["executive summary", "introduction", "assessment criteria", "findings", "recommendations"],
        ["purpose", "scope", "methodology", "analysis", "conclusions", "actions"],
        ["overview", "evaluation", "risks", "opportunities", "conclusion"],
    ],
    "method": [
        ["introduction", "scope", "procedures", "equipment", "safety", "appendices"],
        ["purpose", "applicability", "steps", "controls", "verification"],
        ["objective", "method", "materials", "steps", "quality control"],
    ],
    "condition": [
        ["introduction", "inspection", "findings", "condition assessment", "recommendations"],
        ["executive summary", "background", "inspection data", "analysis", "conclusion"],
        ["overview", "method", "results", "assessment", "actions"],
    ],
    "safety": [
        ["introduction", "hazard identification", "risk assessment", "control measures", "conclusion"],
        ["executive summary", "scope", "risks", "controls", "monitoring", "review"],
        ["purpose", "hazards", "assessment", "precautions", "emergency"],
    ],
    "insurance": [
        ["executive summary", "incident details", "assessment", "valuation", "recommendation"],
        ["introduction", "background", "analysis", "conclusion", "settlement"],
        ["claim details", "investigation", "findings", "determination", "resolution"],
    ],
}

# Where sections usually sit, for categories without usable templates
SECTION_POSITIONS: dict[str, dict[str, list[str]]] = {
    "survey": {
        "early": ["introduction", "executive summary", "background", "scope"],
        "middle": ["methodology", "site description", "data", "findings", "analysis"],
        "late": ["conclusion", "recommendations", "summary", "appendices"],
    },
    "assessment": {
        "early": ["executive summary", "introduction", "purpose", "scope"],
        "middle": ["assessment", "evaluation", "analysis", "findings", "risks"],
        "late": ["conclusion", "recommendations", "actions", "next steps"],
    },
    "method": {
        "early": ["introduction", "purpose", "scope", "objective"],
        "middle": ["method", "procedure", "steps", "equipment", "materials"],
        "late": ["safety", "quality control", "verification", "appendices"],
    },
}

# Title keywords for the introduction / analysis / conclusion flow check
INTRO_KEYWORDS: tuple[str, ...] = ("intro", "background", "purpose")
ANALYSIS_KEYWORDS: tuple[str, ...] = ("method", "analysis", "findings", "data")
CONCLUSION_KEYWORDS: tuple[str, ...] = ("conclusion", "summary", "recommendation", "result")
