"""Rule-based question catalog and resolver."""

from .catalog import CATALOG, FALLBACK_CATEGORY, FOLLOW_UP_RULES, FollowUpRule, Question
from .resolver import available_categories, follow_up_questions, generate_questions, normalize_category, resolve

__all__ = [
    "CATALOG",
    "FALLBACK_CATEGORY",
    "FOLLOW_UP_RULES",
    "FollowUpRule",
    "Question",
    "available_categories",
    "follow_up_questions",
    "generate_questions",
    "normalize_category",
    "resolve",
]
