import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from .catalog import CATALOG, FALLBACK_CATEGORY, FOLLOW_UP_RULES, Question

logger = logging.getLogger(__name__)

AI_MODEL_LABEL = "Rule-based simulation (v1.0)"


def normalize_category(label: Any) -> str:
    text = str(label or "").strip()
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()


def resolve(category_label: Any) -> tuple[tuple[Question, ...], str]:
    """Return the question set for a category label and the category actually used.

    Labels are matched case-insensitively against the catalog keys; anything
    unknown (including an empty label) resolves to the fallback set.
    """
    normalized = normalize_category(category_label)
    questions = CATALOG.get(normalized)
    if questions is None:
        logger.debug("No catalog entry for category=%r, using %s", category_label, FALLBACK_CATEGORY)
        return CATALOG[FALLBACK_CATEGORY], FALLBACK_CATEGORY
    return questions, normalized


def generate_questions(category_label: Any, now: datetime | None = None) -> dict[str, Any]:
    questions, category = resolve(category_label)
    generated_at = now or datetime.now(timezone.utc)
    return {
        "questions": list(questions),
        "metadata": {
            "generatedAt": generated_at.isoformat(),
            "productType": category,
            "questionCount": len(questions),
            "aiModel": AI_MODEL_LABEL,
        },
    }


def follow_up_questions(answers: Mapping[str, Any] | None) -> tuple[Question, ...]:
    answers = answers or {}
    return tuple(
        rule.question
        for rule in FOLLOW_UP_RULES
        if str(answers.get(rule.trigger_id) or "").strip() == rule.trigger_value
    )


def available_categories() -> list[str]:
    return list(CATALOG.keys())
