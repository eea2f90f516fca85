"""Rule-based question generation API."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ..engines.questions.resolver import available_categories, follow_up_questions, generate_questions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["questions"])


class GenerateQuestionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_type: str | None = Field(default=None, alias="productType")


class FollowUpRequest(BaseModel):
    answers: dict[str, Any] = Field(default_factory=dict)


@router.post("/generate-questions")
def generate_questions_for_type(payload: GenerateQuestionsRequest):
    product_type = (payload.product_type or "").strip()
    if not product_type:
        raise HTTPException(status_code=400, detail="Product type is required")

    generated = generate_questions(product_type)
    logger.info(
        "Generated %s questions for product_type=%r (resolved=%s)",
        generated["metadata"]["questionCount"],
        product_type,
        generated["metadata"]["productType"],
    )
    return {
        "success": True,
        "productType": product_type,
        "questions": {
            "questions": [question.to_dict() for question in generated["questions"]],
            "metadata": generated["metadata"],
        },
    }


@router.post("/follow-up-questions")
def follow_up_questions_for_answers(payload: FollowUpRequest):
    answers = {key: str(value) for key, value in payload.answers.items() if value is not None}
    return {"success": True, "questions": [question.to_dict() for question in follow_up_questions(answers)]}


@router.get("/product-types")
def list_product_types():
    return {"success": True, "data": available_categories()}
