import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field

from ..engines.reports.renderer import render_submission_pdf, report_filename
from ..engines.submissions.store import ProductDraft, Submission, SubmissionStore
from ..errors import RenderError
from .deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


class SubmitProductRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_name: str | None = Field(default=None, alias="productName")
    product_type: str | None = Field(default=None, alias="productType")
    description: str | None = None
    answers: dict[str, Any] | None = None


def _get_submission_or_404(submission_id: int, store: SubmissionStore) -> Submission:
    submission = store.get(submission_id)
    if submission is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return submission


@router.get("")
def list_products(store: SubmissionStore = Depends(get_store)):
    items = store.list()
    return {"success": True, "data": [item.to_dict() for item in items], "count": len(items)}


@router.post("", status_code=201)
def submit_product(payload: SubmitProductRequest, store: SubmissionStore = Depends(get_store)):
    product_name = (payload.product_name or "").strip()
    product_type = (payload.product_type or "").strip()
    if not product_name or not product_type:
        raise HTTPException(status_code=400, detail="Product name and type are required")

    draft = ProductDraft(
        product_name=product_name,
        product_type=product_type,
        description=payload.description or "",
        answers={key: str(value) for key, value in (payload.answers or {}).items() if value is not None},
    )
    submission = store.accept(draft)
    return {
        "success": True,
        "message": "Product submitted successfully",
        "data": submission.to_dict(),
    }


@router.get("/{submission_id}")
def get_product(submission_id: int, store: SubmissionStore = Depends(get_store)):
    return {"success": True, "data": _get_submission_or_404(submission_id, store).to_dict()}


@router.get("/{submission_id}/report")
def download_report(submission_id: int, store: SubmissionStore = Depends(get_store)):
    submission = _get_submission_or_404(submission_id, store)
    try:
        pdf_bytes = render_submission_pdf(submission)
    except RenderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    filename = report_filename(submission.product_name)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
