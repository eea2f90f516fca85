"""Product clients used by the submission workflow.

``LocalProductClient`` calls the resolver and store in-process;
``HttpProductClient`` talks to the ``/api`` routes over HTTP.
"""

import json
import logging
from typing import Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ...errors import GENERATION_FAILED, SUBMISSION_FAILED, UpstreamCallError
from ..questions.catalog import Question
from ..questions.resolver import resolve
from .store import ProductDraft, Submission, SubmissionStore

logger = logging.getLogger(__name__)

USER_AGENT = "Product-Submission-Client/0.1"


class ProductClient(Protocol):
    def generate_questions(self, product_type: str) -> tuple[tuple[Question, ...], str]:
        ...

    def submit_product(self, draft: ProductDraft) -> Submission:
        ...


class LocalProductClient:
    def __init__(self, store: SubmissionStore):
        self.store = store

    def generate_questions(self, product_type: str) -> tuple[tuple[Question, ...], str]:
        return resolve(product_type)

    def submit_product(self, draft: ProductDraft) -> Submission:
        if not draft.product_name.strip() or not draft.product_type.strip():
            raise UpstreamCallError("Product name and type are required", kind=SUBMISSION_FAILED)
        return self.store.accept(draft)


def _question_from_payload(item: dict[str, Any]) -> Question:
    return Question(
        id=str(item["id"]),
        prompt=str(item.get("question") or ""),
        kind=str(item.get("type") or "text"),
        choices=tuple(str(choice) for choice in item.get("choices") or ()),
        placeholder=item.get("placeholder"),
        help=item.get("description"),
    )


class HttpProductClient:
    def __init__(self, base_url: str, timeout: float = 20.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, body: dict[str, Any] | None, kind: str) -> dict[str, Any]:
        data = json.dumps(body).encode("utf-8") if body is not None else None
        request = Request(
            f"{self.base_url}{path}",
            data=data,
            method=method,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )
        try:
            with urlopen(request, timeout=self.timeout) as response:  # noqa: S310
                payload = json.loads(response.read().decode("utf-8"))
        except HTTPError as exc:
            message = _error_message(exc) or f"Request failed with status {exc.code}"
            logger.warning("%s %s failed: status=%s message=%s", method, path, exc.code, message)
            raise UpstreamCallError(message, kind=kind, status_code=exc.code) from exc
        except (URLError, OSError, ValueError) as exc:
            logger.exception("%s %s failed", method, path)
            raise UpstreamCallError("Error connecting to product service", kind=kind) from exc

        if not isinstance(payload, dict) or not payload.get("success"):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise UpstreamCallError(str(message or "Request was not successful"), kind=kind)
        return payload

    def generate_questions(self, product_type: str) -> tuple[tuple[Question, ...], str]:
        payload = self._request("POST", "/generate-questions", {"productType": product_type}, GENERATION_FAILED)
        generated = payload.get("questions")
        if not isinstance(generated, dict) or not isinstance(generated.get("questions"), list):
            raise UpstreamCallError("Failed to generate questions", kind=GENERATION_FAILED)
        try:
            questions = tuple(_question_from_payload(item) for item in generated["questions"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamCallError("Failed to generate questions", kind=GENERATION_FAILED) from exc
        metadata = generated.get("metadata") or {}
        category = str(metadata.get("productType") or payload.get("productType") or product_type)
        return questions, category

    def submit_product(self, draft: ProductDraft) -> Submission:
        payload = self._request("POST", "/products", draft.to_dict(), SUBMISSION_FAILED)
        try:
            return Submission.from_dict(payload["data"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamCallError("Failed to submit product", kind=SUBMISSION_FAILED) from exc

    def list_products(self) -> list[Submission]:
        payload = self._request("GET", "/products", None, SUBMISSION_FAILED)
        items = payload.get("data")
        if not isinstance(items, list):
            raise UpstreamCallError("Failed to fetch products", kind=SUBMISSION_FAILED)
        return [Submission.from_dict(item) for item in items if isinstance(item, dict)]

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health", None, SUBMISSION_FAILED)


def _error_message(exc: HTTPError) -> str | None:
    try:
        body = json.loads(exc.read().decode("utf-8"))
    except (OSError, ValueError):
        return None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        return str(message) if message else None
    return None
