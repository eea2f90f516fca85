import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductDraft:
    product_name: str
    product_type: str
    description: str = ""
    answers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "productName": self.product_name,
            "productType": self.product_type,
            "description": self.description,
            "answers": dict(self.answers),
        }


@dataclass(frozen=True)
class Submission:
    id: int
    product_name: str
    product_type: str
    description: str
    answers: dict[str, str]
    submitted_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "productName": self.product_name,
            "productType": self.product_type,
            "description": self.description,
            "answers": dict(self.answers),
            "submittedAt": self.submitted_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Submission":
        raw_answers = payload.get("answers")
        answers = {str(k): str(v) for k, v in raw_answers.items()} if isinstance(raw_answers, dict) else {}
        submitted_at = datetime.fromisoformat(str(payload["submittedAt"]).replace("Z", "+00:00"))
        return cls(
            id=int(payload["id"]),
            product_name=str(payload.get("productName") or ""),
            product_type=str(payload.get("productType") or ""),
            description=str(payload.get("description") or ""),
            answers=answers,
            submitted_at=submitted_at,
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionStore:
    """In-memory, process-lifetime store of accepted submissions.

    Id assignment and append happen under one lock so concurrent sessions
    never see duplicate or out-of-order ids.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self._clock = clock
        self._lock = Lock()
        self._items: list[Submission] = []
        self._next_id = 1

    def accept(self, draft: ProductDraft) -> Submission:
        with self._lock:
            submission = Submission(
                id=self._next_id,
                product_name=draft.product_name,
                product_type=draft.product_type,
                description=draft.description,
                answers=dict(draft.answers),
                submitted_at=self._clock(),
            )
            self._next_id += 1
            self._items.append(submission)
        logger.info("Accepted submission id=%s product=%r", submission.id, submission.product_name)
        return submission

    def list(self) -> list[Submission]:
        with self._lock:
            return list(self._items)

    def get(self, submission_id: int) -> Submission | None:
        with self._lock:
            for item in self._items:
                if item.id == submission_id:
                    return item
        return None

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._items)
