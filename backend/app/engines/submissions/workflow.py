"""Three-step product submission workflow: basic info, questionnaire, review."""

import logging
from enum import Enum

from ...errors import (
    GENERATION_FAILED,
    SUBMISSION_FAILED,
    ProductServiceError,
    UpstreamCallError,
    ValidationError,
)
from ..questions.catalog import Question
from .clients import ProductClient
from .store import ProductDraft, Submission

logger = logging.getLogger(__name__)


class WorkflowStage(str, Enum):
    BASIC_INFO = "basic_info"
    QUESTIONNAIRE = "questionnaire"
    REVIEW = "review"


class SubmissionWorkflow:
    """Holds one user's in-progress draft and moves it between stages.

    Transitions return ``True`` on success. On failure they return ``False``,
    leave the stage and entered data untouched, and put the error in
    ``last_error``.
    """

    def __init__(self, client: ProductClient):
        self.client = client
        self.stage = WorkflowStage.BASIC_INFO
        self.busy = False
        self.last_error: ProductServiceError | None = None
        self._clear_fields()

    def _clear_fields(self) -> None:
        self.product_name = ""
        self.product_type = ""
        self.description = ""
        self.questions: tuple[Question, ...] = ()
        self.category = ""
        self.answers: dict[str, str] = {}

    @property
    def error_message(self) -> str | None:
        return str(self.last_error) if self.last_error is not None else None

    def set_basic_info(
        self,
        product_name: str | None = None,
        product_type: str | None = None,
        description: str | None = None,
    ) -> None:
        if product_name is not None:
            self.product_name = product_name
        if product_type is not None:
            self.product_type = product_type
        if description is not None:
            self.description = description

    def set_answer(self, question_id: str, value: str) -> None:
        if question_id not in {question.id for question in self.questions}:
            raise ValidationError(f"Unknown question: {question_id}")
        self.answers[question_id] = value

    def unanswered_question_ids(self) -> list[str]:
        return [q.id for q in self.questions if not str(self.answers.get(q.id) or "").strip()]

    def _fail(self, error: ProductServiceError) -> bool:
        self.last_error = error
        return False

    def _check_entry(self, expected: WorkflowStage) -> bool:
        if self.busy:
            return self._fail(ValidationError("A request is already in progress"))
        if self.stage is not expected:
            return self._fail(ValidationError(f"Cannot continue from the {self.stage.value} step"))
        return True

    def next_from_basic_info(self) -> bool:
        if not self._check_entry(WorkflowStage.BASIC_INFO):
            return False
        if not (self.product_name.strip() and self.product_type.strip() and self.description.strip()):
            return self._fail(ValidationError("Please fill in all fields"))

        self.busy = True
        try:
            questions, category = self.client.generate_questions(self.product_type)
        except UpstreamCallError as exc:
            return self._fail(UpstreamCallError(str(exc), kind=GENERATION_FAILED, status_code=exc.status_code))
        except Exception:
            logger.exception("Question generation failed for product_type=%r", self.product_type)
            return self._fail(UpstreamCallError("Error connecting to AI service", kind=GENERATION_FAILED))
        finally:
            self.busy = False

        if not questions:
            return self._fail(UpstreamCallError("Failed to generate questions", kind=GENERATION_FAILED))

        self.questions = tuple(questions)
        self.category = category
        self.stage = WorkflowStage.QUESTIONNAIRE
        self.last_error = None
        return True

    def next_from_questionnaire(self) -> bool:
        if not self._check_entry(WorkflowStage.QUESTIONNAIRE):
            return False
        unanswered = self.unanswered_question_ids()
        if unanswered:
            noun = "question" if len(unanswered) == 1 else "questions"
            return self._fail(
                ValidationError(
                    f"Please answer all questions ({len(unanswered)} {noun} unanswered: {', '.join(unanswered)})",
                    unanswered=unanswered,
                )
            )
        self.stage = WorkflowStage.REVIEW
        self.last_error = None
        return True

    def build_draft(self) -> ProductDraft:
        shown = {question.id for question in self.questions}
        return ProductDraft(
            product_name=self.product_name,
            product_type=self.product_type,
            description=self.description,
            answers={key: value for key, value in self.answers.items() if key in shown},
        )

    def submit(self) -> Submission | None:
        """Submit the reviewed draft; returns the stored submission or ``None`` on failure."""
        if not self._check_entry(WorkflowStage.REVIEW):
            return None

        self.busy = True
        try:
            submission = self.client.submit_product(self.build_draft())
        except UpstreamCallError as exc:
            self._fail(UpstreamCallError(str(exc), kind=SUBMISSION_FAILED, status_code=exc.status_code))
            return None
        except Exception:
            logger.exception("Submitting product %r failed", self.product_name)
            self._fail(UpstreamCallError("Error submitting product", kind=SUBMISSION_FAILED))
            return None
        finally:
            self.busy = False

        self.reset()
        return submission

    def back(self) -> None:
        if self.busy:
            return
        self.last_error = None
        if self.stage is WorkflowStage.REVIEW:
            self.stage = WorkflowStage.QUESTIONNAIRE
        elif self.stage is WorkflowStage.QUESTIONNAIRE:
            self.stage = WorkflowStage.BASIC_INFO

    def reset(self) -> None:
        self._clear_fields()
        self.stage = WorkflowStage.BASIC_INFO
        self.last_error = None
