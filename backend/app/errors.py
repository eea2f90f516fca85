"""Error taxonomy shared by the workflow, the API routers and the report renderer."""

VALIDATION = "validation"
GENERATION_FAILED = "generation_failed"
SUBMISSION_FAILED = "submission_failed"
RENDER_FAILED = "render_failed"


class ProductServiceError(RuntimeError):
    """Base error; ``str(err)`` is the message shown to the user."""

    kind = "error"


class ValidationError(ProductServiceError):
    """Raised when a required field is missing at a transition guard."""

    kind = VALIDATION

    def __init__(self, message: str, unanswered: list[str] | None = None):
        super().__init__(message)
        self.unanswered = list(unanswered or [])


class UpstreamCallError(ProductServiceError):
    """Raised when the generate/submit/list call fails or returns a non-success envelope."""

    def __init__(self, message: str, kind: str = SUBMISSION_FAILED, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class RenderError(ProductServiceError):
    """Raised when PDF report generation fails."""

    kind = RENDER_FAILED
