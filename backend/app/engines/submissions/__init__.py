"""Submission store, product clients and the stepped submission workflow."""

from .clients import HttpProductClient, LocalProductClient, ProductClient
from .store import ProductDraft, Submission, SubmissionStore
from .workflow import SubmissionWorkflow, WorkflowStage

__all__ = [
    "HttpProductClient",
    "LocalProductClient",
    "ProductClient",
    "ProductDraft",
    "Submission",
    "SubmissionStore",
    "SubmissionWorkflow",
    "WorkflowStage",
]
