from fastapi import Request

from ..engines.submissions.store import SubmissionStore


def get_store(request: Request) -> SubmissionStore:
    return request.app.state.store
