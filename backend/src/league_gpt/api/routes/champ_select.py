"""REST endpoints for champion select status and manual queries."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from league_gpt.services.ready_check_automator import ReadyCheckAutomator
from league_gpt.services.session_controller import PollOutcome, SessionLifecycleController

router = APIRouter(prefix="/api", tags=["champ-select"])


class ManualQueryResponse(BaseModel):
    """Result of a manual recommendation request."""

    outcome: str
    sequence_counter: int
    session_handle: str | None


class ReadyCheckStatusResponse(BaseModel):
    """Ready check automator status."""

    enabled: bool
    status: str | None = None
    pending_since: float | None = None
    last_result: bool | None = None


def _get_controller(request: Request) -> SessionLifecycleController:
    assistant = getattr(request.app.state, "assistant", None)
    if assistant is None or assistant.controller is None:
        raise HTTPException(status_code=503, detail="Assistant not running")
    return assistant.controller


@router.get("/champ-select/state")
def get_champ_select_state(request: Request):
    """Current champion select lifecycle state and last normalized view."""
    return _get_controller(request).status()


@router.post("/champ-select/recommend", response_model=ManualQueryResponse)
async def request_recommendation(request: Request):
    """Manually request a recommendation for the current champion select.

    Bypasses duplicate suppression but not the one-request-at-a-time rule:
    while a recommendation is running the request is dropped.
    """
    controller = _get_controller(request)
    outcome = await controller.request_manual()
    if outcome == PollOutcome.NO_SESSION:
        raise HTTPException(status_code=409, detail="No active champion select session")
    return ManualQueryResponse(
        outcome=outcome.value,
        sequence_counter=controller.state.sequence_counter,
        session_handle=controller.state.session_handle,
    )


@router.get("/ready-check/state", response_model=ReadyCheckStatusResponse)
def get_ready_check_state(request: Request):
    """Ready check automator status."""
    assistant = getattr(request.app.state, "assistant", None)
    automator: ReadyCheckAutomator | None = getattr(assistant, "automator", None)
    if automator is None:
        return ReadyCheckStatusResponse(enabled=False)
    return ReadyCheckStatusResponse(
        enabled=True,
        status=automator.status.value,
        pending_since=automator.pending_since,
        last_result=automator.last_result,
    )
