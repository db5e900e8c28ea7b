"""Session log routes: full upserts, quick complete/skip and undo."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...db.repositories import SessionLogRepository
from ...exceptions import SessionLogNotFoundError
from ...models.records import SessionLog
from ..deps import get_session_log_repository
from ..schemas import QuickCompleteRequest, SessionLogRequest, SkipRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_session_logs(
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> List[Dict[str, Any]]:
    return [log.to_dict() for log in repo.list_all()]


@router.get("/week/{week_number}")
async def list_week_logs(
    week_number: int,
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> List[Dict[str, Any]]:
    return [log.to_dict() for log in repo.list_by_week(week_number)]


@router.get("/{session_id}/{week_number}")
async def get_session_log(
    session_id: str,
    week_number: int,
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> Dict[str, Any]:
    log = repo.get(session_id, week_number)
    if log is None:
        raise SessionLogNotFoundError(session_id, week_number)
    return log.to_dict()


@router.post("")
async def upsert_session_log(
    request: SessionLogRequest,
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> Dict[str, Any]:
    """Create or fully replace the log for a session."""
    log = repo.upsert(SessionLog.from_dict(request.model_dump()))
    return log.to_dict()


@router.patch("/{session_id}/{week_number}/complete")
async def complete_session(
    session_id: str,
    week_number: int,
    request: QuickCompleteRequest,
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> Dict[str, Any]:
    """Quick complete (or un-complete) a session, keeping prior values."""
    updates = request.model_dump(exclude={"completed"})
    log = repo.mark_complete(session_id, week_number, completed=request.completed, **updates)
    return log.to_dict()


@router.patch("/{session_id}/{week_number}/skip")
async def skip_session(
    session_id: str,
    week_number: int,
    request: SkipRequest,
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> Dict[str, Any]:
    updates = request.model_dump(exclude={"reason"})
    log = repo.mark_skipped(session_id, week_number, reason=request.reason, **updates)
    return log.to_dict()


@router.delete("/{session_id}/{week_number}")
async def delete_session_log(
    session_id: str,
    week_number: int,
    repo: SessionLogRepository = Depends(get_session_log_repository),
) -> Dict[str, bool]:
    """Undo: remove the log so the session shows as planned again."""
    return {"success": repo.delete(session_id, week_number)}
