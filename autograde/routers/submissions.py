from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Any, Dict, List
import logging

from autograde.dependencies import get_submission_store
from autograde.schemas.base import MessageResponse
from autograde.schemas.submission import CommentUpdateRequest
from autograde.services.submission.submission_store import SubmissionStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["submissions"])

@router.get(
    "/submissions",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": MessageResponse}}
)
async def list_submissions(store: SubmissionStore = Depends(get_submission_store)):
    """전체 제출물 목록 (업로드 순)"""
    try:
        return await store.list_all()
    except Exception as e:
        logger.error(f"Submissions Fetch Error: {e}")
        return JSONResponse(status_code=500, content={"message": "Error fetching submissions"})

@router.post(
    "/update-comment",
    response_model=MessageResponse,
    responses={500: {"model": MessageResponse}}
)
async def update_comment(
    request: CommentUpdateRequest,
    store: SubmissionStore = Depends(get_submission_store)
):
    """교사 코멘트 수정. 없는 id 여도 성공 응답 (저장소는 변경되지 않음)"""
    try:
        await store.update_comment(request.id, request.teacher_comments)
        return MessageResponse(message="Comment Updated Successfully")
    except Exception as e:
        logger.error(f"Update Comment Error: {e}")
        return JSONResponse(status_code=500, content={"message": "Error updating comment"})
