from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import JSONResponse
from typing import Optional
import logging
import time

from autograde.core.config import settings
from autograde.dependencies import get_feedback_service, get_submission_store, get_text_extractor
from autograde.schemas.base import ErrorResponse, MessageResponse
from autograde.schemas.submission import Submission, UploadResponse
from autograde.services.analysis.ocr_service import TextExtractor
from autograde.services.feedback.feedback_service import FeedbackService
from autograde.services.feedback.feedback_utils import parse_grade
from autograde.services.submission.submission_store import SubmissionStore
from autograde.utils.file_utils import remove_file_quietly, save_uploaded_file, scratch_directory

logger = logging.getLogger(__name__)
router = APIRouter(tags=["upload"])

@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": ErrorResponse}}
)
async def upload_submission(
    file: Optional[UploadFile] = File(None),
    text_extractor: TextExtractor = Depends(get_text_extractor),
    feedback_service: FeedbackService = Depends(get_feedback_service),
    store: SubmissionStore = Depends(get_submission_store)
):
    """PDF 업로드 -> 페이지 렌더링 -> OCR -> AI 피드백 -> 저장"""
    if file is None:
        return JSONResponse(status_code=400, content={"message": "No file uploaded"})

    upload_path = None
    try:
        logger.info(f"=== 제출 처리 시작: {file.filename} ===")
        upload_path = await save_uploaded_file(file, settings.UPLOAD_DIR)

        async with scratch_directory(settings.OUTPUT_DIR) as scratch_dir:
            extracted_text = await text_extractor.extract_from_pdf(upload_path, scratch_dir)

        if not extracted_text:
            return JSONResponse(
                status_code=500,
                content={"message": "Failed to extract text from PDF"}
            )

        feedback = await feedback_service.generate_feedback(extracted_text)

        submission = Submission(
            id=int(time.time() * 1000),
            filename=upload_path.name,
            feedback=feedback,
            teacher_comments="",
            grade=parse_grade(feedback)
        )
        await store.append(submission)

        return UploadResponse(message="File Uploaded Successfully", feedback=feedback)

    except Exception as e:
        logger.error(f"제출 처리 중 오류 발생: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message="Server Error", error=str(e)).model_dump()
        )
    finally:
        await remove_file_quietly(upload_path)
