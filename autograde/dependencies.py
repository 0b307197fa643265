import logging
from typing import Optional
from fastapi import FastAPI, Depends
from autograde.core.config import settings
from autograde.services.analysis.image_preprocessor import ImagePreprocessor
from autograde.services.analysis.ocr_service import TextExtractor
from autograde.services.feedback.feedback_service import FeedbackService
from autograde.services.pdf.renderer import get_renderer
from autograde.services.submission.submission_store import SubmissionStore

logger = logging.getLogger(__name__)

class Services:
    def __init__(self):
        self.submission_store: Optional[SubmissionStore] = None
        self.text_extractor: Optional[TextExtractor] = None
        self.feedback_service: Optional[FeedbackService] = None

services = Services()

async def init_services():
    """서비스 초기화"""
    try:
        logger.info("Initializing SubmissionStore...")
        services.submission_store = SubmissionStore(settings.SUBMISSIONS_FILE)

        logger.info(f"Initializing TextExtractor (renderer={settings.PDF_RENDERER}, lang={settings.OCR_LANG})...")
        services.text_extractor = TextExtractor(
            renderer=get_renderer(settings.PDF_RENDERER, dpi=settings.RENDER_DPI),
            preprocessor=ImagePreprocessor(settings.CONTRAST_MULTIPLIER),
            lang=settings.OCR_LANG
        )

        logger.info("Initializing FeedbackService...")
        services.feedback_service = FeedbackService(settings)
        logger.info("Services initialized successfully")

    except Exception as e:
        logger.error(f"Error initializing services: {e}")
        raise

async def get_services() -> Services:
    """서비스 인스턴스 반환"""
    return services

def get_submission_store(services: Services = Depends(get_services)) -> SubmissionStore:
    if services.submission_store is None:
        raise RuntimeError("Services not initialized")
    return services.submission_store

def get_text_extractor(services: Services = Depends(get_services)) -> TextExtractor:
    if services.text_extractor is None:
        raise RuntimeError("Services not initialized")
    return services.text_extractor

def get_feedback_service(services: Services = Depends(get_services)) -> FeedbackService:
    if services.feedback_service is None:
        raise RuntimeError("Services not initialized")
    return services.feedback_service

async def init_app(app: FastAPI):
    """앱 초기화"""
    try:
        await init_services()
    except Exception as e:
        logger.error(f"Service initialization failed: {str(e)}")
        raise
