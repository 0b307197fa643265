from pydantic import BaseModel
from typing import Optional

class MessageResponse(BaseModel):
    """기본 응답 스키마"""
    message: str

class ErrorResponse(MessageResponse):
    """파이프라인 오류 응답"""
    error: Optional[str] = None
