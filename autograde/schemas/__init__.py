from .base import MessageResponse, ErrorResponse
from .submission import Submission, UploadResponse, CommentUpdateRequest

__all__ = [
    'MessageResponse',
    'ErrorResponse',
    'Submission',
    'UploadResponse',
    'CommentUpdateRequest'
]
