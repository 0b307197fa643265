from .upload import router as upload_router
from .submissions import router as submissions_router

__all__ = [
    'upload_router',
    'submissions_router'
]
