from pydantic import BaseModel, ConfigDict, Field, StrictInt
from typing import Optional
from .base import MessageResponse

class Submission(BaseModel):
    """채점된 업로드 한 건 (submissions.json 의 레코드)"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    filename: str
    feedback: str
    teacher_comments: str = Field("", alias="teacherComments")
    grade: Optional[int] = None  # feedback 에서 파싱한 1-5 점수

class UploadResponse(MessageResponse):
    feedback: str

class CommentUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # "123" 같은 문자열 id 를 정수로 바꿔 매칭하지 않음
    id: StrictInt
    teacher_comments: str = Field(..., alias="teacherComments")
