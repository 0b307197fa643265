import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import aiofiles
import aiofiles.os

from autograde.core.exceptions import StoreError
from autograde.schemas.submission import Submission

logger = logging.getLogger(__name__)

class SubmissionStore:
    """
    단일 JSON 파일에 제출물 목록을 저장합니다.

    모든 읽기-수정-쓰기는 하나의 asyncio.Lock 으로 직렬화되고,
    쓰기는 임시 파일 작성 후 os.replace 로 교체되므로 파일은 항상
    파싱 가능한 JSON 배열 상태로 남습니다.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def _load(self) -> List[Dict[str, Any]]:
        try:
            if not await aiofiles.os.path.exists(self.path):
                return []
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            logger.error(f"Failed to read submissions file {self.path}: {e}")
            raise StoreError(f"Failed to read submissions file: {e}") from e

        if not content.strip():
            return []

        try:
            submissions = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in submissions file {self.path}: {e}")
            raise StoreError(f"Invalid submissions file: {e}") from e

        if not isinstance(submissions, list):
            raise StoreError("Invalid submissions file: expected a JSON array")
        return submissions

    async def _save(self, submissions: List[Dict[str, Any]]) -> None:
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(submissions, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(temp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write submissions file {self.path}: {e}")
            raise StoreError(f"Failed to write submissions file: {e}") from e

    async def append(self, submission: Submission) -> Submission:
        """레코드 추가. 같은 밀리초에 생성된 id 는 기존 최댓값 + 1 로 밀어 고유성 유지"""
        async with self._lock:
            submissions = await self._load()
            existing_ids = {item.get("id") for item in submissions}
            if submission.id in existing_ids:
                new_id = max((i for i in existing_ids if isinstance(i, int)), default=submission.id) + 1
                logger.warning(f"Duplicate submission id {submission.id}, using {new_id}")
                submission = submission.model_copy(update={"id": new_id})
            submissions.append(submission.model_dump(by_alias=True))
            await self._save(submissions)
            logger.info(f"Submission saved - ID: {submission.id}, total: {len(submissions)}")
            return submission

    async def list_all(self) -> List[Dict[str, Any]]:
        """저장된 배열을 그대로 반환 (레코드를 재검증하거나 필드를 추가/삭제하지 않음)"""
        async with self._lock:
            return await self._load()

    async def update_comment(self, submission_id: int, comments: str) -> bool:
        """
        id 가 일치하는 첫 레코드의 teacherComments 만 교체합니다.
        일치하는 레코드가 없으면 파일을 건드리지 않고 False 를 반환합니다.
        """
        async with self._lock:
            submissions = await self._load()
            for submission in submissions:
                if submission.get("id") == submission_id:
                    submission["teacherComments"] = comments
                    await self._save(submissions)
                    logger.info(f"Comment updated - ID: {submission_id}")
                    return True

        logger.warning(f"No submission found for comment update - ID: {submission_id}")
        return False
