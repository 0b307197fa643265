from pathlib import Path
from fastapi import UploadFile
from contextlib import asynccontextmanager
from typing import AsyncIterator, Union
import aiofiles
import asyncio
import shutil
import time
import uuid
import logging
import os

logger = logging.getLogger(__name__)

async def save_uploaded_file(file: UploadFile, upload_dir: Path) -> Path:
    """업로드 파일을 <epoch ms>_<uuid 8자리><확장자> 이름으로 저장"""
    try:
        timestamp = int(time.time() * 1000)
        unique_id = uuid.uuid4().hex[:8]
        file_extension = os.path.splitext(file.filename or "")[1].lower()
        file_path = Path(upload_dir) / f"{timestamp}_{unique_id}{file_extension}"

        file_path.parent.mkdir(parents=True, exist_ok=True)

        content = await file.read()
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)

        logger.info(f"File saved: {file_path}")
        return file_path

    except Exception as e:
        logger.error(f"파일 저장 중 오류: {str(e)}")
        raise

async def remove_file_quietly(file_path: Union[str, Path, None]) -> None:
    """파일 삭제. 실패는 로그만 남김"""
    if not file_path:
        return
    try:
        os.remove(file_path)
        logger.info(f"File deleted: {file_path}")
    except FileNotFoundError:
        logger.warning(f"File not found: {file_path}")
    except OSError as e:
        logger.error(f"File Cleanup Error: {e}")

@asynccontextmanager
async def scratch_directory(base_dir: Union[str, Path]) -> AsyncIterator[Path]:
    """요청별 고유 스크래치 디렉토리. 종료 시 결과와 관계없이 삭제"""
    path = Path(base_dir) / uuid.uuid4().hex
    path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        try:
            await asyncio.to_thread(shutil.rmtree, path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Cleanup Error: {e}")
