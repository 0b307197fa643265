from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache
from pathlib import Path

# 기본 디렉토리 설정
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # 기본 경로 설정
    BASE_DIR: Path = BASE_DIR
    UPLOAD_DIR: Path = BASE_DIR / "uploads"
    OUTPUT_DIR: Path = BASE_DIR / "output"
    SUBMISSIONS_FILE: Path = BASE_DIR / "submissions.json"

    # OpenAI 설정
    OPENAI_API_KEY: str
    OPENAI_MODEL: str = "gpt-4o"
    FEEDBACK_TIMEOUT: Optional[float] = None

    # OCR / PDF 설정
    OCR_LANG: str = "eng"
    PDF_RENDERER: str = "pymupdf"
    RENDER_DPI: int = 300
    CONTRAST_MULTIPLIER: float = 1.5

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False

@lru_cache()
def get_settings():
    settings = Settings()
    # 업로드 / 스크래치 디렉토리 생성
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    return settings

settings = get_settings()
