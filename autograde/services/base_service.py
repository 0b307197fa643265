from openai import AsyncOpenAI
import logging
from autograde.core.config import Settings

logger = logging.getLogger(__name__)

class BaseService:
    def __init__(self, settings: Settings):
        self.settings = settings
        if not self.settings.OPENAI_API_KEY:
            logger.error("OPENAI_API_KEY not found in settings")
            raise ValueError("OPENAI_API_KEY not found in settings")

        try:
            # 재시도 없음: 실패는 바로 요청 단위 오류로 전달
            self.client = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                max_retries=0,
            )
        except Exception as e:
            logger.error(f"Failed to initialize BaseService: {e}")
            raise
