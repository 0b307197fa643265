import logging
import time

from async_timeout import timeout

from autograde.core.config import Settings
from autograde.core.exceptions import FeedbackError
from autograde.services.base_service import BaseService

logger = logging.getLogger(__name__)

FEEDBACK_PROMPT = (
    "Assume you are a teacher. Review this text and provide feedback and a grade (1-5):\n\n"
)

class FeedbackService(BaseService):
    def __init__(self, settings: Settings):
        super().__init__(settings)
        self.model = settings.OPENAI_MODEL
        self.timeout = settings.FEEDBACK_TIMEOUT
        logger.info(f"Initializing Feedback Service (model={self.model})...")

    async def generate_feedback(self, text: str) -> str:
        """추출된 텍스트에 대한 피드백과 점수(1-5)를 자유 텍스트로 반환"""
        try:
            start_time = time.time()
            async with timeout(self.timeout):
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {
                            "role": "user",
                            "content": FEEDBACK_PROMPT + text
                        }
                    ]
                )
            content = response.choices[0].message.content
            if not content:
                raise ValueError("Empty response from model")

            logger.info(f"피드백 생성 완료: {time.time() - start_time:.2f}초 소요")
            return content

        except Exception as e:
            logger.error(f"AI Error: {e}")
            raise FeedbackError("Error generating feedback") from e
