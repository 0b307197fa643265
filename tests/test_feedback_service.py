import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from autograde.core.config import settings
from autograde.core.exceptions import FeedbackError
from autograde.services.feedback.feedback_service import FEEDBACK_PROMPT, FeedbackService
from autograde.services.feedback.feedback_utils import parse_grade


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def service():
    service = FeedbackService(settings)
    service.client = MagicMock()
    service.client.chat.completions.create = AsyncMock(return_value=completion("Well argued. Grade: 4/5"))
    return service


async def test_generate_feedback_returns_raw_text(service):
    feedback = await service.generate_feedback("page-1.png: my essay")

    assert feedback == "Well argued. Grade: 4/5"
    service.client.chat.completions.create.assert_awaited_once()
    kwargs = service.client.chat.completions.create.await_args.kwargs
    assert kwargs["model"] == settings.OPENAI_MODEL
    assert kwargs["messages"] == [
        {"role": "user", "content": FEEDBACK_PROMPT + "page-1.png: my essay"}
    ]


async def test_api_error_becomes_feedback_error(service):
    service.client.chat.completions.create = AsyncMock(side_effect=RuntimeError("quota exceeded"))

    with pytest.raises(FeedbackError, match="Error generating feedback"):
        await service.generate_feedback("text")
    service.client.chat.completions.create.assert_awaited_once()


async def test_empty_completion_is_an_error(service):
    service.client.chat.completions.create = AsyncMock(return_value=completion(""))

    with pytest.raises(FeedbackError):
        await service.generate_feedback("text")


async def test_optional_timeout_bounds_the_call(service):
    async def slow(**kwargs):
        await asyncio.sleep(5)
        return completion("too late")

    service.client.chat.completions.create = slow
    service.timeout = 0.05

    with pytest.raises(FeedbackError):
        await service.generate_feedback("text")


def test_client_does_not_retry():
    assert FeedbackService(settings).client.max_retries == 0


@pytest.mark.parametrize("feedback, grade", [
    ("Good structure.\n\nGrade: 4/5", 4),
    ("**Grade:** 3 / 5", 3),
    ("I would give this 2 out of 5.", 2),
    ("Overall: 5/5, excellent", 5),
    ("Grade: 4", 4),
    ("Final grade is 3.5/5", 4),
    ("Question 7/10 was skipped. Grade: 2/5", 2),
    ("No grade given here.", None),
    ("Grade: 9/5", None),
    ("", None),
    (None, None),
])
def test_parse_grade(feedback, grade):
    assert parse_grade(feedback) == grade
