import os
import tempfile

# settings 는 import 시점에 생성되므로 앱 import 전에 환경 변수 설정
_TEST_ROOT = tempfile.mkdtemp(prefix="autograde-tests-")
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["OUTPUT_DIR"] = os.path.join(_TEST_ROOT, "output")
os.environ["SUBMISSIONS_FILE"] = os.path.join(_TEST_ROOT, "submissions.json")

from pathlib import Path
from typing import List

import fitz
import pytest
from PIL import Image, ImageDraw

from autograde.services.submission.submission_store import SubmissionStore


def make_pdf(path: Path, page_count: int) -> Path:
    doc = fitz.open()
    for index in range(1, page_count + 1):
        page = doc.new_page(width=300, height=200)
        page.insert_text((40, 80), f"Answer on page {index}", fontsize=14)
    doc.save(str(path))
    doc.close()
    return path


def make_image(path: Path, mode: str = "RGB") -> Path:
    img = Image.new(mode, (120, 60), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((10, 10, 60, 40), fill=(90, 90, 90) if mode == "RGB" else 90)
    img.save(path, "PNG")
    return path


@pytest.fixture
def store(tmp_path) -> SubmissionStore:
    return SubmissionStore(tmp_path / "submissions.json")


@pytest.fixture
def pdf_factory(tmp_path):
    def _make(page_count: int, name: str = "quiz.pdf") -> Path:
        return make_pdf(tmp_path / name, page_count)
    return _make


@pytest.fixture
def fake_tesseract(monkeypatch):
    """pytesseract.image_to_string 대체: 호출 언어를 기록하고 호출 순번 텍스트 반환"""
    calls: List[str] = []

    def _image_to_string(img, lang="eng", **kwargs):
        calls.append(lang)
        return f"text {len(calls)}"

    monkeypatch.setattr("pytesseract.image_to_string", _image_to_string)
    return calls
