import asyncio
import logging
import time
from pathlib import Path
from typing import List, Sequence, Union

import pytesseract
from PIL import Image

from autograde.core.exceptions import ExtractionError
from autograde.services.analysis.image_preprocessor import ImagePreprocessor
from autograde.services.pdf.renderer import PageRenderer

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"

class TextExtractor:
    """페이지 이미지 OCR 및 전체 문서 텍스트 생성"""

    def __init__(
        self,
        renderer: PageRenderer,
        preprocessor: ImagePreprocessor,
        lang: str = "eng"
    ):
        self.renderer = renderer
        self.preprocessor = preprocessor
        self.lang = lang

    async def recognize(self, image_path: Union[str, Path]) -> str:
        """이미지 한 장 OCR"""
        return await asyncio.to_thread(self._image_to_string, Path(image_path))

    def _image_to_string(self, image_path: Path) -> str:
        with Image.open(image_path) as img:
            text = pytesseract.image_to_string(img, lang=self.lang)
        return text or ""

    async def extract_text(self, image_paths: Sequence[Union[str, Path]]) -> str:
        """
        페이지 순서대로 전처리 -> OCR 수행 후 "<파일명>: <텍스트>" 형식으로 합칩니다.
        한 페이지라도 OCR 오류가 나면 전체 추출을 중단합니다.
        """
        extracted_texts: List[str] = []
        for image_path in image_paths:
            image_path = Path(image_path)
            try:
                await self.preprocessor.preprocess(image_path)
                logger.info(f"Processing {image_path.name}...")
                text = await self.recognize(image_path)
            except Exception as e:
                logger.error(f"OCR failed on {image_path.name}: {e}")
                raise ExtractionError(f"OCR failed on {image_path.name}: {e}") from e
            extracted_texts.append(f"{image_path.name}: {text}")

        return PAGE_SEPARATOR.join(extracted_texts)

    async def extract_from_pdf(self, pdf_path: Union[str, Path], scratch_dir: Union[str, Path]) -> str:
        start_time = time.time()
        pages = await self.renderer.render(pdf_path, scratch_dir)
        full_text = await self.extract_text(pages)
        logger.info(f"텍스트 추출 완료: {len(pages)} pages, {time.time() - start_time:.2f}초 소요")
        return full_text
