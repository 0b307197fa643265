import asyncio
import logging
import os
from pathlib import Path
from typing import Union

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

class ImagePreprocessor:
    """OCR 정확도를 위한 이미지 정규화 (흑백, 대비 증가, 명암 정규화)"""

    def __init__(self, contrast_multiplier: float = 1.5):
        self.contrast_multiplier = contrast_multiplier

    async def preprocess(self, image_path: Union[str, Path]) -> Path:
        image_path = Path(image_path)
        temp_path = image_path.with_name(f"{image_path.name}.temp.png")
        try:
            await asyncio.to_thread(self._process, image_path, temp_path)
            # 다음 단계가 쓰다 만 이미지를 읽지 않도록 원자적으로 교체
            os.replace(temp_path, image_path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        return image_path

    def _process(self, source: Path, target: Path) -> None:
        with Image.open(source) as img:
            gray = ImageOps.grayscale(img)
        multiplier = self.contrast_multiplier
        stretched = gray.point(lambda p: min(255, int(p * multiplier)))
        normalized = ImageOps.autocontrast(stretched)
        normalized.save(target, "PNG")
