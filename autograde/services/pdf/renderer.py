import asyncio
import logging
from pathlib import Path
from typing import List, Union

import fitz  # PyMuPDF
from pdf2image import convert_from_path

from autograde.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

PAGE_PREFIX = "page"


def page_filename(index: int, page_count: int) -> str:
    """페이지 번호(1부터)로 결정적인 파일명 생성 - 사전순 == 페이지순"""
    width = len(str(page_count))
    return f"{PAGE_PREFIX}-{index:0{width}d}.png"


class PageRenderer:
    """PDF 각 페이지를 PNG 파일로 변환"""

    name = "base"

    def __init__(self, dpi: int = 300):
        self.dpi = dpi

    async def render(self, pdf_path: Union[str, Path], output_dir: Union[str, Path]) -> List[Path]:
        pdf_path = Path(pdf_path)
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        try:
            pages = await asyncio.to_thread(self._render_pages, pdf_path, output_dir)
        except Exception as e:
            logger.error(f"PDF rendering failed ({self.name}) for {pdf_path}: {e}")
            raise ExtractionError(f"Failed to render PDF: {e}") from e

        if not pages:
            raise ExtractionError(f"PDF has no pages: {pdf_path.name}")

        logger.info(f"Rendered {len(pages)} page(s) from {pdf_path.name} with {self.name}")
        return pages

    def _render_pages(self, pdf_path: Path, output_dir: Path) -> List[Path]:
        raise NotImplementedError


class PyMuPDFRenderer(PageRenderer):
    """내장 라이브러리(PyMuPDF)로 페이지 래스터화"""

    name = "pymupdf"

    def _render_pages(self, pdf_path: Path, output_dir: Path) -> List[Path]:
        # 확장자로 형식을 추측하지 않도록 PDF 로만 연다 (txt/png 등은 거부)
        doc = fitz.open(str(pdf_path), filetype="pdf")
        try:
            if not doc.is_pdf:
                raise ValueError(f"Not a PDF document: {pdf_path.name}")
            zoom = self.dpi / 72.0
            matrix = fitz.Matrix(zoom, zoom)
            pages = []
            for index, page in enumerate(doc, start=1):
                pix = page.get_pixmap(matrix=matrix, alpha=False)
                out_path = output_dir / page_filename(index, doc.page_count)
                pix.save(out_path.as_posix())
                pages.append(out_path)
            return pages
        finally:
            doc.close()


class PopplerRenderer(PageRenderer):
    """외부 도구(poppler pdftoppm)로 페이지 래스터화"""

    name = "poppler"

    def _render_pages(self, pdf_path: Path, output_dir: Path) -> List[Path]:
        images = convert_from_path(str(pdf_path), dpi=self.dpi, fmt="png")
        pages = []
        for index, image in enumerate(images, start=1):
            out_path = output_dir / page_filename(index, len(images))
            image.save(out_path, "PNG")
            pages.append(out_path)
        return pages


RENDERERS = {
    PyMuPDFRenderer.name: PyMuPDFRenderer,
    PopplerRenderer.name: PopplerRenderer,
}


def get_renderer(name: str, dpi: int = 300) -> PageRenderer:
    try:
        renderer_cls = RENDERERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown PDF renderer: {name} (choose from {', '.join(RENDERERS)})")
    return renderer_cls(dpi=dpi)
