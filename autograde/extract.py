import argparse
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from autograde.services.analysis.image_preprocessor import ImagePreprocessor
from autograde.services.analysis.ocr_service import TextExtractor
from autograde.services.pdf.renderer import RENDERERS, get_renderer
from autograde.utils.file_utils import scratch_directory

logger = logging.getLogger(__name__)


async def extract_pdf_text(
    pdf_path: str,
    renderer: str = "pymupdf",
    lang: str = "eng",
    output_dir: str = "./output"
) -> str:
    extractor = TextExtractor(
        renderer=get_renderer(renderer),
        preprocessor=ImagePreprocessor(),
        lang=lang
    )
    async with scratch_directory(output_dir) as scratch_dir:
        return await extractor.extract_from_pdf(Path(pdf_path), scratch_dir)


def main(argv=None):
    # 로깅 설정 / .env 로드는 스크립트로 실행될 때만
    logging.basicConfig(level=logging.INFO)
    load_dotenv()

    parser = argparse.ArgumentParser(description="Render a PDF, OCR every page and print the text")
    parser.add_argument("pdf_path")
    parser.add_argument("--renderer", default="pymupdf", choices=sorted(RENDERERS))
    parser.add_argument("--lang", default="eng")
    parser.add_argument("--output-dir", default="./output")
    args = parser.parse_args(argv)

    full_text = asyncio.run(
        extract_pdf_text(args.pdf_path, args.renderer, args.lang, args.output_dir)
    )
    logger.info(f"Extracted Text:\n{full_text}")
    return full_text


if __name__ == "__main__":
    main()
