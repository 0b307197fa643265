import pytest

from autograde.core.exceptions import ExtractionError
from autograde.services.analysis.image_preprocessor import ImagePreprocessor
from autograde.services.analysis.ocr_service import PAGE_SEPARATOR, TextExtractor
from autograde.services.pdf.renderer import PyMuPDFRenderer
from tests.conftest import make_image


@pytest.fixture
def extractor():
    return TextExtractor(
        renderer=PyMuPDFRenderer(dpi=72),
        preprocessor=ImagePreprocessor(),
        lang="eng"
    )


async def test_extract_text_labels_pages_in_order(tmp_path, extractor, fake_tesseract):
    pages = [make_image(tmp_path / f"page-{i}.png") for i in (1, 2, 3)]

    text = await extractor.extract_text(pages)

    assert text.split(PAGE_SEPARATOR) == [
        "page-1.png: text 1",
        "page-2.png: text 2",
        "page-3.png: text 3",
    ]
    assert fake_tesseract == ["eng", "eng", "eng"]


async def test_pages_are_preprocessed_before_ocr(tmp_path, extractor, monkeypatch):
    from PIL import Image

    image_path = make_image(tmp_path / "page-1.png")
    seen_modes = []

    def fake_image_to_string(img, lang="eng", **kwargs):
        seen_modes.append(img.mode)
        return "hello"

    monkeypatch.setattr("pytesseract.image_to_string", fake_image_to_string)

    await extractor.extract_text([image_path])

    assert seen_modes == ["L"]
    with Image.open(image_path) as img:
        assert img.mode == "L"


async def test_empty_ocr_output_is_kept_as_empty_text(tmp_path, extractor, monkeypatch):
    pages = [make_image(tmp_path / f"page-{i}.png") for i in (1, 2)]
    outputs = iter(["first", None])
    monkeypatch.setattr("pytesseract.image_to_string", lambda img, lang="eng", **kw: next(outputs))

    text = await extractor.extract_text(pages)

    assert text == "page-1.png: first\n\npage-2.png: "


async def test_ocr_failure_aborts_whole_extraction(tmp_path, extractor, monkeypatch):
    pages = [make_image(tmp_path / f"page-{i}.png") for i in (1, 2, 3)]
    calls = []

    def flaky(img, lang="eng", **kwargs):
        calls.append(lang)
        if len(calls) == 2:
            raise RuntimeError("tesseract crashed")
        return "ok"

    monkeypatch.setattr("pytesseract.image_to_string", flaky)

    with pytest.raises(ExtractionError, match="page-2.png"):
        await extractor.extract_text(pages)
    assert len(calls) == 2


@pytest.mark.parametrize("page_count", [1, 4, 12])
async def test_extract_from_pdf_one_segment_per_page(tmp_path, pdf_factory, extractor, fake_tesseract, page_count):
    pdf_path = pdf_factory(page_count)

    text = await extractor.extract_from_pdf(pdf_path, tmp_path / "scratch")

    segments = text.split(PAGE_SEPARATOR)
    assert len(segments) == page_count
    width = len(str(page_count))
    assert [s.split(":")[0] for s in segments] == [
        f"page-{i:0{width}d}.png" for i in range(1, page_count + 1)
    ]


async def test_extract_from_invalid_pdf_raises(tmp_path, extractor, fake_tesseract):
    bad_pdf = tmp_path / "bad.pdf"
    bad_pdf.write_bytes(b"%PDF-garbage")

    with pytest.raises(ExtractionError):
        await extractor.extract_from_pdf(bad_pdf, tmp_path / "scratch")
    assert fake_tesseract == []
