from __future__ import annotations

import logging
import re
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PDF_SUFFIXES = {".pdf"}
IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png"}
TEXT_SUFFIXES = {".txt", ".md"}

_PDF_MAGIC = b"%PDF"
_JPEG_MAGIC = b"\xff\xd8\xff"
_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"

# Words OCR'd below this confidence count as "low confidence".
OCR_CONFIDENCE_CUTOFF = 60


class ExtractionError(ValueError):
    """Raised when a file cannot be turned into text. The message is user-facing."""


@dataclass
class TextStats:
    characters: int
    characters_no_spaces: int
    words: int
    lines: int
    paragraphs: int


@dataclass
class OcrMetadata:
    confidence: int
    mean_confidence: int
    word_count: int
    recognized_words: int
    low_confidence_words: int


@dataclass
class ExtractionResult:
    text: str
    content_type: str  # pdf | image | unknown
    stats: TextStats
    pages: Optional[int] = None
    ocr: Optional[OcrMetadata] = None

    def to_dict(self) -> Dict:
        return asdict(self)


# ----------------- cleanup + stats -----------------
def clean_pdf_text(text: str) -> str:
    text = re.sub(r"\n\s*\n\s*\n", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    text = text.replace("\n ", "\n")
    return text.strip()

def clean_ocr_text(text: str) -> str:
    text = re.sub(r"\s+", " ", text.strip())
    text = re.sub(r"[^\x20-\x7E\n\r\t]", "", text)
    return text.strip()

def text_stats(text: str) -> TextStats:
    return TextStats(
        characters=len(text),
        characters_no_spaces=len(re.sub(r"\s", "", text)),
        words=len(text.split()),
        lines=len(text.split("\n")),
        paragraphs=len([p for p in re.split(r"\n\s*\n", text) if p.strip()]),
    )


# ----------------- magic numbers -----------------
def _head(path: Path, n: int) -> bytes:
    with open(path, "rb") as f:
        return f.read(n)

def is_valid_pdf(file_path: str) -> bool:
    try:
        return _head(Path(file_path), 4) == _PDF_MAGIC
    except OSError:
        return False

def is_valid_image(file_path: str) -> bool:
    try:
        head = _head(Path(file_path), 8)
    except OSError:
        return False
    return head.startswith(_JPEG_MAGIC) or head == _PNG_MAGIC


# ----------------- extractors -----------------
def extract_pdf(path: Path) -> ExtractionResult:
    import pdfplumber

    if not is_valid_pdf(str(path)):
        raise ExtractionError("Invalid PDF file. The file may be corrupted or password-protected.")

    texts = []
    try:
        with pdfplumber.open(str(path)) as pdf:
            n_pages = len(pdf.pages)
            for page in pdf.pages:
                t = page.extract_text() or ""
                if t.strip():
                    texts.append(t)
    except Exception as e:
        logger.exception("PDF extraction failed for %s", path.name)
        raise ExtractionError(f"PDF processing failed: {e}") from e

    text = clean_pdf_text("\n\n".join(texts))
    stats = text_stats(text)
    logger.info("PDF processed: %d pages, %d words, %d paragraphs", n_pages, stats.words, stats.paragraphs)
    return ExtractionResult(text=text, content_type="pdf", stats=stats, pages=n_pages)

def _ocr_metadata(data: Dict) -> OcrMetadata:
    # image_to_data reports -1 for layout rows that are not words
    confs = []
    for word, conf in zip(data.get("text", []), data.get("conf", [])):
        c = float(conf)
        if c >= 0 and str(word).strip():
            confs.append(c)
    mean = int(round(sum(confs) / len(confs))) if confs else 0
    return OcrMetadata(
        confidence=mean,
        mean_confidence=mean,
        word_count=len(confs),
        recognized_words=sum(1 for c in confs if c > OCR_CONFIDENCE_CUTOFF),
        low_confidence_words=sum(1 for c in confs if c < OCR_CONFIDENCE_CUTOFF),
    )

def extract_image(path: Path, lang: str = "eng") -> ExtractionResult:
    import pytesseract
    from PIL import Image

    if not is_valid_image(str(path)):
        raise ExtractionError(
            "Invalid image file. Please ensure the image is not corrupted and is in JPG or PNG format."
        )

    try:
        with Image.open(path) as img:
            raw = pytesseract.image_to_string(img, lang=lang)
            data = pytesseract.image_to_data(img, lang=lang, output_type=pytesseract.Output.DICT)
    except Exception as e:
        logger.exception("OCR failed for %s", path.name)
        raise ExtractionError(f"OCR processing failed: {e}") from e

    text = clean_ocr_text(raw)
    ocr = _ocr_metadata(data)
    stats = text_stats(text)
    logger.info("OCR completed: %d words, %d%% confidence", stats.words, ocr.confidence)
    return ExtractionResult(text=text, content_type="image", stats=stats, ocr=ocr)

def extract_text(file_path: str) -> ExtractionResult:
    """
    Returns the extracted text plus stats and source metadata.
    Supports: .pdf, .jpg/.jpeg/.png (OCR), .txt/.md
    """
    p = Path(file_path)
    suf = p.suffix.lower()

    if not p.exists():
        kind = "Image" if suf in IMAGE_SUFFIXES else "PDF" if suf in PDF_SUFFIXES else "Text"
        raise ExtractionError(f"{kind} file not found. Please try uploading again.")

    if suf in PDF_SUFFIXES:
        return extract_pdf(p)

    if suf in IMAGE_SUFFIXES:
        return extract_image(p)

    if suf in TEXT_SUFFIXES:
        text = p.read_text(encoding="utf-8", errors="ignore").strip()
        return ExtractionResult(text=text, content_type="unknown", stats=text_stats(text))

    raise ExtractionError(f"Unsupported file type: {suf}. Please upload PDF, JPG or PNG.")
