import io
import logging
import re
from dataclasses import dataclass

import pdfplumber

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPES = frozenset({"application/pdf"})
MIN_TEXT_LENGTH = 10

# Mojibake left behind by UTF-8 text decoded as cp1252
_ENCODING_FIXES = (
    ("â€™", "'"),
    ("â€œ", '"'),
    ("â€\x9d", '"'),
    ("â€“", "-"),
    ("â€”", "-"),
)

_NON_TEXT_RE = re.compile(r"[^\x20-\x7E\u00A0-\u024F\u1E00-\u1EFF]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


class PDFExtractionError(Exception):
    def __init__(self, error: str, status_code: int = 400, details: str | None = None):
        super().__init__(error)
        self.error = error
        self.status_code = status_code
        self.details = details


@dataclass
class PDFExtraction:
    text: str
    original_length: int
    sanitized_length: int
    page_count: int
    file_size: int
    file_name: str


def validate_pdf_upload(
    file_name: str | None,
    content_type: str | None,
    content: bytes,
    max_bytes: int,
) -> None:
    """Check an uploaded CV before parsing. Raises PDFExtractionError."""
    if len(content) > max_bytes:
        raise PDFExtractionError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"
        )
    if not content:
        raise PDFExtractionError("File is empty")
    if content_type not in PDF_CONTENT_TYPES:
        raise PDFExtractionError("Invalid file type. Only PDF files are supported")
    if not file_name or not file_name.lower().endswith(".pdf"):
        raise PDFExtractionError("Invalid file extension. Only .pdf files are supported")
    if b"%PDF" not in content[:4]:
        raise PDFExtractionError("File does not appear to be a valid PDF")


def sanitize_text(text: str) -> str:
    """Normalize extracted PDF text to a single clean line."""
    if not text:
        return ""
    for bad, good in _ENCODING_FIXES:
        text = text.replace(bad, good)
    text = re.sub(r"\s", " ", text)
    text = _NON_TEXT_RE.sub("", text)
    text = _CONTROL_RE.sub("", text)
    return re.sub(r"\s+", " ", text).strip()


def extract_pages(pdf_bytes: bytes) -> list[str]:
    """Extract the text of every page of a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    return "\n".join(extract_pages(pdf_bytes)).strip()


def _classify_parse_error(e: Exception) -> PDFExtractionError:
    message = str(e) or type(e).__name__
    lowered = message.lower()
    if "password" in lowered:
        return PDFExtractionError("Password-protected PDFs are not supported", 400, message)
    if "encrypt" in lowered:
        return PDFExtractionError("Encrypted PDFs are not supported", 400, message)
    if "invalid pdf" in lowered or "no /root object" in lowered:
        return PDFExtractionError("Invalid or corrupted PDF file", 400, message)
    return PDFExtractionError("Failed to parse PDF", 500, message)


def extract_cv(
    content: bytes,
    file_name: str | None,
    content_type: str | None,
    max_bytes: int,
) -> PDFExtraction:
    """Validate, extract and sanitize an uploaded CV."""
    validate_pdf_upload(file_name, content_type, content, max_bytes)

    try:
        pages = extract_pages(content)
    except Exception as e:
        logger.error("PDF parsing error: %s", e)
        raise _classify_parse_error(e) from e

    raw_text = " ".join(pages)
    text = sanitize_text(raw_text)
    if len(text) < MIN_TEXT_LENGTH:
        raise PDFExtractionError(
            "PDF appears to contain no readable text or only images. "
            "Please ensure your CV contains selectable text."
        )

    return PDFExtraction(
        text=text,
        original_length=len(raw_text),
        sanitized_length=len(text),
        page_count=len(pages) or 1,
        file_size=len(content),
        file_name=file_name or "",
    )
