from unittest.mock import patch

import pytest

from services import pdf_parser
from services.pdf_parser import PDFExtractionError, extract_cv, sanitize_text, validate_pdf_upload

MAX_BYTES = 10 * 1024 * 1024
PDF_BYTES = b"%PDF-1.4\n% fake body\n"


def test_sanitize_text_flattens_lines():
    assert sanitize_text("John Doe\nSoftware Engineer\r\nPython") == "John Doe Software Engineer Python"


def test_sanitize_text_collapses_whitespace():
    assert sanitize_text("  Python    and\t\tDocker  ") == "Python and Docker"


def test_sanitize_text_keeps_tab_separated_words_apart():
    assert sanitize_text("Skills:\tPython\tDocker\fSQL") == "Skills: Python Docker SQL"


def test_sanitize_text_removes_emoji_and_control_chars():
    assert sanitize_text("Skills 🚀: Python\x00\x07 ✓ SQL") == "Skills : Python SQL"


def test_sanitize_text_keeps_latin_accents():
    assert sanitize_text("José Müller, Zürich") == "José Müller, Zürich"


def test_sanitize_text_fixes_mojibake_apostrophe():
    assert sanitize_text("Iâ€™m a developer") == "I'm a developer"


def test_sanitize_text_empty():
    assert sanitize_text("") == ""


def test_validate_rejects_empty_file():
    with pytest.raises(PDFExtractionError, match="empty"):
        validate_pdf_upload("cv.pdf", "application/pdf", b"", MAX_BYTES)


def test_validate_rejects_large_file():
    with pytest.raises(PDFExtractionError, match="too large"):
        validate_pdf_upload("cv.pdf", "application/pdf", b"%PDF" + b"0" * 100, 50)


def test_validate_rejects_wrong_content_type():
    with pytest.raises(PDFExtractionError, match="Invalid file type"):
        validate_pdf_upload("cv.txt", "text/plain", b"hello", MAX_BYTES)


def test_validate_rejects_wrong_extension():
    with pytest.raises(PDFExtractionError, match="extension"):
        validate_pdf_upload("cv.docx", "application/pdf", PDF_BYTES, MAX_BYTES)


def test_validate_rejects_missing_pdf_header():
    with pytest.raises(PDFExtractionError, match="valid PDF") as exc:
        validate_pdf_upload("cv.pdf", "application/pdf", b"not a pdf at all", MAX_BYTES)
    assert exc.value.status_code == 400


def test_validate_accepts_pdf():
    validate_pdf_upload("CV.PDF", "application/pdf", PDF_BYTES, MAX_BYTES)


def test_extract_cv_returns_text_and_metadata():
    pages = ["John Doe\nPython Developer", "Skills:\nPython, SQL"]
    with patch.object(pdf_parser, "extract_pages", return_value=pages):
        result = extract_cv(PDF_BYTES, "cv.pdf", "application/pdf", MAX_BYTES)

    assert result.text == "John Doe Python Developer Skills: Python, SQL"
    assert result.page_count == 2
    assert result.file_size == len(PDF_BYTES)
    assert result.file_name == "cv.pdf"
    assert result.original_length == len("John Doe\nPython Developer Skills:\nPython, SQL")
    assert result.sanitized_length == len(result.text)


def test_extract_cv_rejects_image_only_pdf():
    with patch.object(pdf_parser, "extract_pages", return_value=["", "  "]):
        with pytest.raises(PDFExtractionError, match="no readable text"):
            extract_cv(PDF_BYTES, "cv.pdf", "application/pdf", MAX_BYTES)


def test_extract_cv_password_protected():
    with patch.object(pdf_parser, "extract_pages", side_effect=RuntimeError("PDF requires a password")):
        with pytest.raises(PDFExtractionError) as exc:
            extract_cv(PDF_BYTES, "cv.pdf", "application/pdf", MAX_BYTES)
    assert exc.value.status_code == 400
    assert "Password" in exc.value.error


def test_extract_cv_unexpected_parser_error_is_server_error():
    with patch.object(pdf_parser, "extract_pages", side_effect=RuntimeError("boom")):
        with pytest.raises(PDFExtractionError) as exc:
            extract_cv(PDF_BYTES, "cv.pdf", "application/pdf", MAX_BYTES)
    assert exc.value.status_code == 500
    assert exc.value.details == "boom"
