import asyncio

import fitz  # PyMuPDF
import pytest

from learnyst.core.exceptions import SyllabusFileRejected, SyllabusTextNotFound
from learnyst.services.file_service import extract_syllabus_text


def _pdf(*pages):
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def test_pdf_text_is_extracted():
    text = asyncio.run(extract_syllabus_text(_pdf("UNIT ONE", "Vectors and scalars"), "Course.PDF"))

    assert "UNIT ONE" in text
    assert "Vectors and scalars" in text


def test_pdf_without_text():
    with pytest.raises(SyllabusTextNotFound):
        asyncio.run(extract_syllabus_text(_pdf(None), "blank.pdf"))


def test_fake_pdf_is_rejected():
    with pytest.raises(SyllabusFileRejected, match="magic bytes"):
        asyncio.run(extract_syllabus_text(b"hello world", "notes.pdf"))


def test_markdown_is_decoded():
    assert asyncio.run(extract_syllabus_text("# Ünits\n".encode(), "plan.md")) == "# Ünits"


def test_empty_upload():
    with pytest.raises(SyllabusFileRejected, match="empty"):
        asyncio.run(extract_syllabus_text(b"", "plan.txt"))


def test_size_limit():
    with pytest.raises(SyllabusFileRejected, match="too large"):
        asyncio.run(extract_syllabus_text(b"x" * 2048, "plan.txt", max_bytes=1024))


def test_unsupported_extension():
    with pytest.raises(SyllabusFileRejected, match="Unsupported"):
        asyncio.run(extract_syllabus_text(b"data", "plan.docx"))
