import asyncio
import logging
from typing import Optional

import fitz  # PyMuPDF

from learnyst.core.config import settings
from learnyst.core.exceptions import SyllabusFileRejected, SyllabusTextNotFound

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
MAX_PDF_PAGES = 200
TEXT_EXTENSIONS = (".txt", ".md")


async def extract_syllabus_text(content: bytes, filename: str, max_bytes: Optional[int] = None) -> str:
    """
    Plain text of an uploaded syllabus, ready for /generate-mindmap.
    PDFs go through PyMuPDF, .txt/.md files are decoded as UTF-8.
    """
    filename = (filename or "").lower()
    limit = max_bytes if max_bytes is not None else settings.MAX_FILE_SIZE_MB * 1024 * 1024

    # ── Validate upload ───────────────────────────────
    if len(content) == 0:
        raise SyllabusFileRejected("Uploaded file is empty.")
    if len(content) > limit:
        raise SyllabusFileRejected(
            f"File too large ({len(content) / (1024 * 1024):.1f} MB). "
            f"Maximum is {limit / (1024 * 1024):.0f} MB."
        )

    if filename.endswith(".pdf"):
        if not content[:4].startswith(PDF_MAGIC):
            raise SyllabusFileRejected("File does not appear to be a valid PDF (invalid magic bytes).")
        text = await asyncio.to_thread(_extract_from_pdf, content)
    elif filename.endswith(TEXT_EXTENSIONS):
        text = content.decode("utf-8", errors="replace")
    else:
        raise SyllabusFileRejected("Unsupported format. Use PDF, TXT or MD.")

    if not text.strip():
        raise SyllabusTextNotFound("No text content found in file.")

    logger.info(f"[SYLLABUS] ✓ Extracted {len(text.strip())} characters from {filename}")
    return text.strip()


def _extract_from_pdf(data: bytes) -> str:
    """Runs in a worker thread; PyMuPDF is synchronous."""
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            if doc.page_count == 0:
                raise SyllabusTextNotFound("PDF has no pages.")
            if doc.page_count > MAX_PDF_PAGES:
                raise SyllabusFileRejected(f"PDF too large (>{MAX_PDF_PAGES} pages).")

            text_blocks = [page.get_text("text") for page in doc]
            return "\n\n".join(block for block in text_blocks if block.strip())
    except ValueError:
        raise
    except Exception as e:
        logger.error(f"[SYLLABUS] PDF extraction failed: {e}")
        raise SyllabusTextNotFound(f"PDF extraction failed: {e}")
