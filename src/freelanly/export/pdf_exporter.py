"""Plain-text document to PDF using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import MethodReturnValue
from fpdf.errors import FPDFException

from freelanly.config import ExportConfig
from freelanly.errors import ExportError
from freelanly.models.documents import DocumentKind

logger = logging.getLogger(__name__)

FONT = "Helvetica"
MARKERS = tuple(kind.marker for kind in DocumentKind)


def is_heading(line: str) -> bool:
    """A line carrying a document kind marker is drawn as a heading."""
    return any(marker in line for marker in MARKERS)


def build_pdf(body: str, config: ExportConfig | None = None) -> FPDF:
    """Lay out ``body`` line by line and return the unsaved document.

    Lines longer than the printable width are wrapped; each wrapped row
    advances the cursor like a separate line.
    """
    config = config or ExportConfig()
    pdf = FPDF(unit="pt", format="A4")
    pdf.set_auto_page_break(False)
    pdf.set_margins(config.left_margin, config.top_margin)
    pdf.add_page()
    width = pdf.w - 2 * config.left_margin

    y = config.top_margin
    for line in body.splitlines():
        if not line.strip():
            y += config.blank_step
        else:
            if is_heading(line):
                pdf.set_font(FONT, "B", config.heading_size)
                step = config.heading_step
            else:
                pdf.set_font(FONT, "", config.body_size)
                step = config.body_step
            for row in _wrap(pdf, _safe_text(line, pdf), width):
                if y > config.page_bound:
                    pdf.add_page()
                    y = config.top_margin
                pdf.text(config.left_margin, y, row)
                y += step
        if y > config.page_bound:
            pdf.add_page()
            y = config.top_margin
    return pdf


def render_pdf_bytes(body: str, config: ExportConfig | None = None) -> bytes:
    """Render ``body`` to PDF bytes (for download buttons)."""
    try:
        buf = BytesIO()
        build_pdf(body, config).output(buf)
    except FPDFException as e:
        logger.error("PDF render failed", exc_info=True)
        raise ExportError(f"Could not render PDF: {e}") from e
    return buf.getvalue()


def export_to_file(
    body: str,
    filename: str | Path,
    config: ExportConfig | None = None,
) -> Path:
    """Write ``body`` as a PDF to ``filename`` and return the path written."""
    path = Path(filename)
    if path.suffix.lower() != ".pdf":
        path = path.with_name(path.name + ".pdf")
    data = render_pdf_bytes(body, config)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        logger.error("PDF write failed: %s", path, exc_info=True)
        raise ExportError(f"Could not write {path}: {e}") from e
    logger.info("Exported %s (%d bytes)", path, len(data))
    return path


def _wrap(pdf: FPDF, text: str, width: float) -> list[str]:
    if pdf.get_string_width(text) <= width:
        return [text]
    return pdf.multi_cell(
        width, pdf.font_size, text, dry_run=True, output=MethodReturnValue.LINES
    )


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    # Built-in fonts only cover latin-1
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")
