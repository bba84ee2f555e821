"""Export documents to PDF, HTML preview or the clipboard."""
from freelanly.export.clipboard import export_to_clipboard
from freelanly.export.pdf_exporter import build_pdf, export_to_file, render_pdf_bytes
from freelanly.export.preview import render_html_preview

__all__ = [
    "build_pdf",
    "export_to_clipboard",
    "export_to_file",
    "render_html_preview",
    "render_pdf_bytes",
]
