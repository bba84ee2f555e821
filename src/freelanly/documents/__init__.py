"""Document assembly for invoices, contracts, resumes and cover letters."""

from freelanly.documents.assembly import DocumentAssemblyService
from freelanly.documents.cover_letter import CoverLetterRequest, CoverLetterWriter

__all__ = ["CoverLetterRequest", "CoverLetterWriter", "DocumentAssemblyService"]
