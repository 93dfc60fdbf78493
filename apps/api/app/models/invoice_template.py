"""Uploaded invoice templates (.docx files on local disk)."""

from datetime import datetime

from app.models.base import MongoModel

COLLECTION = "invoicetemplates"

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class InvoiceTemplate(MongoModel):
    """Metadata for a stored template file; ``path`` points at the bytes."""

    filename: str
    original_name: str
    path: str
    mime_type: str = DOCX_MIME_TYPE
    uploaded_by: str
    uploaded_at: datetime | None = None
