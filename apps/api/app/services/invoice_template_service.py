"""Invoice template storage: file bytes on local disk, metadata in Mongo."""

import asyncio
import logging
import re
import time
from pathlib import Path, PurePosixPath

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.models import invoice_template
from app.models.base import document_id, utc_now
from app.models.invoice_template import DOCX_MIME_TYPE, InvoiceTemplate

logger = logging.getLogger(__name__)

ALLOWED_SUFFIX = ".docx"

_WHITESPACE_RE = re.compile(r"\s+")


class InvalidTemplateError(ValueError):
    """Raised when an upload is not an acceptable template file."""


def stored_filename(original_name: str, *, now_ms: int | None = None) -> str:
    """Unique on-disk name: ``<epoch ms>-<original name, whitespace as _>``."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}-{_WHITESPACE_RE.sub('_', original_name)}"


def upload_basename(original_name: str) -> str:
    """Final path component of a client-supplied file name."""
    return PurePosixPath(original_name.replace("\\", "/")).name


def _write_file(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


class InvoiceTemplateService:
    def __init__(self, db: AsyncIOMotorDatabase, upload_dir: Path) -> None:
        self.collection = db[invoice_template.COLLECTION]
        self.upload_dir = upload_dir

    async def list_templates(self) -> list[InvoiceTemplate]:
        """All templates, most recent upload first."""
        cursor = self.collection.find({}).sort("uploadedAt", -1)
        return [InvoiceTemplate.from_mongo(raw) for raw in await cursor.to_list(length=None)]

    async def get(self, template_id: str) -> InvoiceTemplate | None:
        raw = await self.collection.find_one({"_id": document_id(template_id)})
        return InvoiceTemplate.from_mongo(raw) if raw else None

    async def save(
        self,
        original_name: str | None,
        content: bytes,
        uploaded_by: str,
    ) -> InvoiceTemplate:
        """Write the file under the upload dir and record its metadata.

        Raises:
            InvalidTemplateError: If the file is not a .docx document or its
                name would land outside the upload dir.
        """
        name = upload_basename(original_name or "") or "template.docx"
        if not name.lower().endswith(ALLOWED_SUFFIX):
            raise InvalidTemplateError("Only .docx files are allowed")

        filename = stored_filename(name)
        path = self.upload_dir / filename
        if not path.resolve().is_relative_to(self.upload_dir.resolve()):
            raise InvalidTemplateError("Invalid file name")
        await asyncio.to_thread(_write_file, path, content)

        model = InvoiceTemplate(
            filename=filename,
            original_name=name,
            path=str(path),
            mime_type=DOCX_MIME_TYPE,
            uploaded_by=uploaded_by,
            uploaded_at=utc_now(),
        )
        document = {**model.to_mongo(), "createdAt": model.uploaded_at}
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError:
            await asyncio.to_thread(path.unlink, missing_ok=True)
            raise
        document["_id"] = result.inserted_id
        logger.info("Stored invoice template %s (%d bytes)", filename, len(content))
        return InvoiceTemplate.from_mongo(document)

    async def delete(self, template: InvoiceTemplate) -> None:
        """Remove the file (already-missing files are fine) and its record."""
        await asyncio.to_thread(Path(template.path).unlink, missing_ok=True)
        await self.collection.delete_one({"_id": document_id(template.id or "")})
        logger.info("Deleted invoice template %s", template.filename)
