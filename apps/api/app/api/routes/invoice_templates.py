"""Invoice template upload and download endpoints for admins."""

import logging
from pathlib import Path

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse
from pymongo.errors import PyMongoError

from app.core.auth import session_user_id
from app.core.config import settings
from app.core.deps import DB, AdminUser
from app.core.rate_limit import ADMIN_WRITE_RATE_LIMIT, limiter
from app.models.invoice_template import InvoiceTemplate
from app.schemas.common import SuccessResponse
from app.schemas.invoice_template import InvoiceTemplateListResponse, InvoiceTemplateResponse
from app.services.invoice_template_service import InvalidTemplateError, InvoiceTemplateService

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_TEMPLATE_SIZE = 5 * 1024 * 1024  # 5 MB


def _service(db: DB) -> InvoiceTemplateService:
    return InvoiceTemplateService(db, Path(settings.invoice_upload_dir))


async def _get_or_404(service: InvoiceTemplateService, template_id: str) -> InvoiceTemplate:
    try:
        template = await service.get(template_id)
    except PyMongoError as exc:
        logger.exception("Failed to fetch invoice template %s", template_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch template",
        ) from exc

    if template is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return template


@router.get("", response_model=InvoiceTemplateListResponse, summary="List invoice templates")
async def list_templates(db: DB, _admin: AdminUser) -> InvoiceTemplateListResponse:
    try:
        templates = await _service(db).list_templates()
    except PyMongoError as exc:
        logger.exception("Failed to list invoice templates")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list templates",
        ) from exc
    return InvoiceTemplateListResponse(templates=templates)


@router.post(
    "",
    response_model=InvoiceTemplateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an invoice template",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def upload_template(
    request: Request,  # noqa: ARG001 — required by slowapi
    db: DB,
    admin: AdminUser,
    file: UploadFile = File(..., description=".docx invoice template"),
) -> InvoiceTemplateResponse:
    """Store a .docx template under the configured upload directory."""
    if file.size is not None and file.size > MAX_TEMPLATE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File size exceeds 5 MB limit.",
        )

    content = await file.read()
    if len(content) > MAX_TEMPLATE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File size exceeds 5 MB limit.",
        )

    try:
        template = await _service(db).save(file.filename, content, session_user_id(admin))
    except InvalidTemplateError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except (PyMongoError, OSError) as exc:
        logger.exception("Failed to upload invoice template %s", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload template",
        ) from exc

    return InvoiceTemplateResponse(template=template)


@router.get(
    "/{template_id}",
    response_class=FileResponse,
    summary="Download an invoice template",
)
async def download_template(template_id: str, db: DB, _admin: AdminUser) -> FileResponse:
    template = await _get_or_404(_service(db), template_id)

    if not Path(template.path).is_file():
        logger.error("Invoice template %s missing on disk at %s", template_id, template.path)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template file missing")

    return FileResponse(
        template.path,
        media_type=template.mime_type,
        filename=template.original_name,
    )


@router.delete(
    "/{template_id}",
    response_model=SuccessResponse,
    summary="Delete an invoice template",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def delete_template(
    request: Request,  # noqa: ARG001 — required by slowapi
    template_id: str,
    db: DB,
    _admin: AdminUser,
) -> SuccessResponse:
    service = _service(db)
    template = await _get_or_404(service, template_id)

    try:
        await service.delete(template)
    except (PyMongoError, OSError) as exc:
        logger.exception("Failed to delete invoice template %s", template_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete template",
        ) from exc
    return SuccessResponse()
