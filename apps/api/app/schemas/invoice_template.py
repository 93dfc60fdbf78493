"""Pydantic schemas for invoice template management."""

from app.models.invoice_template import InvoiceTemplate
from app.schemas.common import BaseSchema


class InvoiceTemplateResponse(BaseSchema):
    template: InvoiceTemplate


class InvoiceTemplateListResponse(BaseSchema):
    templates: list[InvoiceTemplate]
