"""Services for external integrations."""

from studyhub.services.s3 import s3_service
from studyhub.services.pdf_processor import pdf_processor

__all__ = ["s3_service", "pdf_processor"]
