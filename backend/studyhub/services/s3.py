"""S3 service for note PDF storage."""

from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from studyhub.config import get_settings

settings = get_settings()


class StorageError(Exception):
    """Raised when an object-storage call fails."""


class S3Service:
    """Service for storing note PDFs in an S3-compatible bucket."""

    def __init__(self):
        """Initialize S3 client with credentials from settings."""
        client_kwargs = {
            "aws_access_key_id": settings.aws_access_key_id,
            "aws_secret_access_key": settings.aws_secret_access_key,
            "region_name": settings.aws_s3_region,
        }
        # Support MinIO / LocalStack by pointing to a custom endpoint
        if settings.aws_s3_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_s3_endpoint_url

        self.s3_client = boto3.client("s3", **client_kwargs)
        self.bucket = settings.aws_s3_bucket

    async def upload_pdf(self, file_key: str, file_data: bytes) -> None:
        """
        Upload a note PDF (server-side upload).

        Args:
            file_key: S3 object key (path) for the file
            file_data: Raw bytes of the PDF file

        Raises:
            StorageError: If S3 operation fails
        """
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=file_key,
                Body=file_data,
                ContentType="application/pdf",
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload PDF to S3: {str(e)}") from e

    async def delete_pdf(self, file_key: str) -> None:
        """
        Delete a note PDF.

        Args:
            file_key: S3 object key (path) for the file

        Raises:
            StorageError: If S3 operation fails
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=file_key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete PDF from S3: {str(e)}") from e

    def public_url(self, file_key: str) -> str:
        """
        Public URL readers use to open the PDF.

        Uses storage_public_base_url when configured (CDN, MinIO),
        otherwise the virtual-hosted style bucket URL.
        """
        key = quote(file_key)
        if settings.storage_public_base_url:
            return f"{settings.storage_public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{settings.aws_s3_region}.amazonaws.com/{key}"


# Singleton instance
s3_service = S3Service()
