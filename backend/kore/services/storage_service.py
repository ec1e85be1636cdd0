import boto3
from botocore.exceptions import ClientError
import os
from datetime import datetime
from kore.config import settings
import logging

logger = logging.getLogger(__name__)


class StorageService:
    """Service for handling catalogue image storage (S3-compatible or local disk)"""

    CONTENT_TYPES = {
        'png': 'image/png',
        'jpg': 'image/jpeg',
        'jpeg': 'image/jpeg',
        'gif': 'image/gif',
        'bmp': 'image/bmp',
        'webp': 'image/webp',
        'avif': 'image/avif',
    }

    def __init__(self, local_storage_dir: str = None):
        self.bucket_name = settings.storage_bucket_name

        # Require both access key and secret key to use S3
        if settings.storage_access_key_id and settings.storage_secret_access_key:
            s3_config = {
                'aws_access_key_id': settings.storage_access_key_id,
                'aws_secret_access_key': settings.storage_secret_access_key,
            }
            if settings.storage_endpoint_url:
                s3_config['endpoint_url'] = settings.storage_endpoint_url
            if settings.storage_region:
                s3_config['region_name'] = settings.storage_region

            try:
                self.s3_client = boto3.client('s3', **s3_config)
                logger.info("S3 storage initialized successfully")
            except Exception as e:
                logger.warning(f"Failed to initialize S3 client, falling back to local storage: {str(e)}")
                self.s3_client = None
        else:
            logger.info("No S3 credentials found, using local filesystem storage")
            self.s3_client = None

        self.local_storage_dir = os.path.abspath(local_storage_dir or settings.local_storage_dir)
        os.makedirs(self.local_storage_dir, exist_ok=True)
        logger.info(f"Local storage directory initialized: {self.local_storage_dir}")

    def get_content_type(self, filename: str) -> str:
        """Determine content type based on file extension"""
        ext = filename.lower().split('.')[-1] if '.' in filename else ''
        return self.CONTENT_TYPES.get(ext, 'application/octet-stream')

    def is_image(self, filename: str) -> bool:
        return self.get_content_type(filename) != 'application/octet-stream'

    def upload_file(self, file_content: bytes, filename: str, prefix: str = "catalog") -> str:
        """
        Store a file and return its storage key

        Args:
            file_content: Binary content of the file
            filename: Original filename
            prefix: Key prefix (folder) to store under

        Returns:
            Storage key, e.g. "catalog/20240101_101500_123456_front.jpg"
        """
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S_%f")
        safe_name = os.path.basename(filename).replace(" ", "_")
        storage_key = f"{prefix}/{timestamp}_{safe_name}"

        if self.s3_client:
            try:
                self.s3_client.put_object(
                    Bucket=self.bucket_name,
                    Key=storage_key,
                    Body=file_content,
                    ContentType=self.get_content_type(filename)
                )
                logger.info(f"File uploaded to S3: {storage_key}")
                return storage_key
            except ClientError as e:
                logger.error(f"Failed to upload to S3: {str(e)}")
                raise

        local_path = self._local_path(storage_key)
        os.makedirs(os.path.dirname(local_path), exist_ok=True)
        with open(local_path, 'wb') as f:
            f.write(file_content)
        logger.info(f"File saved to local storage: {local_path}")
        return storage_key

    def get_file_url(self, storage_key: str, base_url: str) -> str:
        """
        Build the persisted URL for a stored file

        Local files are served by the API under /uploads/, so the URL is built
        from the request's base URL. S3 objects get their bucket URL.
        """
        if self.s3_client:
            if settings.storage_endpoint_url:
                return f"{settings.storage_endpoint_url.rstrip('/')}/{self.bucket_name}/{storage_key}"
            return f"https://{self.bucket_name}.s3.{settings.storage_region}.amazonaws.com/{storage_key}"
        return f"{base_url.rstrip('/')}/uploads/{storage_key}"

    def download_file(self, storage_key: str) -> bytes:
        """Read a stored file back. Raises FileNotFoundError when missing."""
        if self.s3_client:
            try:
                response = self.s3_client.get_object(Bucket=self.bucket_name, Key=storage_key)
                return response['Body'].read()
            except ClientError as e:
                if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                    raise FileNotFoundError(storage_key)
                raise

        local_path = self._local_path(storage_key)
        if not os.path.exists(local_path):
            raise FileNotFoundError(f"File not found: {storage_key}")
        with open(local_path, 'rb') as f:
            return f.read()

    def _local_path(self, storage_key: str) -> str:
        path = os.path.abspath(os.path.join(self.local_storage_dir, storage_key))
        # Keys come from URLs; never resolve outside the storage directory
        if not path.startswith(self.local_storage_dir + os.sep):
            raise FileNotFoundError(f"File not found: {storage_key}")
        return path


storage_service = StorageService()
