# scream_backend/services/storage_service.py
import uuid
import logging
from typing import IO, Optional
from urllib.parse import quote
from flask import Flask
from werkzeug.utils import secure_filename
from firebase_admin import storage


class StorageService:
    """
    Firebase Storage access: profile image uploads and download URLs.
    """

    def __init__(self):
        """The bucket is attached later by init_app."""
        self.bucket = None
        self.bucket_name = None

    def init_app(self, app: Flask):
        """
        Called once from create_app() to bind the configured bucket.

        :param app: Flask application
        """
        bucket_name = app.config.get('FIREBASE_STORAGE_BUCKET')
        if not bucket_name:
            raise ValueError("FIREBASE_STORAGE_BUCKET must be set in .env or the config class.")

        self.bucket_name = bucket_name
        self.bucket = storage.bucket(bucket_name)
        logging.info("StorageService: Firebase Storage initialized.")

    def download_url(self, file_path: str, token: Optional[str] = None) -> str:
        """Public download URL in the format Firebase clients use."""
        url = (f"https://firebasestorage.googleapis.com/v0/b/{self.bucket_name}"
               f"/o/{quote(file_path, safe='')}?alt=media")
        if token:
            url += f"&token={token}"
        return url

    def upload_image(self, file_stream: IO[bytes], filename: str, content_type: str) -> str:
        """
        Uploads an image under a random name and returns its download URL.

        :param file_stream: readable binary stream of the image
        :param filename: client filename, only its sanitised extension is kept
        :param content_type: MIME type of the image
        """
        if not self.bucket:
            raise RuntimeError("StorageService is not initialized. Call init_app first.")

        safe_name = secure_filename(filename)
        extension = safe_name.rsplit('.', 1)[-1] if '.' in safe_name else ''
        if not extension.isalnum():
            extension = ''
        image_filename = f"{uuid.uuid4()}.{extension}" if extension else str(uuid.uuid4())
        token = str(uuid.uuid4())

        blob = self.bucket.blob(image_filename)
        blob.metadata = {"firebaseStorageDownloadTokens": token}
        try:
            blob.upload_from_file(file_stream, content_type=content_type)
        except Exception as e:
            logging.error(f"Image upload failed ({image_filename}): {e}", exc_info=True)
            raise

        return self.download_url(image_filename, token)
