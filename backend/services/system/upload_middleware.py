"""
Single-file multipart upload middleware.
"""
from flask import request

from backend.common.errors import ValidationFailed
from backend.common.rest.request_context import RequestContext
from backend.common.rest.routing import Middleware
from backend.services.storage.upload_storage import UploadStorage
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)


def upload_single(field_name: str, storage: UploadStorage) -> Middleware:
    """Store the file sent under `field_name` and attach it to ctx.file."""

    async def upload_middleware(ctx: RequestContext) -> None:
        upload = request.files.get(field_name)
        if upload is None or not upload.filename:
            raise ValidationFailed([{
                'field': field_name,
                'message': 'A file is required',
                'type': 'missing',
            }])
        ctx.file = await storage.save(upload)
        logger.debug("Upload attached to request", extra={'field': field_name, 'stored_path': ctx.file.path})

    return upload_middleware
