"""
Upload storage.

Files are written under `<root>/<destination>` with a random hex name and no
extension. The returned StoredFile.path is the posix path relative to root,
e.g. "public/uploads/3f2a...".
"""
import asyncio
import uuid
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol, Union

from werkzeug.datastructures import FileStorage

from backend.common.rest.request_context import StoredFile
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)


class UploadStorage(Protocol):
    async def save(self, upload: FileStorage) -> StoredFile:
        ...


class DiskUploadStorage:
    def __init__(self, destination: str = 'public/uploads', root: Optional[Union[str, Path]] = None):
        if PurePosixPath(destination).is_absolute():
            raise ValueError("Upload destination must be relative to the storage root")
        self.destination = PurePosixPath(destination)
        self.root = Path(root) if root is not None else Path.cwd()

    @property
    def directory(self) -> Path:
        return self.root / Path(*self.destination.parts)

    def _write(self, upload: FileStorage, target: Path) -> int:
        target.parent.mkdir(parents=True, exist_ok=True)
        upload.save(str(target))
        return target.stat().st_size

    async def save(self, upload: FileStorage) -> StoredFile:
        name = uuid.uuid4().hex
        relative = self.destination / name
        target = self.directory / name

        size = await asyncio.to_thread(self._write, upload, target)

        logger.info(
            "Upload stored",
            extra={'stored_path': str(relative), 'original_name': upload.filename, 'size': size}
        )
        return StoredFile(
            path=str(relative),
            original_name=upload.filename or '',
            mimetype=upload.mimetype,
            size=size,
        )
