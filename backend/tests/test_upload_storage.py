import asyncio
import io

import pytest
from werkzeug.datastructures import FileStorage

from backend.services.storage.upload_storage import DiskUploadStorage


def test_save_writes_under_destination_with_random_name(tmp_path):
    storage = DiskUploadStorage('public/uploads', root=tmp_path)
    upload = FileStorage(stream=io.BytesIO(b'hello'), filename='cv.pdf', content_type='application/pdf')

    stored = asyncio.run(storage.save(upload))

    assert stored.path.startswith('public/uploads/')
    name = stored.path.rsplit('/', 1)[-1]
    assert len(name) == 32 and '.' not in name
    assert (tmp_path / 'public' / 'uploads' / name).read_bytes() == b'hello'
    assert stored.original_name == 'cv.pdf'
    assert stored.mimetype == 'application/pdf'
    assert stored.size == 5


def test_two_uploads_never_share_a_path(tmp_path):
    storage = DiskUploadStorage('public/uploads', root=tmp_path)

    async def save_both():
        return await asyncio.gather(
            storage.save(FileStorage(stream=io.BytesIO(b'a'), filename='a.txt')),
            storage.save(FileStorage(stream=io.BytesIO(b'b'), filename='b.txt')),
        )

    first, second = asyncio.run(save_both())
    assert first.path != second.path


def test_absolute_destination_is_rejected():
    with pytest.raises(ValueError):
        DiskUploadStorage('/var/uploads')
