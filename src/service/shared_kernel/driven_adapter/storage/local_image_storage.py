from pathlib import Path
import uuid

import anyio

from src.platform.config.core_setting import settings
from src.platform.constant.path import UPLOAD_DIR
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_image_storage import IImageStorage


ALLOWED_CONTENT_TYPES = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class LocalImageStorage(IImageStorage):
    """Stores images under the static directory, served by the app under MEDIA_URL"""

    def __init__(self, *, upload_dir: Path = UPLOAD_DIR, media_url: str = settings.MEDIA_URL):
        self.upload_dir = upload_dir
        self.media_url = media_url.rstrip('/')

    @Logger.io(truncate_content=True)
    async def upload(self, *, filename: str, content_type: str, data: bytes) -> str:
        suffix = ALLOWED_CONTENT_TYPES.get(content_type)
        if suffix is None:
            raise ValidationError(f'Unsupported image type for {filename}: {content_type}')
        if not data:
            raise ValidationError(f'Image {filename} is empty')
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError(f'Image {filename} exceeds {MAX_IMAGE_BYTES // (1024 * 1024)} MB')

        directory = anyio.Path(self.upload_dir)
        await directory.mkdir(parents=True, exist_ok=True)

        stored_name = f'{uuid.uuid4().hex}{suffix}'
        await (directory / stored_name).write_bytes(data)

        Logger.base.info(f'🖼️ [UPLOAD] {filename} -> {stored_name} ({len(data)} bytes)')
        return f'{self.media_url}/{stored_name}'
