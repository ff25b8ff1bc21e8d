"""Multipart upload adapters for the image endpoints"""

import json
import logging
from io import BytesIO
from typing import List, Optional, Sequence

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from portfolio_api.services.portfolio_service import ImageUpload, InvalidRequestError

logger = logging.getLogger(__name__)

FORMAT_TYPES = {
    "JPEG": ("image/jpeg", "jpg"),
    "PNG": ("image/png", "png"),
    "WEBP": ("image/webp", "webp"),
    "GIF": ("image/gif", "gif"),
}


def parse_labels(values: Optional[Sequence[str]]) -> List[str]:
    """
    Normalize the multipart `labels` field into a list of label strings.

    The field may be repeated once per file, or sent once as a JSON array
    or a comma-separated string.
    """
    if not values:
        return []
    if len(values) > 1:
        return [str(value) for value in values]

    raw = values[0]
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return [part.strip() for part in str(raw).split(",")]

    if isinstance(parsed, list):
        return ["" if item is None else str(item) for item in parsed]
    return [str(parsed)]


async def read_upload(file: UploadFile, max_size: int) -> ImageUpload:
    """
    Read an uploaded file and verify it is a supported image.

    Raises:
        InvalidRequestError: If the file is too large or not a supported image
    """
    data = await file.read()
    if not data:
        raise InvalidRequestError(f"File {file.filename} is empty")
    if len(data) > max_size:
        raise InvalidRequestError(
            f"File {file.filename} exceeds maximum of {max_size} bytes"
        )

    try:
        with Image.open(BytesIO(data)) as image:
            image.verify()
            image_format = image.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning(f"Rejected upload {file.filename}: {e}")
        raise InvalidRequestError(f"File {file.filename} is not a valid image")

    if image_format not in FORMAT_TYPES:
        raise InvalidRequestError(f"Image format {image_format} is not supported")

    content_type, extension = FORMAT_TYPES[image_format]
    return ImageUpload(data=data, content_type=content_type, extension=extension)
