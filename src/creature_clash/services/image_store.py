"""Local object store for creature images"""
import base64
import binascii
import logging
import mimetypes
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from werkzeug.utils import secure_filename

logger = logging.getLogger('creature_clash')

DATA_URL_PREFIX = re.compile(r'^data:image/[a-z]+;base64,')
DEFAULT_CONTENT_TYPE = 'image/png'


class ImageDecodeError(ValueError):
    """Raised when uploaded image data is not valid base64"""


@dataclass
class StoredImage:
    data: bytes
    content_type: str


def decode_base64_image(data: str) -> bytes:
    """Decode a base64 payload, accepting an optional `data:image/...;base64,` prefix"""
    try:
        return base64.b64decode(DATA_URL_PREFIX.sub('', data), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid image data: {e}") from e


def make_image_key(name: str, now_ms: Optional[int] = None) -> str:
    """Build a unique-ish key `<name>-<millis>.png` for a user's upload"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    safe_name = secure_filename(name) or 'creature'
    return f"{safe_name}-{now_ms}.png"


class ImageStore:
    """Stores blobs as files under a root directory, one file per key"""

    def __init__(self, root_dir: str):
        self.root = Path(root_dir)

    def _path_for(self, key: str) -> Optional[Path]:
        # keys are flat file names; anything else can't have been written by put()
        if not key or key != secure_filename(key):
            return None
        return self.root / key

    def put(self, key: str, data: bytes) -> str:
        path = self._path_for(key)
        if path is None:
            raise ValueError(f"Invalid image key: {key!r}")
        self.root.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as fh:
            fh.write(data)
        logger.info(f"Stored image {key} ({len(data)} bytes)")
        return key

    def get(self, key: str) -> Optional[StoredImage]:
        path = self._path_for(key)
        if path is None or not path.is_file():
            return None
        content_type = mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE
        return StoredImage(data=path.read_bytes(), content_type=content_type)
