# app/storage.py
import logging
from pathlib import Path
from typing import List
from uuid import uuid4

import aiofiles

logger = logging.getLogger(__name__)

# Firmas de los formatos de imagen más comunes
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", ".png"),
    (b"\xff\xd8\xff", ".jpg"),
    (b"GIF87a", ".gif"),
    (b"GIF89a", ".gif"),
)

def guess_extension(content: bytes) -> str:
    for signature, ext in _SIGNATURES:
        if content.startswith(signature):
            return ext
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return ".webp"
    return ".jpg"


class PictureStorage:
    """Guarda las fotos de los animales en disco bajo ``<media_dir>/animals``."""

    folder = "animals"

    def __init__(self, media_dir: str):
        self.media_dir = Path(media_dir)

    async def save(self, content: bytes) -> str:
        rel_path = Path(self.folder) / f"{uuid4().hex}{guess_extension(content)}"
        abs_path = self.media_dir / rel_path
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(abs_path, "wb") as out:
            await out.write(content)
        return f"/media/{rel_path.as_posix()}"

    def delete(self, url: str) -> None:
        rel_path = Path(url).relative_to("/media")
        (self.media_dir / rel_path).unlink(missing_ok=True)

    def delete_all(self, urls: List[str]) -> None:
        """Borra las fotos indicadas; un fallo en una no impide borrar las demás."""
        for url in urls:
            try:
                self.delete(url)
            except OSError:
                logger.warning("No se pudo borrar la foto %s", url, exc_info=True)
