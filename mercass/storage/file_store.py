import logging
import os
import shutil
from pathlib import Path, PurePosixPath
from typing import List

from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from mercass.exceptions import FileStoreError

logger = logging.getLogger(__name__)


class LocalFileStore:
    """
    File store backed by a local directory.

    Attributes
    ----------
    root : Path
        Directory every stored path is relative to.
    cdn_base : str
        Public URL prefix of `root`.
    """

    def __init__(self, root: str, cdn_base: str):
        self.root = Path(root).resolve()
        self.cdn_base = cdn_base if cdn_base.endswith("/") else cdn_base + "/"

    def relative(self, path: str) -> str:
        """Normalise a stored path or CDN URL to a root-relative posix path."""
        if path.startswith(self.cdn_base):
            path = path[len(self.cdn_base):]
        parts = [part for part in PurePosixPath(path.replace("\\", "/")).parts if part not in ("/", "")]
        if any(part == ".." for part in parts):
            raise FileStoreError(f"Geçersiz dosya yolu: {path}", status_code=400)
        return "/".join(parts)

    def _resolve(self, path: str) -> Path:
        target = (self.root / self.relative(path)).resolve()
        if target != self.root and self.root not in target.parents:
            raise FileStoreError(f"Geçersiz dosya yolu: {path}", status_code=400)
        return target

    def url_for(self, path: str) -> str:
        return self.cdn_base + self.relative(path)

    async def save(self, folder: str, upload: UploadFile) -> str:
        """Store an upload under `folder` and return its CDN URL."""
        name = os.path.basename((upload.filename or "").replace("\\", "/"))
        if not name:
            raise FileStoreError("Dosya adı bulunamadı", status_code=400)
        relative = self.relative(f"{folder.rstrip('/')}/{name}")
        target = self._resolve(relative)

        def write():
            target.parent.mkdir(parents=True, exist_ok=True)
            upload.file.seek(0)
            with open(target, "wb") as fh:
                shutil.copyfileobj(upload.file, fh)

        try:
            await run_in_threadpool(write)
        except OSError as e:
            logger.error("Upload to %s failed: %s", relative, e)
            raise FileStoreError(f"Dosya yüklenemedi: {name}") from e
        return self.url_for(relative)

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await run_in_threadpool(target.unlink, True)
        except OSError as e:
            logger.error("Delete of %s failed: %s", path, e)
            raise FileStoreError(f"Dosya silinemedi: {path}") from e

    async def list(self, folder: str) -> List[str]:
        target = self._resolve(folder)
        if not target.is_dir():
            return []
        return sorted(entry.name for entry in target.iterdir() if entry.is_file())

    async def move(self, source: str, destination: str) -> str:
        src = self._resolve(source)
        dst = self._resolve(destination)

        def rename():
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(src), str(dst))

        try:
            await run_in_threadpool(rename)
        except OSError as e:
            logger.error("Move of %s to %s failed: %s", source, destination, e)
            raise FileStoreError(f"Dosya taşınamadı: {source}") from e
        return self.url_for(destination)
