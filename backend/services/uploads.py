"""Temporary storage for uploaded files.

Uploads are streamed to a uniquely named file under the upload directory with
a byte ceiling. Callers own cleanup; `temporary_upload` does it for them.
"""
from __future__ import annotations

import logging
import os
import uuid
from contextlib import contextmanager
from typing import BinaryIO, Iterator

from fastapi import UploadFile


logger = logging.getLogger("backend.uploads")

CHUNK_SIZE = 1024 * 1024


class UploadTooLargeError(Exception):
    def __init__(self, limit: int):
        super().__init__(f"Upload exceeds {limit} bytes")
        self.limit = limit


def save_stream(src: BinaryIO, dest_dir: str, max_bytes: int) -> str:
    """Copy `src` into a new file under `dest_dir`, enforcing `max_bytes`.

    The partial file is removed when the limit is exceeded.
    """
    os.makedirs(dest_dir, exist_ok=True)
    path = os.path.join(dest_dir, uuid.uuid4().hex)
    written = 0
    try:
        with open(path, "wb") as out:
            while True:
                chunk = src.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise UploadTooLargeError(max_bytes)
                out.write(chunk)
    except BaseException:
        remove_quietly(path)
        raise
    logger.debug("Stored upload at %s (%s bytes)", path, written)
    return path


def remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("⚠️ Could not remove temporary upload %s: %s", path, e)


@contextmanager
def temporary_upload(upload: UploadFile, dest_dir: str, max_bytes: int) -> Iterator[str]:
    """Yield the path of the stored upload and delete it afterwards, whatever happens."""
    path = save_stream(upload.file, dest_dir, max_bytes)
    try:
        yield path
    finally:
        remove_quietly(path)
