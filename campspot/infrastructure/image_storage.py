"""Image Storage: writes uploaded listing images to a local directory.

Invariants:
    - Stored filenames are generated (epoch milliseconds + random suffix), never
      taken from the client; only the lower-cased extension is kept
    - Returned path is the public URL path under the static upload prefix
    - delete_image accepts that same public path and tolerates a missing file
"""

import logging
import secrets
from datetime import datetime, timezone
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


def build_image_filename(original_name: str | None, now: datetime | None = None) -> str:
    """Timestamp-based filename that keeps the upload's extension."""
    now = now or datetime.now(timezone.utc)
    suffix = Path(original_name or "").suffix.lower()
    return f"{int(now.timestamp() * 1000)}-{secrets.token_hex(4)}{suffix}"


async def save_image(
    upload: UploadFile | None, upload_dir: str, url_prefix: str,
) -> str | None:
    """Persist the upload and return its public path, or None if nothing was sent."""
    if upload is None or not upload.filename:
        return None

    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    filename = build_image_filename(upload.filename)
    data = await upload.read()
    await run_in_threadpool((directory / filename).write_bytes, data)

    logger.info(f"Stored image {filename} ({len(data)} bytes)")
    return f"{url_prefix.rstrip('/')}/{filename}"


def delete_image(image_path: str | None, upload_dir: str) -> None:
    """Remove a stored image given the public path save_image returned."""
    if not image_path:
        return
    filename = image_path.rsplit("/", 1)[-1]
    (Path(upload_dir) / filename).unlink(missing_ok=True)
    logger.info(f"Removed image {filename}")
