"""
Local output files for job results.

Results are written as ``<dir>/<operation>-<YYYY-MM-DDTHH-MM-SS>.<ext>``, with
an ``_<index>`` suffix per file for multi-file results.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

import aiofiles
from loguru import logger

from pdfservices_core.assets import StreamAsset

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def create_output_path(
    directory: str | Path,
    operation: str,
    extension: str,
    index: int | None = None,
    now: datetime | None = None,
) -> Path:
    """Build a timestamped output path.

    Args:
        directory: Output directory.
        operation: Name used as the file prefix (e.g. "compress").
        extension: File extension, with or without the dot.
        index: Position of the file in a multi-file result.
        now: Timestamp to use; the current local time if None.

    Returns:
        The output path (not created).
    """
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    suffix = f"_{index}" if index is not None else ""
    return Path(directory) / f"{operation}-{stamp}{suffix}.{extension.lstrip('.')}"


async def save_stream_asset(stream: StreamAsset, path: str | Path) -> Path:
    """Write downloaded content to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "wb") as f:
        await f.write(stream.content)
    logger.info(f"Saved {len(stream)} bytes to {path}")
    return path


async def save_stream_assets(
    streams: Sequence[StreamAsset],
    directory: str | Path,
    operation: str,
    extension: str,
    now: datetime | None = None,
) -> list[Path]:
    """Write a multi-file result, one indexed file per stream."""
    now = now or datetime.now()
    paths = []
    for index, stream in enumerate(streams):
        path = create_output_path(directory, operation, extension, index=index, now=now)
        paths.append(await save_stream_asset(stream, path))
    return paths


async def read_file(path: str | Path) -> bytes:
    """Read a local input file."""
    async with aiofiles.open(path, "rb") as f:
        return await f.read()
