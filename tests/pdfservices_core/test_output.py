"""Unit tests for output file helpers."""

from datetime import datetime

import pytest

from pdfservices_core.assets import StreamAsset
from pdfservices_core.output import (
    create_output_path,
    read_file,
    save_stream_asset,
    save_stream_assets,
)

NOW = datetime(2024, 3, 5, 14, 7, 9)


class TestCreateOutputPath:
    """Tests for output path naming."""

    def test_timestamped_name(self, tmp_path):
        """Should name files <operation>-<timestamp>.<ext>."""
        path = create_output_path(tmp_path, "compress", "pdf", now=NOW)

        assert path == tmp_path / "compress-2024-03-05T14-07-09.pdf"

    def test_index_suffix(self, tmp_path):
        """Should add an index for multi-file results."""
        path = create_output_path(tmp_path, "split", ".pdf", index=2, now=NOW)

        assert path.name == "split-2024-03-05T14-07-09_2.pdf"

    def test_does_not_create_anything(self, tmp_path):
        """Should only compute the path."""
        path = create_output_path(tmp_path / "nested", "ocr", "pdf", now=NOW)

        assert not path.parent.exists()


class TestSaveStreamAsset:
    """Tests for writing results."""

    @pytest.mark.asyncio
    async def test_creates_parent_directories(self, tmp_path):
        """Should create missing directories and write the bytes."""
        target = tmp_path / "out" / "deep" / "result.pdf"

        path = await save_stream_asset(StreamAsset(content=b"%PDF-1.7"), target)

        assert path == target
        assert target.read_bytes() == b"%PDF-1.7"

    @pytest.mark.asyncio
    async def test_saves_indexed_files(self, tmp_path):
        """Should write one indexed file per stream."""
        streams = [StreamAsset(content=b"one"), StreamAsset(content=b"two")]

        paths = await save_stream_assets(streams, tmp_path, "split", "pdf", now=NOW)

        assert [p.name for p in paths] == [
            "split-2024-03-05T14-07-09_0.pdf",
            "split-2024-03-05T14-07-09_1.pdf",
        ]
        assert paths[1].read_bytes() == b"two"

    @pytest.mark.asyncio
    async def test_read_file(self, tmp_path):
        """Should read a local file as bytes."""
        path = tmp_path / "in.bin"
        path.write_bytes(b"\x00\x01")

        assert await read_file(path) == b"\x00\x01"
