"""Tests for the local file ingestion strategy."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from jsonfilter.config import JSONFILTER_MAX_CONTENT_BYTES
from jsonfilter.schemas import ErrorKind, IngestionFailure, IngestionSuccess
from jsonfilter.strategies.local_file import LocalFileStrategy


class TestCanHandle:
    """Tests for LocalFileStrategy.can_handle."""

    @pytest.mark.parametrize(
        "source",
        ["data.json", "./data.json", "/abs/data.json", "C:\\data\\file.json", "ftp://host/x.json", "httpx.json"],
    )
    def test_accepts_non_http_sources(self, source: str) -> None:
        """Everything that is not an http(s) URL is a path."""
        assert LocalFileStrategy().can_handle(source)

    @pytest.mark.parametrize("source", ["http://example.com/a.json", "https://example.com/a.json"])
    def test_rejects_urls(self, source: str) -> None:
        """http and https URLs are left to the HTTP strategy."""
        assert not LocalFileStrategy().can_handle(source)


class TestIngest:
    """Tests for LocalFileStrategy.ingest."""

    @pytest.mark.asyncio
    async def test_reads_valid_json(self, write_json: Callable[[str, object], Path]) -> None:
        """A valid file yields its text unchanged."""
        path = write_json("data.json", {"name": "John", "age": 30})

        outcome = await LocalFileStrategy().ingest(str(path))

        assert isinstance(outcome, IngestionSuccess)
        assert json.loads(outcome.content) == {"name": "John", "age": 30}

    @pytest.mark.asyncio
    async def test_resolves_relative_paths(
        self, tmp_path: Path, write_json: Callable[[str, object], Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative and bare paths resolve against the working directory."""
        write_json("bare.json", [1, 2, 3])
        monkeypatch.chdir(tmp_path)

        bare = await LocalFileStrategy().ingest("bare.json")
        relative = await LocalFileStrategy().ingest("./bare.json")

        assert bare.ok and relative.ok
        assert bare.content == relative.content == "[1, 2, 3]"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is reported as file_not_found with the resolved path."""
        path = tmp_path / "missing.json"

        outcome = await LocalFileStrategy().ingest(str(path))

        assert isinstance(outcome, IngestionFailure)
        assert outcome.error.kind is ErrorKind.FILE_NOT_FOUND
        assert str(path.resolve()) in outcome.error.message

    @pytest.mark.asyncio
    async def test_embedded_nul_byte_is_not_found(self) -> None:
        """A path with a NUL byte cannot exist and is reported, not raised."""
        outcome = await LocalFileStrategy().ingest("a\x00b.json")

        assert isinstance(outcome, IngestionFailure)
        assert outcome.error.kind is ErrorKind.FILE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_home_directory_is_not_found(self) -> None:
        """An unknown ~user path is reported, not raised."""
        outcome = await LocalFileStrategy().ingest("~nosuchuser_jsonfilter/x.json")

        assert isinstance(outcome, IngestionFailure)
        assert outcome.error.kind is ErrorKind.FILE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_preserves_crlf_line_endings(self, tmp_path: Path) -> None:
        """Content is returned byte for byte, line endings included."""
        path = tmp_path / "crlf.json"
        path.write_bytes(b'{\r\n"a": 1\r\n}\r\n')

        outcome = await LocalFileStrategy().ingest(str(path))

        assert isinstance(outcome, IngestionSuccess)
        assert outcome.content == '{\r\n"a": 1\r\n}\r\n'

    @pytest.mark.asyncio
    async def test_directory_is_not_found(self, tmp_path: Path) -> None:
        """A directory stats fine but cannot be read."""
        outcome = await LocalFileStrategy().ingest(str(tmp_path))

        assert isinstance(outcome, IngestionFailure)
        assert outcome.error.kind is ErrorKind.FILE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON is reported with its position."""
        path = tmp_path / "bad.json"
        path.write_text('{"a": 1,}', encoding="utf-8")

        outcome = await LocalFileStrategy().ingest(str(path))

        assert isinstance(outcome, IngestionFailure)
        assert outcome.error.kind is ErrorKind.INVALID_JSON
        assert outcome.error.details["line"] == 1

    @pytest.mark.asyncio
    async def test_empty_file_is_invalid_json(self, tmp_path: Path) -> None:
        """An empty file is not a JSON document."""
        path = tmp_path / "empty.json"
        path.write_text("", encoding="utf-8")

        outcome = await LocalFileStrategy().ingest(str(path))

        assert outcome.error.kind is ErrorKind.INVALID_JSON

    @pytest.mark.asyncio
    async def test_nan_is_rejected(self, tmp_path: Path) -> None:
        """NaN is accepted by Python's json module but is not JSON."""
        path = tmp_path / "nan.json"
        path.write_text('{"a": NaN}', encoding="utf-8")

        outcome = await LocalFileStrategy().ingest(str(path))

        assert outcome.error.kind is ErrorKind.INVALID_JSON

    @pytest.mark.asyncio
    async def test_non_utf8_is_invalid_json(self, tmp_path: Path) -> None:
        """Bytes that are not UTF-8 cannot be JSON text."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"a": "\xff"}')

        outcome = await LocalFileStrategy().ingest(str(path))

        assert outcome.error.kind is ErrorKind.INVALID_JSON

    @pytest.mark.asyncio
    async def test_oversized_file_is_not_read(self, tmp_path: Path) -> None:
        """A file over the cap is rejected from its stat size alone."""
        path = tmp_path / "huge.json"
        # Sparse file: not valid JSON, and never read.
        with path.open("wb") as handle:
            handle.truncate(JSONFILTER_MAX_CONTENT_BYTES + 1)

        with patch.object(Path, "read_bytes") as mock_read:
            outcome = await LocalFileStrategy().ingest(str(path))

        mock_read.assert_not_called()
        assert isinstance(outcome, IngestionFailure)
        assert outcome.error.kind is ErrorKind.CONTENT_TOO_LARGE
        assert outcome.error.details["size"] == JSONFILTER_MAX_CONTENT_BYTES + 1
        assert outcome.error.details["max_size"] == JSONFILTER_MAX_CONTENT_BYTES
        assert str(JSONFILTER_MAX_CONTENT_BYTES + 1) in outcome.error.message
        assert str(JSONFILTER_MAX_CONTENT_BYTES) in outcome.error.message

    @pytest.mark.asyncio
    async def test_custom_cap(self, write_json: Callable[[str, object], Path]) -> None:
        """The cap can be lowered per strategy."""
        path = write_json("small.json", {"payload": "x" * 100})
        size = os.path.getsize(path)

        at_limit = await LocalFileStrategy(max_content_bytes=size).ingest(str(path))
        over_limit = await LocalFileStrategy(max_content_bytes=size - 1).ingest(str(path))

        assert at_limit.ok
        assert over_limit.error.kind is ErrorKind.CONTENT_TOO_LARGE


class TestMetadata:
    """Tests for LocalFileStrategy.metadata."""

    def test_name(self) -> None:
        """Strategy reports its name."""
        assert LocalFileStrategy().name == "LocalFileStrategy"
