"""Unit tests for operation and response schemas."""

import pytest
from pydantic import ValidationError

from keiran_client.schemas import (
    ServerResponse,
    ShortenOperation,
    StatsOperation,
    StatsResponse,
    UploadOperation,
)


class TestOperations:
    """Tests for resolved operations."""

    def test_operations_are_frozen(self):
        operation = UploadOperation(path="a.txt")
        with pytest.raises(ValidationError):
            operation.keep_long = True

    def test_default_retention_is_short(self):
        assert UploadOperation(path="a.txt").keep_long is False
        assert ShortenOperation(url="https://a.com").keep_long is False

    def test_kinds(self):
        assert UploadOperation(path="a").kind == "upload"
        assert ShortenOperation(url="u").kind == "shorten"
        assert StatsOperation().kind == "stats"

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            UploadOperation(path="")


class TestServerResponse:
    """Tests for the /upload and /shorten body."""

    def test_all_fields_survive_encode_decode(self):
        sent = ServerResponse(
            message="ok",
            short_url="https://k.cc/ab12",
            filename="report.pdf",
            id="ab12",
            url="https://k.cc/f/ab12",
        )

        decoded = ServerResponse.model_validate_json(sent.model_dump_json())

        assert decoded == sent

    def test_missing_fields_default_to_empty(self):
        decoded = ServerResponse.model_validate_json('{"short_url": "https://k.cc/ab12"}')

        assert decoded.short_url == "https://k.cc/ab12"
        assert decoded.message == ""
        assert decoded.filename == ""
        assert decoded.id == ""
        assert decoded.url == ""

    def test_null_fields_decode_to_empty(self):
        decoded = ServerResponse.model_validate_json('{"url": "https://k.cc/f/a", "id": null}')

        assert decoded.url == "https://k.cc/f/a"
        assert decoded.id == ""

    def test_unknown_fields_ignored(self):
        decoded = ServerResponse.model_validate_json('{"url": "u", "expires_at": "2026-11-19"}')
        assert decoded.url == "u"

    def test_non_string_value_rejected(self):
        with pytest.raises(ValidationError):
            ServerResponse.model_validate_json('{"id": 42}')


class TestStatsResponse:
    """Tests for the /stats body."""

    def test_counts(self):
        stats = StatsResponse.model_validate_json('{"files": 3, "urls": 9}')
        assert (stats.files, stats.urls) == (3, 9)

    def test_missing_counts_are_zero(self):
        stats = StatsResponse.model_validate_json("{}")
        assert (stats.files, stats.urls) == (0, 0)

    def test_null_counts_are_zero(self):
        stats = StatsResponse.model_validate_json('{"files": null, "urls": 4}')
        assert (stats.files, stats.urls) == (0, 4)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError):
            StatsResponse.model_validate_json('{"files": "lots"}')
