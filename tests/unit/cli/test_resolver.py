"""Unit tests for the command resolver."""

import pytest

from keiran_client.cli.resolver import (
    COMMAND_USAGE,
    USAGE,
    guess_command,
    is_absolute_url,
    is_known_command,
    resolve_operation,
)
from keiran_client.core.exceptions import UsageError
from keiran_client.schemas.operation import (
    ShortenOperation,
    StatsOperation,
    UploadOperation,
)


def _no_files(path: str) -> bool:
    return False


class TestExplicitCommands:
    """Tests for arguments that start with a command name."""

    def test_upload(self) -> None:
        """Should build an upload operation from the positional path."""
        operation = resolve_operation(["upload", "notes.txt"], file_exists=_no_files)
        assert operation == UploadOperation(path="notes.txt", keep_long=False)

    def test_upload_long_single_dash(self) -> None:
        """Should accept the Go-style -long flag."""
        operation = resolve_operation(["upload", "-long", "notes.txt"])
        assert operation == UploadOperation(path="notes.txt", keep_long=True)

    def test_shorten_long_double_dash(self) -> None:
        """Should accept --long too."""
        operation = resolve_operation(["shorten", "--long", "https://example.com"])
        assert operation == ShortenOperation(url="https://example.com", keep_long=True)

    def test_flag_after_positional(self) -> None:
        """Should accept the flag after the positional argument."""
        operation = resolve_operation(["shorten", "https://example.com", "-long"])
        assert operation.keep_long is True

    def test_flag_with_explicit_false(self) -> None:
        """Should honor -long=false."""
        operation = resolve_operation(["upload", "-long=false", "a.txt"])
        assert operation == UploadOperation(path="a.txt", keep_long=False)

    def test_flag_with_invalid_value(self) -> None:
        """Should reject values that are not booleans."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation(["upload", "-long=maybe", "a.txt"])
        assert "maybe" in exc_info.value.message

    def test_double_dash_ends_flags(self) -> None:
        """Should treat everything after -- as positional."""
        operation = resolve_operation(["upload", "--", "-long"])
        assert operation == UploadOperation(path="-long", keep_long=False)

    def test_stats(self) -> None:
        """Should build a stats operation."""
        assert resolve_operation(["stats"]) == StatsOperation()

    def test_stats_rejects_positional(self) -> None:
        """Stats takes no arguments."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation(["stats", "extra"])
        assert exc_info.value.usage == COMMAND_USAGE["stats"]

    def test_stats_rejects_long(self) -> None:
        """Stats has no retention flag."""
        with pytest.raises(UsageError):
            resolve_operation(["stats", "-long"])

    def test_unknown_flag(self) -> None:
        """Should name the unknown flag."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation(["upload", "-x", "a.txt"])
        assert exc_info.value.message == "flag provided but not defined: -x"

    def test_missing_positional(self) -> None:
        """Should report the per-command usage line."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation(["upload", "-long"])
        assert exc_info.value.usage == "Usage: client upload [-long] <file_path>"

    def test_too_many_positionals(self) -> None:
        """Should require exactly one positional argument."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation(["shorten", "https://a.com", "https://b.com"])
        assert exc_info.value.usage == COMMAND_USAGE["shorten"]

    @pytest.mark.parametrize("command", ["upload", "shorten"])
    def test_empty_positional(self, command: str) -> None:
        """An empty argument is a usage problem, not a validation crash."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation([command, ""])
        assert exc_info.value.message == ""
        assert exc_info.value.usage == COMMAND_USAGE[command]

    def test_command_name_wins_over_existing_file(self) -> None:
        """A file called 'stats' does not turn stats into an upload."""
        assert resolve_operation(["stats"], file_exists=lambda path: True) == StatsOperation()


class TestInference:
    """Tests for inferring the command from a bare argument."""

    def test_existing_file_infers_upload(self, tmp_path, monkeypatch) -> None:
        """Should infer upload for a file that exists on disk."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "report.pdf").write_bytes(b"%PDF-1.4")

        operation = resolve_operation(["report.pdf"])

        assert operation == UploadOperation(path="report.pdf", keep_long=False)

    def test_url_infers_shorten(self, tmp_path, monkeypatch) -> None:
        """Should infer shorten for an absolute URL with no such file."""
        monkeypatch.chdir(tmp_path)

        operation = resolve_operation(["https://example.com/x"])

        assert operation == ShortenOperation(url="https://example.com/x", keep_long=False)

    def test_inferred_form_accepts_long(self) -> None:
        """Should parse -long after an inferred argument."""
        operation = resolve_operation(["https://example.com/x", "-long"], file_exists=_no_files)
        assert operation == ShortenOperation(url="https://example.com/x", keep_long=True)

    def test_file_check_runs_before_url_check(self) -> None:
        """A file named like a URL is uploaded."""
        operation = resolve_operation(["https://example.com/x"], file_exists=lambda path: True)
        assert operation == UploadOperation(path="https://example.com/x")

    def test_unresolvable_argument(self) -> None:
        """Should fail with the full usage text."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation(["definitely-not-a-thing"], file_exists=_no_files)
        assert exc_info.value.message == "Could not determine what you want to do."
        assert exc_info.value.usage == USAGE

    def test_no_arguments(self) -> None:
        """Should fail with the full usage text."""
        with pytest.raises(UsageError) as exc_info:
            resolve_operation([])
        assert exc_info.value.usage == USAGE


class TestHelpers:
    """Tests for the small predicates behind inference."""

    @pytest.mark.parametrize("arg", ["upload", "shorten", "stats"])
    def test_known_commands(self, arg: str) -> None:
        assert is_known_command(arg)

    def test_unknown_command(self) -> None:
        assert not is_known_command("download")

    @pytest.mark.parametrize(
        "arg",
        ["https://example.com", "http://localhost:8000/path?q=1", "ftp://files.example.org/a"],
    )
    def test_absolute_urls(self, arg: str) -> None:
        assert is_absolute_url(arg)

    @pytest.mark.parametrize("arg", ["example.com", "/etc/hosts", "report.pdf", "mailto:", "http://"])
    def test_not_absolute_urls(self, arg: str) -> None:
        assert not is_absolute_url(arg)

    def test_guess_returns_none(self) -> None:
        assert guess_command("nothing", file_exists=_no_files) is None
