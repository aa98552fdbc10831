"""Unit tests for LitProcessor and output naming."""

from __future__ import annotations

from pathlib import Path

import pytest

from litweave_cli.pipeline import LitProcessor, OutputOptions, language_extension, output_stem
from litweave_core.config import LitweaveSettings
from litweave_core.exceptions import (
    CircularReferenceError,
    OutputDirectoryError,
    OutputWriteError,
    SourceUnavailableError,
    ValidationError,
)

HELLO = "Intro\n<< * >>=\ndef main():\n    << body >>\n@\n<< body >>=\nprint('hi')\n@\n"


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "hello.py.lit"
    path.write_text(HELLO, encoding="utf-8")
    return path


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def processor(sleeps):
    return LitProcessor(LitweaveSettings(watch_retry_delay=0.5), sleep=sleeps.append)


class TestNaming:
    @pytest.mark.parametrize(
        "name, stem, ext",
        [
            ("hello.py.lit", "hello.py", ".py"),
            ("build.sh.LIT", "build.sh", ".sh"),
            ("README.lit", "README", ""),
            ("notes", "notes", ""),
        ],
    )
    def test_stem_and_extension(self, name, stem, ext) -> None:
        assert output_stem(Path(name)) == stem
        assert language_extension(Path(name)) == ext


class TestOutputOptions:
    def test_missing_docs_dir(self, tmp_path) -> None:
        options = OutputOptions(code_dir=tmp_path, docs_dir=tmp_path / "missing")

        with pytest.raises(OutputDirectoryError) as exc_info:
            options.validate()

        assert exc_info.value.path == str(tmp_path / "missing")

    def test_unused_directory_is_not_checked(self, tmp_path) -> None:
        options = OutputOptions(
            html=False, markdown=False, code_dir=tmp_path, docs_dir=tmp_path / "missing"
        )

        options.validate()


class TestProcessFile:
    def test_writes_all_outputs(self, processor, source, tmp_path) -> None:
        docs = tmp_path / "docs"
        docs.mkdir()

        written = processor.process_file(source, OutputOptions(code_dir=tmp_path, docs_dir=docs))

        assert written == [tmp_path / "hello.py", docs / "hello.py.html", docs / "hello.py.md"]
        assert (tmp_path / "hello.py").read_text() == "def main():\n    print('hi')\n"
        assert "<!DOCTYPE html>" in (docs / "hello.py.html").read_text()
        assert "```py\n<< body >>=\n" in (docs / "hello.py.md").read_text()

    def test_only_requested_outputs(self, processor, source, tmp_path) -> None:
        options = OutputOptions(code=False, markdown=False, code_dir=tmp_path, docs_dir=tmp_path)

        written = processor.process_file(source, options)

        assert written == [tmp_path / "hello.py.html"]
        assert not (tmp_path / "hello.py").exists()

    def test_annotated_code(self, processor, source, tmp_path) -> None:
        options = OutputOptions(
            html=False, markdown=False, annotate=True, code_dir=tmp_path, docs_dir=tmp_path
        )

        processor.process_file(source, options)

        assert (tmp_path / "hello.py").read_text() == (
            f"# {source}:2\n"
            "def main():\n"
            f"    # {source}:6\n"
            "    print('hi')\n"
        )

    def test_configured_root_name(self, tmp_path) -> None:
        source = tmp_path / "job.sh.lit"
        source.write_text("<< * >>=\nignored\n@\n<< main >>=\necho main\n@\n")
        processor = LitProcessor(LitweaveSettings(root_name="main"))

        processor.process_file(
            source, OutputOptions(html=False, markdown=False, code_dir=tmp_path)
        )

        assert (tmp_path / "job.sh").read_text() == "echo main\n"

    def test_refuses_to_overwrite_source(self, processor, tmp_path) -> None:
        source = tmp_path / "notes"
        source.write_text("<< * >>=\nx\n@\n")

        with pytest.raises(ValidationError) as exc_info:
            processor.process_file(source, OutputOptions(code_dir=tmp_path, docs_dir=tmp_path))

        assert exc_info.value.error_code == "VAL_003"
        assert source.read_text() == "<< * >>=\nx\n@\n"
        assert not (tmp_path / "notes.html").exists()

    def test_circular_reference_writes_nothing(self, processor, tmp_path) -> None:
        source = tmp_path / "loop.py.lit"
        source.write_text("<< * >>=\n<< a >>\n@\n<< a >>=\n<< * >>\n@\n")

        with pytest.raises(CircularReferenceError) as exc_info:
            processor.process_file(source, OutputOptions(code_dir=tmp_path, docs_dir=tmp_path))

        assert exc_info.value.cycle == ["*", "a", "*"]
        assert list(tmp_path.iterdir()) == [source]


class TestReadSource:
    def test_retries_then_succeeds(self, processor, sleeps, source, monkeypatch) -> None:
        original = Path.read_text
        failures = [OSError("busy"), OSError("busy")]

        def flaky_read_text(self, *args, **kwargs):
            if failures:
                raise failures.pop(0)
            return original(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", flaky_read_text)

        assert processor.read_source(source) == HELLO
        assert sleeps == [0.5, 0.5]

    def test_gives_up_after_max_retries(self, processor, sleeps, tmp_path) -> None:
        missing = tmp_path / "gone.py.lit"

        with pytest.raises(SourceUnavailableError) as exc_info:
            processor.read_source(missing)

        assert sleeps == [0.5, 0.5, 0.5]
        assert exc_info.value.details["attempts"] == 4
        assert exc_info.value.is_transient
        assert isinstance(exc_info.value.original_exception, FileNotFoundError)

    def test_no_retries(self, sleeps, tmp_path) -> None:
        processor = LitProcessor(LitweaveSettings(watch_max_retries=0), sleep=sleeps.append)

        with pytest.raises(SourceUnavailableError):
            processor.read_source(tmp_path / "gone.lit")

        assert sleeps == []


class TestIoFailures:
    def test_undecodable_source_is_not_retried(self, processor, sleeps, tmp_path) -> None:
        source = tmp_path / "latin.py.lit"
        source.write_bytes(b"<< * >>=\nprint('caf\xe9')\n@\n")

        with pytest.raises(ValidationError) as exc_info:
            processor.read_source(source)

        assert exc_info.value.error_code == "VAL_004"
        assert exc_info.value.is_transient is False
        assert isinstance(exc_info.value.original_exception, UnicodeDecodeError)
        assert "not valid utf-8 text" in exc_info.value.message
        assert sleeps == []

    def test_configured_encoding_is_used(self, tmp_path) -> None:
        source = tmp_path / "latin.py.lit"
        source.write_bytes(b"<< * >>=\nprint('caf\xe9')\n@\n")
        processor = LitProcessor(LitweaveSettings(encoding="latin-1"))

        processor.process_file(
            source, OutputOptions(html=False, markdown=False, code_dir=tmp_path)
        )

        assert (tmp_path / "latin.py").read_bytes() == b"print('caf\xe9')\n"

    def test_write_failure_is_wrapped(self, processor, source, tmp_path) -> None:
        (tmp_path / "hello.py").mkdir()

        with pytest.raises(OutputWriteError) as exc_info:
            processor.process_file(
                source, OutputOptions(html=False, markdown=False, code_dir=tmp_path)
            )

        assert exc_info.value.error_code == "IO_003"
        assert exc_info.value.path == str(tmp_path / "hello.py")
        assert isinstance(exc_info.value.original_exception, OSError)
