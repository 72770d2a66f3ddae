"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json
import logging
import logging.handlers
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from paper_catalog.cli import (
    EXIT_LOAD_FAILED,
    EXIT_OK,
    EXIT_RECORDS_SKIPPED,
    _configure_logging,
    build_parser,
    main,
)
from paper_catalog.models import SiteConfig


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, markup=False, highlight=False, emoji=False)
    return console, buffer


def _run(argv: list[str], config: SiteConfig | None = None, **kwargs) -> tuple[int, str]:
    console, buffer = _console()
    code = main(
        argv,
        load_config_fn=lambda _path: config or SiteConfig(),
        configure_logging_fn=lambda *_a, **_kw: None,
        console=console,
        **kwargs,
    )
    return code, buffer.getvalue()


class TestParser:
    def test_build_defaults(self):
        args = build_parser().parse_args(["build"])
        assert args.input == "data/papers.json"
        assert args.feed_limit is None
        assert args.debug is False

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_rejects_unknown_escaper(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["build", "--listing-escaper", "latex"])


class TestBuildCommand:
    def test_successful_build(self, write_source, make_raw_record, tmp_path):
        source = write_source([make_raw_record()])
        out = tmp_path / "site"
        code, output = _run(["build", "-i", str(source), "-o", str(out)])
        assert code == EXIT_OK
        assert "Generating paper pages..." in output
        assert "✓ acemoglu-restrepo-2020.html" in output
        assert "✓ feed.xml" in output
        assert "Generated 1 paper page and the RSS feed." in output
        assert (out / "papers" / "acemoglu-restrepo-2020.html").exists()

    def test_skipped_records_exit_code(self, write_source, make_raw_record, tmp_path):
        source = write_source([make_raw_record(id="ok"), make_raw_record(id="no-link", url="")])
        code, output = _run(["build", "-i", str(source), "-o", str(tmp_path / "site")])
        assert code == EXIT_RECORDS_SKIPPED
        assert "✗ no-link (missing url)" in output
        assert "Skipped 1 record." in output

    def test_missing_source(self, tmp_path):
        code, output = _run(["build", "-i", str(tmp_path / "nope.json"), "-o", str(tmp_path)])
        assert code == EXIT_LOAD_FAILED
        assert "Could not load the paper records." in output
        assert "file not found" in output
        assert not (tmp_path / "feed.xml").exists()

    def test_invalid_record_aborts(self, write_source, make_raw_record, tmp_path):
        source = write_source([make_raw_record(year="soon")])
        code, output = _run(["build", "-i", str(source), "-o", str(tmp_path / "site")])
        assert code == EXIT_LOAD_FAILED
        assert "'year'" in output
        assert not (tmp_path / "site").exists()

    def test_overrides_apply(self, write_source, make_raw_record, tmp_path):
        source = write_source(
            [make_raw_record(id=f"p{i}", dateAdded=f"2024-02-0{i + 1}") for i in range(5)]
        )
        out = tmp_path / "site"
        code, _ = _run(
            [
                "build",
                "-i",
                str(source),
                "-o",
                str(out),
                "--base-url",
                "https://labor.example",
                "--feed-limit",
                "2",
            ]
        )
        feed = (out / "feed.xml").read_text(encoding="utf-8")
        assert code == EXIT_OK
        assert feed.count("<item>") == 2
        assert "https://labor.example/papers/p4.html" in feed

    def test_unwritable_output(self, write_source, make_raw_record, tmp_path):
        source = write_source([make_raw_record()])
        with patch("paper_catalog.cli.build_site", side_effect=OSError("read-only")):
            code, output = _run(["build", "-i", str(source), "-o", str(tmp_path)])
        assert code == EXIT_LOAD_FAILED
        assert "Could not write the generated site." in output


class TestBrowseCommand:
    def test_runs_app_with_loaded_store(self, write_source, make_raw_record):
        source = write_source([make_raw_record()])
        app_factory = MagicMock()
        code, _ = _run(["browse", "-i", str(source)], app_factory=app_factory)
        assert code == EXIT_OK
        store = app_factory.call_args.args[0]
        assert [r.id for r in store] == ["acemoglu-restrepo-2020"]
        app_factory.return_value.run.assert_called_once_with()

    def test_load_failure_skips_app(self, tmp_path):
        app_factory = MagicMock()
        code, _ = _run(["browse", "-i", str(tmp_path / "nope.json")], app_factory=app_factory)
        assert code == EXIT_LOAD_FAILED
        app_factory.assert_not_called()


class TestConfigCommand:
    def test_show(self):
        code, output = _run(["config", "--show"], config=SiteConfig(feed_limit=9))
        assert code == EXIT_OK
        data = json.loads(output)
        assert data["feed_limit"] == 9
        assert data["listing_escaper"] == "markup"

    def test_save_with_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        code, output = _run(["--config", str(path), "config", "--feed-limit", "42"])
        assert code == EXIT_OK
        assert "Saved config" in output
        assert json.loads(path.read_text(encoding="utf-8"))["feed_limit"] == 42

    def test_save_failure(self, tmp_path):
        with patch("paper_catalog.cli.save_config", return_value=False):
            code, output = _run(["--config", str(tmp_path / "c.json"), "config"])
        assert code == EXIT_LOAD_FAILED
        assert "Could not save config" in output


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.disable(logging.NOTSET)

    def test_debug_adds_rotating_file_handler(self, tmp_path):
        with patch("paper_catalog.cli.user_config_dir", return_value=str(tmp_path)):
            _configure_logging(True)
        handlers = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 5 * 1024 * 1024
        assert handlers[0].backupCount == 3
        assert logging.getLogger().level == logging.DEBUG
        assert (tmp_path / "debug.log").exists()

    def test_interactive_without_debug_disables_logging(self):
        _configure_logging(False, interactive=True)
        assert logging.getLogger("paper_catalog").isEnabledFor(logging.CRITICAL) is False

    def test_main_passes_interactive_flag(self, write_source, make_raw_record):
        calls = []
        console, _ = _console()
        main(
            ["--debug", "browse", "-i", str(write_source([make_raw_record()]))],
            load_config_fn=lambda _p: SiteConfig(),
            configure_logging_fn=lambda debug, **kw: calls.append((debug, kw)),
            console=console,
            app_factory=MagicMock(),
        )
        assert calls == [(True, {"interactive": True})]
