"""
Tests for the BumpBoard command line
"""

import argparse
import logging

from bumpboard.__main__ import run_config, setup_logging


def config_args(path, show=False, validate=False, init=False):
    return argparse.Namespace(config=path, show=show, validate=validate, init=init)


class TestConfigCommand:
    """Tests for `bumpboard config`."""

    def setup_method(self):
        self.logger = logging.getLogger("bumpboard.test")

    def test_init_writes_file(self, tmp_path, capsys):
        path = tmp_path / "config.toml"

        assert run_config(config_args(path, init=True), self.logger) == 0
        assert path.exists()
        assert "Wrote default configuration" in capsys.readouterr().out

    def test_init_refuses_existing(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("")

        assert run_config(config_args(path, init=True), self.logger) == 1

    def test_validate_default(self, tmp_path, capsys):
        path = tmp_path / "config.toml"
        run_config(config_args(path, init=True), self.logger)

        assert run_config(config_args(path, validate=True), self.logger) == 0
        assert "Configuration OK" in capsys.readouterr().out

    def test_validate_reports_errors(self, tmp_path, capsys):
        path = tmp_path / "config.toml"
        path.write_text('[web]\nport = 0\n')

        assert run_config(config_args(path, validate=True), self.logger) == 1
        assert "  - " in capsys.readouterr().out

    def test_show(self, tmp_path, capsys):
        path = tmp_path / "missing.toml"

        assert run_config(config_args(path, show=True), self.logger) == 0
        assert "[forum]" in capsys.readouterr().out


class TestSetupLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "board.log"
        setup_logging("DEBUG", str(log_file), max_size_mb=1, backup_count=1)

        logging.getLogger("bumpboard").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in log_file.read_text()
        setup_logging("INFO")
