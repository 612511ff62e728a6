"""
Tests for shared utilities.
"""

import json
import logging

from src.utils import atomic_write_json, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_single_handler_per_logger(self):
        logger = setup_logging("tests.utils.single")
        setup_logging("tests.utils.single")
        assert len(logger.handlers) == 1

    def test_level_applied(self):
        logger = setup_logging("tests.utils.level", level=logging.DEBUG)
        assert logger.level == logging.DEBUG


class TestAtomicWriteJson:
    """Tests for atomic_write_json function."""

    def test_two_space_indent(self, tmp_path):
        path = tmp_path / "snapshot.json"
        atomic_write_json({"players": [{"id": "1"}]}, path)
        assert path.read_text(encoding="utf-8") == '{\n  "players": [\n    {\n      "id": "1"\n    }\n  ]\n}\n'

    def test_overwrites_previous_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        atomic_write_json({"run": 1}, path)
        atomic_write_json({"run": 2}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"run": 2}
        assert list(tmp_path.iterdir()) == [path]

    def test_creates_parent_folder(self, tmp_path):
        path = tmp_path / "data" / "nested" / "snapshot.json"
        atomic_write_json([], path)
        assert path.exists()

    def test_unicode_names_kept(self, tmp_path):
        path = tmp_path / "snapshot.json"
        atomic_write_json({"name": "ＡＱＵＡ"}, path)
        assert "ＡＱＵＡ" in path.read_text(encoding="utf-8")
