"""
Tests for the structured logging helpers.
"""

import json
import logging

from pylogistic.utils.logging import PACKAGE_LOGGER, get_logger, json_log


class TestJsonLog:

    def test_payload(self):
        payload = json.loads(json_log("training started", n=4, steps=2000))
        assert payload["msg"] == "training started"
        assert payload["n"] == 4
        assert payload["steps"] == 2000
        assert "ts" in payload

    def test_non_json_values_rendered_as_strings(self, tmp_path):
        payload = json.loads(json_log("dataset loaded", path=tmp_path))
        assert payload["path"] == str(tmp_path)


class TestGetLogger:

    def test_children_share_one_package_handler(self):
        get_logger("pylogistic.cli")
        get_logger("pylogistic.logistic.solvers")
        package = logging.getLogger(PACKAGE_LOGGER)
        assert len(package.handlers) == 1

    def test_logs_go_to_stderr_not_stdout(self, capsys):
        log = get_logger("pylogistic.tests")
        log.info(json_log("dataset loaded", n=3))
        captured = capsys.readouterr()
        assert '"msg": "dataset loaded"' in captured.err
        assert captured.out == ""
