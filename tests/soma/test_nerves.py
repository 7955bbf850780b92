"""
TESTS/SOMA/TEST_NERVES.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for logging sinks and log masking.
══════════════════════════════════════════════════════════════════════════════
"""

import json
import uuid

from psyche.soma.nerves import JSONL_LOGS, logger, mask_text


class TestMasking:
    def test_long_text(self):
        assert mask_text("こんにちは世界") == "こんに***"

    def test_short_text(self):
        assert mask_text("abc") == "***"
        assert mask_text("") == "***"


class TestJsonlSink:
    def _entries(self, name):
        lines = JSONL_LOGS[name].read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines]

    def test_info_goes_to_mind_log(self):
        marker = f"probe-{uuid.uuid4()}"
        logger.info(marker)
        assert any(e["message"] == marker for e in self._entries("mind"))

    def test_warning_goes_to_alerts(self):
        marker = f"alert-{uuid.uuid4()}"
        logger.warning(marker)
        entries = [e for e in self._entries("alerts") if e["message"] == marker]
        assert entries[0]["level"] == "WARNING"
