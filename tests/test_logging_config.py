"""Tests for the loguru file sink."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from loguru import logger

from tocker.logging_config import LOG_FILENAME, setup_logging


class LoggingConfigTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger.remove()

    def test_records_go_to_the_log_file_at_or_above_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = setup_logging("WARNING", log_dir=Path(tmp) / "logs")
            logger.info("quiet message")
            logger.warning("loud message")
            logger.remove()

            self.assertEqual(log_path.name, LOG_FILENAME)
            contents = log_path.read_text(encoding="utf-8")

        self.assertIn("loud message", contents)
        self.assertNotIn("quiet message", contents)


if __name__ == "__main__":
    unittest.main()
