"""Unit tests for loguru sink configuration."""

from __future__ import annotations

import json

from loguru import logger

import config
from backend.app import LOG_FILE_NAME, configure_logging
from config.settings import Settings


def test_file_sink_writes_under_log_dir(tmp_path):
    s = Settings(data_dir=tmp_path, log_level="INFO", log_to_file=True)
    try:
        configure_logging(s)
        logger.info("catalog loaded")
    finally:
        configure_logging(config.settings)

    log_file = tmp_path / "logs" / LOG_FILE_NAME
    assert "catalog loaded" in log_file.read_text(encoding="utf-8")


def test_file_sink_serializes_json(tmp_path):
    s = Settings(data_dir=tmp_path, log_level="INFO", log_format="json", log_to_file=True)
    try:
        configure_logging(s)
        logger.warning("slow query")
    finally:
        configure_logging(config.settings)

    line = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8").splitlines()[0]
    assert json.loads(line)["record"]["message"] == "slow query"


def test_no_file_sink_by_default(tmp_path):
    s = Settings(data_dir=tmp_path)
    assert s.log_to_file is False
    try:
        configure_logging(s)
        logger.error("not written to disk")
    finally:
        configure_logging(config.settings)

    assert not (tmp_path / "logs").exists()
