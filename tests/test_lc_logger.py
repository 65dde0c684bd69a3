import re
import threading

import pytest

from missilesim.lc_logger import LcLogger

LINE = re.compile(r"^\[[^\]]+\] (.*)$")


def test_logs_timestamped_lines(tmp_path):
    path = tmp_path / "lc_log.txt"
    with LcLogger() as logger:
        logger.start_logging(path)
        logger.log_message("LC started")
        logger.log_message("second")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [LINE.match(line).group(1) for line in lines] == ["LC started", "second"]


def test_appends_to_existing_file(tmp_path):
    path = tmp_path / "log.txt"
    for text in ("one", "two"):
        logger = LcLogger()
        logger.start_logging(path)
        logger.log_message(text)
        logger.stop_logging()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [LINE.match(line).group(1) for line in lines] == ["one", "two"]


def test_nothing_logged_when_closed(tmp_path):
    path = tmp_path / "log.txt"
    logger = LcLogger()
    logger.log_message("ignored")
    logger.start_logging(path)
    logger.log_message("kept")
    logger.stop_logging()
    logger.log_message("ignored too")
    assert not logger.is_open
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [LINE.match(line).group(1) for line in lines] == ["kept"]


def test_start_logging_failure(tmp_path):
    logger = LcLogger()
    with pytest.raises(OSError):
        logger.start_logging(tmp_path)
    assert not logger.is_open


def test_concurrent_logging_keeps_lines_whole(tmp_path):
    path = tmp_path / "log.txt"
    logger = LcLogger()
    logger.start_logging(path)

    def worker(n):
        for i in range(50):
            logger.log_message(f"w{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    logger.stop_logging()
    messages = [LINE.match(line).group(1) for line in path.read_text(encoding="utf-8").splitlines()]
    expected = {f"w{n}-{i}" for n in range(4) for i in range(50)}
    assert len(messages) == len(expected)
    assert set(messages) == expected