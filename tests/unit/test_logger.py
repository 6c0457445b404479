"""Тесты настройки loguru."""

from goldquote.utils.logger import setup_logger


def test_setup_logger_writes_file(tmp_path) -> None:
    log = setup_logger(log_dir=str(tmp_path), level="DEBUG")
    log.debug("quote_generated side=buy")
    log.complete()

    log_file = tmp_path / "goldquote.log"
    assert log_file.exists()
    assert "quote_generated" in log_file.read_text(encoding="utf-8")

    setup_logger(log_dir=None)


def test_setup_logger_without_file(tmp_path) -> None:
    setup_logger(log_dir=None)
    assert list(tmp_path.iterdir()) == []
