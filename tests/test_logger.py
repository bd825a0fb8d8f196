"""
日志配置测试
Logger Setup Tests
"""
import logging

from janken.utils.logger import get_log_level, setup_logger, setup_logger_from_config


def test_get_log_level():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level(" Warning ") == logging.WARNING
    assert get_log_level(logging.ERROR) == logging.ERROR
    assert get_log_level("verbose") == logging.INFO


def test_module_loggers_share_root_handlers():
    child = setup_logger("Janken.SomeModule")
    root = logging.getLogger("Janken")

    assert child.handlers == []
    assert child.propagate
    assert root.handlers


def test_config_adds_file_handler_once(tmp_path):
    log_file = tmp_path / "logs" / "janken.log"
    root = logging.getLogger("Janken")
    before = list(root.handlers)
    try:
        setup_logger_from_config({'level': 'DEBUG', 'file': str(log_file)})
        setup_logger_from_config({'level': 'DEBUG', 'file': str(log_file)})

        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert root.level == logging.DEBUG

        setup_logger("Janken.Test").info("写入日志文件")
        added[0].flush()
        assert "写入日志文件" in log_file.read_text(encoding='utf-8')
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
            handler.close()
        setup_logger("Janken", level=logging.INFO)
