"""
日志工具模块
Logger Utility Module

所有模块日志记录器都挂在 "Janken" 之下，只有顶层记录器持有输出处理器，
子记录器通过传播输出，因此调整顶层级别即可控制整个程序
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any, Union

ROOT_LOGGER_NAME = "Janken"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_LEVELS = {
    name: getattr(logging, name)
    for name in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
}


def get_log_level(level: Union[str, int]) -> int:
    """
    解析日志级别

    Args:
        level: 级别名称（DEBUG, INFO, WARNING, ERROR, CRITICAL）或数值

    Returns:
        int: 日志级别，无法识别时为 INFO
    """
    if isinstance(level, int):
        return level
    return _LEVELS.get(str(level).strip().upper(), logging.INFO)


def _attach_handler(logger: logging.Logger, handler: logging.Handler,
                    level: int, formatter: logging.Formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    获取日志记录器

    子记录器（如 "Janken.App"）不添加处理器，交给顶层记录器输出；
    顶层记录器首次调用时添加控制台处理器，再次调用时更新级别并按需追加文件处理器

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径（可选）
        level: 日志级别
        format_string: 日志格式字符串（可选）

    Returns:
        logging.Logger: 日志记录器
    """
    if name != ROOT_LOGGER_NAME and name.startswith(ROOT_LOGGER_NAME + "."):
        _ensure_root()
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    if not logger.handlers:
        _attach_handler(logger, logging.StreamHandler(sys.stdout), level, formatter)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)
            if format_string:
                handler.setFormatter(formatter)

    if log_file and not _has_file_handler(logger, log_file):
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach_handler(logger, logging.FileHandler(log_path, encoding='utf-8'), level, formatter)

    return logger


def _ensure_root():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        setup_logger(ROOT_LOGGER_NAME)


def _has_file_handler(logger: logging.Logger, log_file: str) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target
        for handler in logger.handlers
    )


def setup_logger_from_config(config: Dict[str, Any], name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    按配置文件的 logging 段设置日志

    Args:
        config: 配置字典（level、file、format 键）
        name: 日志记录器名称

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    return setup_logger(
        name=name,
        log_file=config.get('file'),
        level=get_log_level(config.get('level', 'INFO')),
        format_string=config.get('format')
    )
