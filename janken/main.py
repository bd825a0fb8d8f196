"""
猜拳游戏主程序入口
Gesture Janken Main Entry
"""
import sys
import argparse
from typing import Dict, Any
from . import __version__
from .app import Application
from .utils.logger import setup_logger

logger = setup_logger("Janken.Main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='janken', description='摄像头手势猜拳游戏')
    parser.add_argument('--config', type=str, default=None,
                        help='配置文件路径（默认: config/config.yaml）')
    parser.add_argument('--device', type=int, default=None,
                        help='摄像头设备ID，覆盖 camera.device_id')
    parser.add_argument('--debug-labels', action='store_true',
                        help='在画面中显示每个类别的置信度')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='日志级别，覆盖 logging.level')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    """把命令行参数转换为按配置段组织的覆盖项"""
    overrides: Dict[str, Dict[str, Any]] = {}
    if args.device is not None:
        overrides.setdefault('camera', {})['device_id'] = args.device
    if args.debug_labels:
        overrides.setdefault('game', {})['show_debug_labels'] = True
    if args.log_level:
        overrides.setdefault('logging', {})['level'] = args.log_level
    return overrides


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger.info(f"猜拳游戏 {__version__} 启动")

    app = Application(config_path=args.config, overrides=overrides_from_args(args))
    try:
        if not app.start():
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("用户中断程序")
    finally:
        logger.info("程序退出")


if __name__ == "__main__":
    main()
