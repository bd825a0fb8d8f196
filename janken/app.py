"""
应用程序主类
Application Main Class
"""
import asyncio
from pathlib import Path
from typing import Optional, Dict, Any
from .game import RoundController, GameState, RoundResult, OnnxModelLoader, AsyncioClock, FrameScheduler
from .hardware import HardwareFactory, CameraBase, DisplayBase
from .utils.logger import setup_logger, setup_logger_from_config
from .utils.config_loader import ConfigLoader, GameConfig
from .utils.error_handler import global_error_handler
from .utils.exceptions import ConfigurationException

logger = setup_logger("Janken.App")

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"


class Application:
    """应用程序主类：读取配置、创建组件、运行识别循环"""

    def __init__(self, config_path: Optional[str] = None,
                 overrides: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径（默认 config/config.yaml，不存在时使用默认配置）
            overrides: 按配置段覆盖文件中的值（来自命令行）
        """
        self.config_path = config_path
        self.overrides = overrides or {}
        self.config: Dict[str, Any] = {}
        self.game_config: Optional[GameConfig] = None

        self.camera: Optional[CameraBase] = None
        self.display: Optional[DisplayBase] = None
        self.controller: Optional[RoundController] = None

    def load_config(self):
        """
        加载配置文件并配置日志

        Raises:
            ConfigurationException: 配置文件不存在或内容不合法
        """
        path = self.config_path
        if path is None:
            if DEFAULT_CONFIG_PATH.exists():
                path = str(DEFAULT_CONFIG_PATH)
            else:
                logger.info("未找到配置文件，使用默认配置")

        if path is not None:
            try:
                self.config = ConfigLoader.load_config(path)
            except FileNotFoundError as e:
                raise ConfigurationException(str(e)) from e

        for section, values in self.overrides.items():
            merged = dict(self.config.get(section) or {})
            merged.update(values)
            self.config[section] = merged

        logging_config = ConfigLoader.get_logging_config(self.config)
        if logging_config:
            setup_logger_from_config(logging_config, "Janken")

        self.game_config = ConfigLoader.get_game_config(self.config)

    def build(self):
        """根据配置创建摄像头、显示和回合控制器"""
        game_config = self.game_config

        camera_config = dict(ConfigLoader.get_hardware_config(self.config, 'camera') or {})
        camera_type = camera_config.pop('type', 'usb_camera')
        camera_config.setdefault('size', game_config.webcam_size)
        camera_config.setdefault('flip', game_config.flip)
        self.camera = HardwareFactory.create_camera(camera_type, camera_config)

        display_config = dict(ConfigLoader.get_hardware_config(self.config, 'display') or {})
        display_type = display_config.pop('type', 'opencv')
        self.display = HardwareFactory.create_display(display_type, display_config)

        clock = AsyncioClock()
        fps = camera_config.get('fps', 30)
        self.controller = RoundController(
            model_loader=OnnxModelLoader(),
            camera=self.camera,
            display=self.display,
            config=game_config,
            clock=clock,
            scheduler=FrameScheduler(clock, fps=fps)
        )
        self.controller.on_state_changed = self._on_state_changed
        self.controller.on_round_result = self._on_round_result

    def _on_state_changed(self, state: GameState):
        logger.debug(f"游戏状态改变: {state}")

    def _on_round_result(self, result: RoundResult):
        logger.info(f"回合结果: {result.to_dict()}")

    async def run(self) -> bool:
        """
        初始化并运行识别循环

        Returns:
            bool: 是否正常结束（初始化失败返回False）
        """
        try:
            if not await self.controller.initialize():
                logger.error("初始化失败，游戏无法开始")
                await self.hold_error_screen()
                return False

            await self.controller.run()
            return True
        finally:
            self.cleanup()

    async def hold_error_screen(self):
        """保留错误提示画面，直到用户关闭窗口（非交互显示直接返回）"""
        if not self.display.interactive:
            return
        logger.info("按 q 或 ESC 关闭窗口")
        while self.display.refresh():
            await self.controller.scheduler.next_frame()

    def cleanup(self):
        """释放摄像头和窗口"""
        if self.camera is not None:
            self.camera.disconnect()
        if self.display is not None:
            self.display.close()
        logger.info("资源清理完成")

    def start(self) -> bool:
        """
        启动应用程序

        Returns:
            bool: 是否正常结束
        """
        try:
            self.load_config()
            self.build()
        except (ConfigurationException, ValueError) as e:
            global_error_handler.handle(e, "加载配置")
            return False

        return asyncio.run(self.run())
