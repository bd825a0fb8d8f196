"""
配置加载工具模块
Configuration Loader Utility
"""
import yaml
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, Optional
from .exceptions import ConfigurationException
from .logger import setup_logger

logger = setup_logger("Janken.ConfigLoader")


@dataclass
class GameConfig:
    """游戏配置（对应配置文件中的 game 段）"""
    model_base_path: str = "./my_model/"
    model_file: str = "model.onnx"
    metadata_file: str = "metadata.json"
    cooldown_seconds: float = 3
    confidence_threshold: float = 0.95
    webcam_size: int = 300
    flip: bool = True
    library_timeout: float = 10.0
    library_poll_interval: float = 0.1
    show_debug_labels: bool = False

    def __post_init__(self):
        self.validate()

    @property
    def model_url(self) -> str:
        """模型文件路径"""
        return str(Path(self.model_base_path) / self.model_file)

    @property
    def metadata_url(self) -> str:
        """元数据文件路径"""
        return str(Path(self.model_base_path) / self.metadata_file)

    def validate(self):
        """
        检查配置值是否合法

        Raises:
            ConfigurationException: 配置值不合法
        """
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ConfigurationException(
                f"置信度阈值必须在 [0, 1] 之间: {self.confidence_threshold}",
                config_key="confidence_threshold"
            )
        for key in ("cooldown_seconds", "library_timeout"):
            if getattr(self, key) < 0:
                raise ConfigurationException(f"{key} 不能为负数: {getattr(self, key)}", config_key=key)
        if self.library_poll_interval <= 0:
            raise ConfigurationException(
                f"library_poll_interval 必须大于0: {self.library_poll_interval}",
                config_key="library_poll_interval"
            )
        if self.webcam_size <= 0:
            raise ConfigurationException(f"webcam_size 必须大于0: {self.webcam_size}", config_key="webcam_size")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "GameConfig":
        """
        从配置字典创建，忽略未知键

        Args:
            config: game 段配置字典

        Returns:
            GameConfig: 游戏配置
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            logger.warning(f"忽略未知的游戏配置项: {sorted(unknown)}")
        try:
            return cls(**{k: v for k, v in config.items() if k in known})
        except TypeError as e:
            raise ConfigurationException(f"游戏配置类型错误: {e}") from e


class ConfigLoader:
    """
    读取 YAML 配置文件

    文件结构为顶层映射，包含 game、camera、display、logging 四段，任何一段都可省略
    """

    SECTIONS = ('game', 'camera', 'display', 'logging')

    @staticmethod
    def load_config(config_path: str) -> Dict[str, Any]:
        """
        从YAML文件加载配置

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 配置字典，空文件返回 {}

        Raises:
            FileNotFoundError: 配置文件不存在
            ConfigurationException: 不是合法的 YAML 或顶层不是映射
        """
        config_file = Path(config_path)
        if not config_file.is_file():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"YAML解析错误: {e}") from e

        if config is None:
            logger.warning(f"配置文件为空，使用默认配置: {config_path}")
            return {}
        if not isinstance(config, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {config_path}")

        unknown = set(config) - set(ConfigLoader.SECTIONS)
        if unknown:
            logger.warning(f"忽略未知的配置段: {sorted(unknown)}")
        logger.info(f"已加载配置文件: {config_path}")
        return config

    @staticmethod
    def _section(config: Dict[str, Any], name: str) -> Optional[Dict[str, Any]]:
        section = config.get(name)
        if section is not None and not isinstance(section, dict):
            raise ConfigurationException(f"配置段 {name} 必须是映射", config_key=name)
        return section

    @staticmethod
    def get_hardware_config(config: Dict[str, Any], hardware_type: str) -> Optional[Dict[str, Any]]:
        """
        Args:
            config: 完整配置字典
            hardware_type: 'camera' 或 'display'

        Returns:
            Optional[Dict[str, Any]]: 该段配置，未配置返回None
        """
        return ConfigLoader._section(config, hardware_type)

    @staticmethod
    def get_game_config(config: Dict[str, Any]) -> GameConfig:
        return GameConfig.from_dict(ConfigLoader._section(config, 'game') or {})

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        return ConfigLoader._section(config, 'logging') or {}
