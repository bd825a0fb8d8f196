"""
硬件工厂类
Hardware Factory Class

配置文件中的 camera.type / display.type 通过这里映射到实现类
"""
from typing import Dict, Any, List, Type
from ..base.camera_base import CameraBase
from ..base.display_base import DisplayBase
from ...utils.exceptions import ConfigurationException

_BASES: Dict[str, type] = {
    'camera': CameraBase,
    'display': DisplayBase,
}


class HardwareFactory:
    """按名称登记和创建摄像头、显示实现"""

    _registry: Dict[str, Dict[str, type]] = {kind: {} for kind in _BASES}

    @classmethod
    def _register(cls, kind: str, name: str, impl: type):
        base = _BASES[kind]
        if not (isinstance(impl, type) and issubclass(impl, base)):
            raise TypeError(f"{impl} must be a subclass of {base.__name__}")
        cls._registry[kind][name.lower()] = impl

    @classmethod
    def _create(cls, kind: str, name: str, config: Dict[str, Any]):
        impl = cls._registry[kind].get(name.lower())
        if impl is None:
            known = ", ".join(sorted(cls._registry[kind])) or "-"
            raise ValueError(f"Unknown {kind}: {name} (registered: {known})")
        try:
            return impl(**config)
        except TypeError as e:
            raise ConfigurationException(f"{kind} '{name}' 参数错误: {e}", config_key=kind) from e

    @classmethod
    def register_camera(cls, name: str, camera_class: Type[CameraBase]):
        cls._register('camera', name, camera_class)

    @classmethod
    def register_display(cls, name: str, display_class: Type[DisplayBase]):
        cls._register('display', name, display_class)

    @classmethod
    def create_camera(cls, name: str, config: Dict[str, Any]) -> CameraBase:
        """
        创建摄像头实例

        Args:
            name: 登记名（不区分大小写）
            config: 构造参数

        Returns:
            CameraBase: 摄像头实例

        Raises:
            ValueError: 未登记的名称
            ConfigurationException: 构造参数与实现类不符
        """
        return cls._create('camera', name, config)

    @classmethod
    def create_display(cls, name: str, config: Dict[str, Any]) -> DisplayBase:
        """同 create_camera，用于显示实现"""
        return cls._create('display', name, config)

    @classmethod
    def list_cameras(cls) -> List[str]:
        return sorted(cls._registry['camera'])

    @classmethod
    def list_displays(cls) -> List[str]:
        return sorted(cls._registry['display'])
