"""
自定义异常类
Custom Exception Classes
"""
from typing import Optional


class SetupFailure(Exception):
    """启动准备失败基类（推理运行时、模型或摄像头不可用），不重试"""
    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.component = component
        self.message = message


class RuntimeTimeoutError(SetupFailure):
    """推理运行时在超时时间内未就绪"""
    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message, component="runtime")
        self.timeout = timeout


class ModelLoadError(SetupFailure):
    """模型加载失败"""
    def __init__(self, message: str, model_path: Optional[str] = None):
        super().__init__(message, component="model")
        self.model_path = model_path


class CameraSetupError(SetupFailure):
    """摄像头打开失败（设备不存在或无权限）"""
    def __init__(self, message: str, device_id: Optional[int] = None):
        super().__init__(message, component="camera")
        self.device_id = device_id


class PredictionFailure(Exception):
    """手势识别结果无效（空列表或未知类别）"""
    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label
        self.message = message


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message
