"""
错误处理工具模块
Error Handler Utility Module
"""
import traceback
from typing import Optional, Callable, Dict
from .exceptions import (
    SetupFailure, RuntimeTimeoutError, ModelLoadError, CameraSetupError,
    PredictionFailure, ConfigurationException
)
from .logger import setup_logger

logger = setup_logger("Janken.ErrorHandler")

Handler = Callable[[Exception, Optional[str]], None]


class ErrorHandler:
    """
    按异常类型分派的错误处理器

    查找顺序沿异常类的 MRO 进行，所以为子类注册的处理函数优先于基类
    """

    def __init__(self):
        self.error_callbacks: Dict[type, Handler] = {
            RuntimeTimeoutError: self._log_runtime_timeout,
            ModelLoadError: self._log_model_error,
            CameraSetupError: self._log_camera_error,
            SetupFailure: self._log_setup_error,
            PredictionFailure: self._log_prediction_error,
            ConfigurationException: self._log_config_error,
        }
        self.handled_count = 0

    def register_handler(self, exception_type: type, handler: Handler):
        """
        注册或替换某个异常类型的处理函数

        Args:
            exception_type: 异常类型
            handler: 签名为 handler(exception, context)
        """
        self.error_callbacks[exception_type] = handler
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def find_handler(self, exception: Exception) -> Optional[Handler]:
        for exc_type in type(exception).__mro__:
            handler = self.error_callbacks.get(exc_type)
            if handler is not None:
                return handler
        return None

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        处理异常

        Args:
            exception: 异常对象
            context: 发生异常时正在做的事

        Returns:
            bool: 是否有对应的处理函数并执行成功
        """
        where = f" (上下文: {context})" if context else ""
        logger.error(f"{type(exception).__name__}{where}: {exception}")

        handler = self.find_handler(exception)
        if handler is None:
            logger.error(f"没有对应的处理函数: {type(exception).__name__}")
            logger.debug("".join(traceback.format_exception(
                type(exception), exception, exception.__traceback__)))
            return False

        try:
            handler(exception, context)
        except Exception as e:
            logger.error(f"错误处理函数执行异常: {e}", exc_info=True)
            return False

        self.handled_count += 1
        return True

    @staticmethod
    def _log_runtime_timeout(exception: RuntimeTimeoutError, context):
        logger.error(f"推理运行时 {exception.timeout}s 内未就绪，请确认已安装 onnxruntime")

    @staticmethod
    def _log_model_error(exception: ModelLoadError, context):
        logger.error(f"模型无法加载 [{exception.model_path}]: {exception.message}")

    @staticmethod
    def _log_camera_error(exception: CameraSetupError, context):
        logger.error(f"摄像头 {exception.device_id} 不可用，请检查连接和访问权限")

    @staticmethod
    def _log_setup_error(exception: SetupFailure, context):
        logger.error(f"准备阶段失败 [{exception.component}]: {exception.message}")

    @staticmethod
    def _log_prediction_error(exception: PredictionFailure, context):
        logger.error(f"识别结果无效 [标签: {exception.label}]: {exception.message}")

    @staticmethod
    def _log_config_error(exception: ConfigurationException, context):
        key = exception.config_key or "-"
        logger.error(f"配置项 {key} 有误: {exception.message}")


# 全局错误处理器实例
global_error_handler = ErrorHandler()
