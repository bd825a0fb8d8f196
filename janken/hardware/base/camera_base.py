"""
摄像头抽象基类
Camera Base Class

同步接口由具体摄像头实现；回合控制器只使用 setup()/capture() 两个异步入口，
它们把阻塞的设备读写放到工作线程
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Optional, Tuple
import numpy as np


class CameraBase(ABC):
    """输出正方形预览帧的摄像头"""

    @abstractmethod
    def connect(self) -> bool:
        """打开设备，无法打开或没有权限时返回False"""

    @abstractmethod
    def disconnect(self) -> bool:
        """释放设备"""

    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    def capture_frame(self) -> Optional[np.ndarray]:
        """
        读取一帧（BGR，已裁剪为正方形）

        Returns:
            Optional[np.ndarray]: 图像，读取失败或未连接时为None
        """

    @abstractmethod
    def get_resolution(self) -> Tuple[int, int]:
        """输出帧的 (width, height)"""

    async def setup(self) -> bool:
        return await asyncio.to_thread(self.connect)

    async def capture(self) -> Optional[np.ndarray]:
        return await asyncio.to_thread(self.capture_frame)

    def get_status(self) -> dict:
        width, height = self.get_resolution()
        return {
            "type": type(self).__name__,
            "connected": self.is_connected(),
            "frame_size": f"{width}x{height}",
        }
