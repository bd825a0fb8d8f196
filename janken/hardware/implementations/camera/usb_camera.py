"""
USB摄像头实现
USB Camera Implementation
"""
import cv2
import numpy as np
from typing import Optional, Tuple
from .image_processor import ImageProcessor
from ...base.camera_base import CameraBase
from ....utils.logger import setup_logger

logger = setup_logger("Janken.USBCamera")


class USBCamera(CameraBase):
    """
    OpenCV 网络摄像头，输出 size x size 的中心正方形（默认镜像，像照镜子一样）

    连续读帧失败达到 max_read_failures 次后视为设备断开
    """

    def __init__(self, device_id: int = 0, size: int = 300, flip: bool = True,
                 fps: int = 30, backend: Optional[int] = None, max_read_failures: int = 30):
        """
        Args:
            device_id: 摄像头设备ID
            size: 输出正方形边长（像素）
            flip: 是否水平镜像
            fps: 请求的帧率
            backend: OpenCV后端（可选，如cv2.CAP_V4L2）
            max_read_failures: 连续读帧失败上限
        """
        self.device_id = device_id
        self.size = size
        self.flip = flip
        self.fps = fps
        self.backend = backend
        self.max_read_failures = max_read_failures

        self._cap: Optional[cv2.VideoCapture] = None
        self._read_failures = 0

    def _open_capture(self) -> cv2.VideoCapture:
        if self.backend is None:
            return cv2.VideoCapture(self.device_id)
        return cv2.VideoCapture(self.device_id, self.backend)

    def connect(self) -> bool:
        if self._cap is not None:
            return True

        try:
            cap = self._open_capture()
            if not cap.isOpened():
                logger.error(f"无法打开摄像头设备 {self.device_id}（设备不存在或没有访问权限）")
                cap.release()
                return False

            cap.set(cv2.CAP_PROP_FPS, self.fps)
            ok, frame = cap.read()
            if not ok or frame is None:
                logger.error(f"摄像头 {self.device_id} 已打开但读不到图像")
                cap.release()
                return False
        except cv2.error as e:
            logger.error(f"打开摄像头 {self.device_id} 时 OpenCV 报错: {e}")
            return False

        self._cap = cap
        self._read_failures = 0
        height, width = frame.shape[:2]
        logger.info(f"摄像头 {self.device_id} 就绪: 原始 {width}x{height} → 预览 {self.size}x{self.size}")
        return True

    def disconnect(self) -> bool:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info(f"摄像头 {self.device_id} 已释放")
        return True

    def is_connected(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    def capture_frame(self) -> Optional[np.ndarray]:
        if not self.is_connected():
            return None

        ok, frame = self._cap.read()
        if not ok or frame is None:
            self._read_failures += 1
            if self._read_failures >= self.max_read_failures:
                logger.error(f"摄像头 {self.device_id} 连续 {self._read_failures} 次读帧失败，断开连接")
                self.disconnect()
            return None

        self._read_failures = 0
        return ImageProcessor.to_square(frame, self.size, mirror=self.flip)

    def get_resolution(self) -> Tuple[int, int]:
        return self.size, self.size
