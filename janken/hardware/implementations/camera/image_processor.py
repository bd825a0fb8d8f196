"""
图像预处理工具模块
Image Processing Utility Module
"""
import cv2
import numpy as np


class ImageProcessor:
    """摄像头帧和模型输入共用的图像处理"""

    @staticmethod
    def crop_center(image: np.ndarray, width: int, height: int) -> np.ndarray:
        """
        以图像中心为基准裁剪（超出原图的部分按原图大小截断）

        Args:
            image: 输入图像
            width: 裁剪宽度
            height: 裁剪高度

        Returns:
            np.ndarray: 裁剪结果（原图视图，不复制）
        """
        h, w = image.shape[:2]
        left = max(0, (w - width) // 2)
        top = max(0, (h - height) // 2)
        return image[top:top + height, left:left + width]

    @staticmethod
    def center_square(image: np.ndarray) -> np.ndarray:
        side = min(image.shape[:2])
        return ImageProcessor.crop_center(image, side, side)

    @staticmethod
    def fit(image: np.ndarray, width: int, height: int) -> np.ndarray:
        """缩放到 width x height，尺寸已相同时直接返回"""
        if image.shape[1] == width and image.shape[0] == height:
            return image
        interpolation = cv2.INTER_AREA if image.shape[1] > width else cv2.INTER_LINEAR
        return cv2.resize(image, (width, height), interpolation=interpolation)

    @staticmethod
    def to_square(image: np.ndarray, size: int, mirror: bool = False) -> np.ndarray:
        """
        取中心正方形并缩放为 size x size

        Args:
            image: 输入图像
            size: 边长
            mirror: 是否左右镜像

        Returns:
            np.ndarray: 预览用正方形图像
        """
        square = ImageProcessor.fit(ImageProcessor.center_square(image), size, size)
        return cv2.flip(square, 1) if mirror else square

    @staticmethod
    def to_signed_rgb(image: np.ndarray) -> np.ndarray:
        """BGR uint8 → RGB float32，取值缩放到 [-1, 1]"""
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        return rgb.astype(np.float32) / 127.5 - 1.0
