"""
图像分类器抽象基类
Image Classifier Base Classes
"""
from abc import ABC, abstractmethod
from typing import List
import numpy as np
from .prediction import Prediction


class ClassifierBase(ABC):
    """图像分类器抽象基类"""

    @property
    @abstractmethod
    def labels(self) -> List[str]:
        """类别名列表（模型输出顺序）"""
        pass

    def get_total_classes(self) -> int:
        """获取类别数"""
        return len(self.labels)

    @abstractmethod
    async def predict(self, frame: np.ndarray) -> List[Prediction]:
        """
        识别一帧图像

        Args:
            frame: 图像数据（BGR格式）

        Returns:
            List[Prediction]: 按模型类别顺序排列的识别结果
        """
        pass


class ModelLoaderBase(ABC):
    """模型加载器抽象基类"""

    @abstractmethod
    def is_runtime_available(self) -> bool:
        """推理运行时是否可用"""
        pass

    @abstractmethod
    async def load(self, model_url: str, metadata_url: str) -> ClassifierBase:
        """
        加载模型

        Args:
            model_url: 模型文件路径
            metadata_url: 元数据文件路径

        Returns:
            ClassifierBase: 分类器

        Raises:
            ModelLoadError: 模型加载失败
        """
        pass
