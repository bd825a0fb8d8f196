"""
ONNX 图像分类器
ONNX Image Classifier

加载 Teachable Machine 导出的图像分类模型（ONNX）及其 metadata.json
"""
import asyncio
import importlib.util
import json
import numpy as np
from pathlib import Path
from typing import List, Optional, Tuple
from .classifier_base import ClassifierBase, ModelLoaderBase
from .prediction import Prediction
from ...hardware.implementations.camera.image_processor import ImageProcessor
from ...utils.exceptions import ModelLoadError, PredictionFailure
from ...utils.logger import setup_logger

logger = setup_logger("Janken.OnnxClassifier")

DEFAULT_IMAGE_SIZE = 224


class OnnxImageClassifier(ClassifierBase):
    """基于 onnxruntime 的图像分类器"""

    def __init__(self, session, labels: List[str], image_size: int = DEFAULT_IMAGE_SIZE):
        """
        初始化分类器

        Args:
            session: onnxruntime.InferenceSession
            labels: 类别名列表（模型输出顺序）
            image_size: 元数据中的输入尺寸，模型输入形状为动态时使用
        """
        self.session = session
        self._labels = list(labels)

        input_meta = session.get_inputs()[0]
        self.input_name = input_meta.name
        # 动态维度（字符串或 -1）按 1 处理
        self.input_shape = tuple(
            dim if isinstance(dim, int) and dim > 0 else 1
            for dim in input_meta.shape
        )
        self.channels_first = len(self.input_shape) == 4 and self.input_shape[1] == 3
        self.input_size = self._input_size_from_shape() or (image_size, image_size)

        logger.info(f"分类器就绪: 类别={self._labels}, 输入形状={self.input_shape}, "
                    f"输入尺寸={self.input_size[0]}x{self.input_size[1]}")

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    def _input_size_from_shape(self) -> Optional[Tuple[int, int]]:
        """从输入形状推断 (width, height)"""
        if len(self.input_shape) != 4:
            return None
        if self.channels_first:
            h, w = self.input_shape[2], self.input_shape[3]
        else:
            h, w = self.input_shape[1], self.input_shape[2]
        if h <= 1 or w <= 1:
            return None
        return w, h

    def preprocess(self, frame: np.ndarray) -> np.ndarray:
        """
        预处理图像以适配模型输入

        Args:
            frame: 输入图像（BGR格式）

        Returns:
            np.ndarray: 形状为 [1, H, W, 3] 或 [1, 3, H, W] 的 float32 数组，取值 [-1, 1]
        """
        width, height = self.input_size
        square = ImageProcessor.fit(ImageProcessor.center_square(frame), width, height)
        normalized = ImageProcessor.to_signed_rgb(square)
        if self.channels_first:
            normalized = normalized.transpose(2, 0, 1)
        return np.expand_dims(normalized, axis=0)

    @staticmethod
    def to_probabilities(output: np.ndarray) -> np.ndarray:
        """
        将模型输出转换为概率（输出不是概率分布时应用 softmax）

        Args:
            output: 模型输出

        Returns:
            np.ndarray: 一维概率数组
        """
        scores = np.asarray(output, dtype=np.float64).reshape(-1)
        if scores.size and np.all(scores >= 0) and abs(float(scores.sum()) - 1.0) < 1e-3:
            return scores
        exp = np.exp(scores - np.max(scores))
        return exp / np.sum(exp)

    def predict_sync(self, frame: np.ndarray) -> List[Prediction]:
        """
        同步识别一帧图像

        Args:
            frame: 图像数据（BGR格式）

        Returns:
            List[Prediction]: 按模型类别顺序排列的识别结果

        Raises:
            PredictionFailure: 模型输出与类别数不一致
        """
        outputs = self.session.run(None, {self.input_name: self.preprocess(frame)})
        probabilities = self.to_probabilities(outputs[0])

        if len(probabilities) != len(self._labels):
            raise PredictionFailure(
                f"模型输出类别数 {len(probabilities)} 与元数据类别数 {len(self._labels)} 不一致"
            )

        return [Prediction(label=label, confidence=float(p))
                for label, p in zip(self._labels, probabilities)]

    async def predict(self, frame: np.ndarray) -> List[Prediction]:
        # 推理在工作线程中执行，不阻塞事件循环
        return await asyncio.to_thread(self.predict_sync, frame)


class OnnxModelLoader(ModelLoaderBase):
    """ONNX 模型加载器"""

    RUNTIME_MODULE = "onnxruntime"

    def is_runtime_available(self) -> bool:
        return importlib.util.find_spec(self.RUNTIME_MODULE) is not None

    @staticmethod
    def load_metadata(metadata_url: str) -> dict:
        """
        读取 Teachable Machine 元数据

        Args:
            metadata_url: metadata.json 路径

        Returns:
            dict: 元数据（至少包含 labels）

        Raises:
            ModelLoadError: 文件不存在或格式错误
        """
        metadata_path = Path(metadata_url)
        if not metadata_path.is_file():
            raise ModelLoadError(f"元数据文件不存在: {metadata_path}", model_path=metadata_url)

        try:
            with open(metadata_path, 'r', encoding='utf-8') as f:
                metadata = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ModelLoadError(f"元数据文件无法读取: {e}", model_path=metadata_url) from e

        if not isinstance(metadata, dict):
            raise ModelLoadError("元数据顶层必须是对象", model_path=metadata_url)

        labels = metadata.get('labels')
        if not isinstance(labels, list) or not labels or not all(isinstance(label, str) for label in labels):
            raise ModelLoadError(f"labels 必须是非空的字符串列表: {labels!r}", model_path=metadata_url)

        image_size = metadata.get('imageSize', DEFAULT_IMAGE_SIZE)
        try:
            image_size = int(image_size)
        except (TypeError, ValueError) as e:
            raise ModelLoadError(f"imageSize 不是整数: {image_size!r}", model_path=metadata_url) from e
        if image_size <= 0:
            raise ModelLoadError(f"imageSize 必须大于0: {image_size}", model_path=metadata_url)

        return dict(metadata, imageSize=image_size)

    def load_sync(self, model_url: str, metadata_url: str) -> OnnxImageClassifier:
        """同步加载模型"""
        logger.info(f"模型文件: {model_url}")
        logger.info(f"元数据文件: {metadata_url}")

        metadata = self.load_metadata(metadata_url)

        model_path = Path(model_url)
        if not model_path.is_file():
            raise ModelLoadError(f"模型文件不存在: {model_path}", model_path=model_url)

        import onnxruntime as ort

        try:
            sess_options = ort.SessionOptions()
            sess_options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
            session = ort.InferenceSession(
                str(model_path),
                sess_options=sess_options,
                providers=ort.get_available_providers()
            )
        except Exception as e:
            raise ModelLoadError(f"创建推理会话失败: {e}", model_path=model_url) from e

        return OnnxImageClassifier(
            session,
            labels=metadata['labels'],
            image_size=metadata['imageSize']
        )

    async def load(self, model_url: str, metadata_url: str) -> OnnxImageClassifier:
        return await asyncio.to_thread(self.load_sync, model_url, metadata_url)
