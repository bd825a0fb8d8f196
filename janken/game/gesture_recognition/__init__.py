"""
手势识别模块
Gesture Recognition Module
"""
from .prediction import Prediction, select_best_prediction
from .classifier_base import ClassifierBase, ModelLoaderBase
from .onnx_classifier import OnnxImageClassifier, OnnxModelLoader

__all__ = [
    'Prediction',
    'select_best_prediction',
    'ClassifierBase',
    'ModelLoaderBase',
    'OnnxImageClassifier',
    'OnnxModelLoader'
]
