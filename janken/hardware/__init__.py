"""
硬件抽象层模块
Hardware Abstraction Layer
"""
from .base import CameraBase, DisplayBase
from .factory.hardware_factory import HardwareFactory
from .implementations import USBCamera, ImageProcessor, ConsoleDisplay, OpenCVDisplay

__all__ = [
    'CameraBase',
    'DisplayBase',
    'HardwareFactory',
    'USBCamera',
    'ImageProcessor',
    'ConsoleDisplay',
    'OpenCVDisplay'
]
