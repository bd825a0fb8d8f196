"""
硬件实现模块
Hardware Implementations
"""
from .camera import USBCamera, ImageProcessor
from .display import ConsoleDisplay, OpenCVDisplay

__all__ = ['USBCamera', 'ImageProcessor', 'ConsoleDisplay', 'OpenCVDisplay']
