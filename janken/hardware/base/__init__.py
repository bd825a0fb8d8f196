"""
硬件抽象基类
Hardware Base Classes
"""
from .camera_base import CameraBase
from .display_base import DisplayBase

__all__ = ['CameraBase', 'DisplayBase']
