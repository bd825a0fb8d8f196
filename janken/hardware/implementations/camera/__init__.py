"""
摄像头实现
Camera Implementations
"""
from .image_processor import ImageProcessor
from .usb_camera import USBCamera
from ...factory.hardware_factory import HardwareFactory

for _name in ('usb_camera', 'webcam'):
    HardwareFactory.register_camera(_name, USBCamera)

__all__ = ['ImageProcessor', 'USBCamera']
