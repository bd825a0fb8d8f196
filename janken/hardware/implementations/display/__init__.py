"""
显示实现模块
Display Implementation
"""
from .console_display import ConsoleDisplay
from .opencv_display import OpenCVDisplay
from ...factory.hardware_factory import HardwareFactory

HardwareFactory.register_display('opencv', OpenCVDisplay)
HardwareFactory.register_display('console', ConsoleDisplay)

__all__ = ['ConsoleDisplay', 'OpenCVDisplay']
