from .hardware_factory import HardwareFactory

__all__ = ['HardwareFactory']
