"""
摄像头手势猜拳游戏
Gesture Janken - rock-paper-scissors against a webcam image classifier
"""
__version__ = "0.1.0"
