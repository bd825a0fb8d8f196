"""
手势枚举类型
Hand Sign Enumeration
"""
from enum import Enum
from typing import Optional


class HandSign(Enum):
    """手势类型枚举"""
    ROCK = "rock"          # 石头（グー）
    SCISSORS = "scissors"  # 剪刀（チョキ）
    PAPER = "paper"        # 布（パー）

    def __str__(self):
        return self.value

    @property
    def emoji(self) -> str:
        """手势对应的绘文字"""
        return _EMOJIS[self]

    @classmethod
    def from_label(cls, label: str) -> Optional["HandSign"]:
        """
        从模型类别名创建手势枚举

        Args:
            label: 类别名（Gu / Choki / Pa 或 rock / scissors / paper，不区分大小写）

        Returns:
            Optional[HandSign]: 手势枚举值，无法识别返回None
        """
        return _LABELS.get(label.strip().lower())


_EMOJIS = {
    HandSign.ROCK: '✊',
    HandSign.SCISSORS: '✌️',
    HandSign.PAPER: '✋',
}

_LABELS = {
    'gu': HandSign.ROCK,
    'choki': HandSign.SCISSORS,
    'pa': HandSign.PAPER,
    'rock': HandSign.ROCK,
    'scissors': HandSign.SCISSORS,
    'paper': HandSign.PAPER,
}
