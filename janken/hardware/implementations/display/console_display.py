"""
终端显示实现
Console Display Implementation

在终端逐行输出游戏画面，手势用绘文字表示，没有摄像头预览
"""
import sys
from typing import Optional, List, TextIO
import numpy as np
from ...base.display_base import (
    DisplayBase, RESULT_TEXTS, NEUTRAL_RESULT_TEXT, PLAYER_PLACEHOLDER, COMPUTER_PLACEHOLDER
)
from ....utils.logger import setup_logger

logger = setup_logger("Janken.ConsoleDisplay")


class ConsoleDisplay(DisplayBase):
    """终端输出，画面内容有变化时才打印新的一行"""

    def __init__(self, stream: Optional[TextIO] = None, show_debug: bool = True,
                 window_name: Optional[str] = None):
        """
        Args:
            stream: 输出流（默认标准输出）
            show_debug: 是否打印调试标签
            window_name: 每行的前缀（与窗口显示共用同一配置项）
        """
        self.stream = stream or sys.stdout
        self.prefix = f"[{window_name}] " if window_name else ""
        self.show_debug = show_debug

        self.status = ""
        self.player = None
        self.computer = None
        self.outcome = None
        self.debug_lines: List[str] = []
        self._last_line: Optional[str] = None

    def set_status(self, text: str):
        self.status = text

    def set_hands(self, player, computer):
        self.player = player
        self.computer = computer

    def set_result(self, outcome):
        self.outcome = outcome

    def mount_preview(self, width: int, height: int):
        logger.debug("终端显示不支持摄像头预览")

    def update_preview(self, frame: np.ndarray):
        pass

    def set_debug_labels(self, lines: List[str]):
        self.debug_lines = list(lines)

    def render(self) -> str:
        """
        生成当前画面的一行文本

        Returns:
            str: 如 "Show your next hand! | [✊] You win! ✌️"，胜者手势加方括号
        """
        player = self.player.emoji if self.player is not None else PLAYER_PLACEHOLDER
        computer = self.computer.emoji if self.computer is not None else COMPUTER_PLACEHOLDER
        if self.outcome is None:
            result = NEUTRAL_RESULT_TEXT
        else:
            result = RESULT_TEXTS[self.outcome.value]
            if self.outcome.value == 'win':
                player = f"[{player}]"
            elif self.outcome.value == 'lose':
                computer = f"[{computer}]"

        line = f"{self.prefix}{self.status} | {player} {result} {computer}"
        if self.show_debug and self.debug_lines:
            line += "  (" + ", ".join(self.debug_lines) + ")"
        return line

    def refresh(self) -> bool:
        line = self.render()
        if line != self._last_line:
            self.stream.write(line + "\n")
            self.stream.flush()
            self._last_line = line
        return True
