"""
显示输出抽象基类
Display Base Class
"""
from abc import ABC, abstractmethod
from typing import Optional, List, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from ...game.game_logic import HandSign, RoundOutcome

# 回合结果文本与样式，key 为 RoundOutcome.value
RESULT_TEXTS = {
    'win': "You win!",
    'lose': "You lose...",
    'draw': "Draw!",
}
NEUTRAL_RESULT_TEXT = "VS"

# 未出手时的占位绘文字
PLAYER_PLACEHOLDER = "👤"
COMPUTER_PLACEHOLDER = "💻"


class DisplayBase(ABC):
    """显示输出抽象基类：状态栏、玩家/电脑手势、结果文本、摄像头预览、调试标签"""

    @property
    def interactive(self) -> bool:
        """是否为需要用户关闭的窗口"""
        return False

    @abstractmethod
    def set_status(self, text: str):
        """设置状态栏文本"""
        pass

    @abstractmethod
    def set_hands(self, player: Optional["HandSign"], computer: Optional["HandSign"]):
        """
        设置双方手势

        Args:
            player: 玩家手势，None 显示占位符
            computer: 电脑手势，None 显示占位符
        """
        pass

    @abstractmethod
    def set_result(self, outcome: Optional["RoundOutcome"]):
        """
        设置回合结果（文本、样式、胜者高亮）

        Args:
            outcome: 回合结果，None 恢复为中立的 "VS"
        """
        pass

    @abstractmethod
    def mount_preview(self, width: int, height: int):
        """挂载摄像头预览区域"""
        pass

    @abstractmethod
    def update_preview(self, frame: np.ndarray):
        """更新摄像头预览"""
        pass

    def init_debug_labels(self, count: int):
        """准备 count 个调试标签"""
        pass

    def set_debug_labels(self, lines: List[str]):
        """更新调试标签内容"""
        pass

    def refresh(self) -> bool:
        """
        刷新显示

        Returns:
            bool: 是否继续运行（用户关闭窗口时返回False）
        """
        return True

    def close(self):
        """关闭显示"""
        pass
