"""
游戏状态枚举
Game State Enumeration
"""
from enum import Enum


class GameState(Enum):
    AWAITING_SETUP = "awaiting_setup"        # 运行时、模型、摄像头尚未就绪
    IDLE = "idle"                            # 等待玩家出手
    ROUND_IN_PROGRESS = "round_in_progress"  # 判定并显示结果
    COOLDOWN_PENDING = "cooldown_pending"    # 结果展示中，等待重置

    @property
    def accepts_hand(self) -> bool:
        """该状态下识别结果能否开始新回合"""
        return self is GameState.IDLE

    def __str__(self):
        return self.value
