"""
游戏规则实现
Game Rules Implementation
"""
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from .gesture import HandSign
from ...utils.logger import setup_logger

logger = setup_logger("Janken.GameRules")


class RoundOutcome(Enum):
    """回合结果枚举"""
    PLAYER_WINS = "win"        # 玩家获胜
    COMPUTER_WINS = "lose"     # 电脑获胜
    DRAW = "draw"              # 平局（あいこ）


@dataclass(frozen=True)
class RoundResult:
    """回合结果数据类"""
    player_sign: HandSign
    computer_sign: HandSign
    outcome: RoundOutcome

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'player_sign': self.player_sign.value,
            'computer_sign': self.computer_sign.value,
            'outcome': self.outcome.value
        }


class GameRules:
    """游戏规则类"""

    # 胜负规则：key胜value
    WIN_RULES = {
        HandSign.ROCK: HandSign.SCISSORS,      # 石头胜剪刀
        HandSign.SCISSORS: HandSign.PAPER,     # 剪刀胜布
        HandSign.PAPER: HandSign.ROCK          # 布胜石头
    }

    @staticmethod
    def judge(player_sign: HandSign, computer_sign: HandSign) -> RoundOutcome:
        """
        判断回合结果

        Args:
            player_sign: 玩家手势
            computer_sign: 电脑手势

        Returns:
            RoundOutcome: 回合结果
        """
        if player_sign is computer_sign:
            return RoundOutcome.DRAW

        if GameRules.WIN_RULES[player_sign] is computer_sign:
            return RoundOutcome.PLAYER_WINS
        return RoundOutcome.COMPUTER_WINS

    @staticmethod
    def beats(sign: HandSign) -> HandSign:
        """获取会被指定手势战胜的手势"""
        return GameRules.WIN_RULES[sign]

    @staticmethod
    def draw_computer_sign(rng: Optional[random.Random] = None) -> HandSign:
        """
        随机选择电脑手势（三种手势等概率）

        Args:
            rng: 随机数生成器（可选，便于测试时固定种子）

        Returns:
            HandSign: 电脑手势
        """
        return (rng or random).choice(list(HandSign))

    @staticmethod
    def play(player_sign: HandSign, rng: Optional[random.Random] = None) -> RoundResult:
        """
        进行一回合：随机出电脑手势并判断结果

        Args:
            player_sign: 玩家手势
            rng: 随机数生成器（可选）

        Returns:
            RoundResult: 回合结果
        """
        computer_sign = GameRules.draw_computer_sign(rng)
        outcome = GameRules.judge(player_sign, computer_sign)
        logger.debug(f"玩家={player_sign}, 电脑={computer_sign}, 结果={outcome.value}")
        return RoundResult(player_sign=player_sign, computer_sign=computer_sign, outcome=outcome)
