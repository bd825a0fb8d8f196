"""
游戏逻辑模块
Game Logic Module
"""
from .gesture import HandSign
from .game_rules import GameRules, RoundOutcome, RoundResult

__all__ = [
    'HandSign',
    'GameRules',
    'RoundOutcome',
    'RoundResult'
]
