"""
游戏逻辑模块
Game Logic Module
"""
from .round_controller import RoundController
from .game_logic import HandSign, GameRules, RoundOutcome, RoundResult
from .state_machine import GameState, GameStateMachine
from .gesture_recognition import Prediction, select_best_prediction, OnnxModelLoader
from .scheduling import Clock, AsyncioClock, FrameScheduler

__all__ = [
    'RoundController',
    'HandSign',
    'GameRules',
    'RoundOutcome',
    'RoundResult',
    'GameState',
    'GameStateMachine',
    'Prediction',
    'select_best_prediction',
    'OnnxModelLoader',
    'Clock',
    'AsyncioClock',
    'FrameScheduler'
]
