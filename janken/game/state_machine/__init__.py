"""
回合状态
Round State
"""
from .game_state import GameState
from .game_state_machine import GameStateMachine, TransitionListener

__all__ = ['GameState', 'GameStateMachine', 'TransitionListener']
