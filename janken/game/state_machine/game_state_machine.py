"""
游戏状态机
Game State Machine

AWAITING_SETUP → IDLE → ROUND_IN_PROGRESS → COOLDOWN_PENDING → IDLE ...
"""
from collections import defaultdict
from typing import Optional, Callable, Dict, FrozenSet, List
from .game_state import GameState
from ...utils.logger import setup_logger

logger = setup_logger("Janken.GameStateMachine")

TransitionListener = Callable[[GameState, GameState], None]


class GameStateMachine:
    """回合状态机，只允许表中列出的转换"""

    VALID_TRANSITIONS: Dict[GameState, FrozenSet[GameState]] = {
        GameState.AWAITING_SETUP: frozenset({GameState.IDLE}),
        GameState.IDLE: frozenset({GameState.ROUND_IN_PROGRESS}),
        GameState.ROUND_IN_PROGRESS: frozenset({GameState.COOLDOWN_PENDING}),
        GameState.COOLDOWN_PENDING: frozenset({GameState.IDLE}),
    }

    def __init__(self, initial_state: GameState = GameState.AWAITING_SETUP):
        self._state = initial_state
        self._previous: Optional[GameState] = None
        self._enter_handlers: Dict[GameState, List[Callable[[], None]]] = defaultdict(list)
        self._listeners: List[TransitionListener] = []
        self.transition_count = 0

        logger.debug(f"状态机初始状态: {self._state}")

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def previous(self) -> Optional[GameState]:
        return self._previous

    def on_enter(self, state: GameState, handler: Callable[[], None]):
        """
        注册进入某状态时执行的函数（可注册多个，按注册顺序执行）

        Args:
            state: 状态
            handler: 无参函数
        """
        self._enter_handlers[state].append(handler)

    def add_listener(self, listener: TransitionListener):
        """
        注册状态转换监听函数

        Args:
            listener: 签名为 listener(old_state, new_state)
        """
        self._listeners.append(listener)

    def can_transition_to(self, state: GameState) -> bool:
        return state in self.VALID_TRANSITIONS.get(self._state, frozenset())

    def is_in_state(self, state: GameState) -> bool:
        return self._state is state

    def transition_to(self, new_state: GameState) -> bool:
        """
        转换到新状态。处理函数和监听函数抛出的异常只记录日志，不影响转换结果

        Args:
            new_state: 目标状态

        Returns:
            bool: 转换是否被接受
        """
        if not self.can_transition_to(new_state):
            logger.warning(f"拒绝状态转换: {self._state} -> {new_state}")
            return False

        old_state, self._previous, self._state = self._state, self._state, new_state
        self.transition_count += 1
        logger.debug(f"状态转换: {old_state} -> {new_state}")

        for handler in self._enter_handlers.get(new_state, ()):
            self._call_safely(handler)
        for listener in self._listeners:
            self._call_safely(listener, old_state, new_state)
        return True

    @staticmethod
    def _call_safely(func: Callable, *args):
        try:
            func(*args)
        except Exception as e:
            logger.error(f"状态回调执行异常: {e}", exc_info=True)
