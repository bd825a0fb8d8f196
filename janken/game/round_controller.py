"""
回合控制器
Round Controller - 摄像头识别 → 判定 → 显示 → 冷却重置 的循环
"""
import random
from typing import Optional, Callable, List
from .state_machine import GameState, GameStateMachine
from .game_logic import GameRules, HandSign, RoundResult
from .gesture_recognition import (
    ClassifierBase, ModelLoaderBase, Prediction, select_best_prediction
)
from .scheduling import Clock, AsyncioClock, FrameScheduler, wait_until
from ..hardware.base.camera_base import CameraBase
from ..hardware.base.display_base import DisplayBase
from ..utils.config_loader import GameConfig
from ..utils.error_handler import global_error_handler
from ..utils.exceptions import SetupFailure, RuntimeTimeoutError, CameraSetupError
from ..utils.logger import setup_logger

logger = setup_logger("Janken.RoundController")

STATUS_PREPARING = "Preparing camera..."
STATUS_READY = "Show your hand to the camera!"
STATUS_NEXT = "Show your next hand!"
STATUS_ERROR = "An error occurred. Please allow camera access."


class RoundController:
    """回合控制器，持有游戏状态并驱动识别循环"""

    def __init__(self,
                 model_loader: ModelLoaderBase,
                 camera: CameraBase,
                 display: DisplayBase,
                 config: Optional[GameConfig] = None,
                 clock: Optional[Clock] = None,
                 scheduler: Optional[FrameScheduler] = None,
                 rng: Optional[random.Random] = None):
        """
        初始化回合控制器

        Args:
            model_loader: 模型加载器
            camera: 摄像头
            display: 显示输出
            config: 游戏配置（默认值见 GameConfig）
            clock: 时钟（冷却定时、运行时等待）
            scheduler: 帧调度器（识别循环节奏）
            rng: 随机数生成器（电脑出手）
        """
        self.model_loader = model_loader
        self.camera = camera
        self.display = display
        self.config = config or GameConfig()
        self.clock = clock or AsyncioClock()
        self.scheduler = scheduler or FrameScheduler(self.clock)
        self.rng = rng

        self.classifier: Optional[ClassifierBase] = None
        self.state_machine = GameStateMachine(initial_state=GameState.AWAITING_SETUP)
        self.state_machine.add_listener(self._on_transition)
        # 每开始一个回合加一，用于丢弃过期的识别结果
        self._round_generation = 0
        self._camera_lost = False

        self.on_state_changed: Optional[Callable[[GameState], None]] = None
        self.on_round_result: Optional[Callable[[RoundResult], None]] = None

        logger.info(f"回合控制器初始化完成: 置信度阈值={self.config.confidence_threshold}, "
                    f"冷却={self.config.cooldown_seconds}s")

    @property
    def state(self) -> GameState:
        """当前游戏状态"""
        return self.state_machine.state

    async def initialize(self) -> bool:
        """
        等待推理运行时、加载模型、打开摄像头，成功后进入空闲状态

        Returns:
            bool: 初始化是否成功（失败不重试，状态保持 AWAITING_SETUP）
        """
        try:
            await self._wait_for_runtime()

            self._show_status(STATUS_PREPARING)

            self.classifier = await self.model_loader.load(
                self.config.model_url, self.config.metadata_url
            )
            class_count = self.classifier.get_total_classes()
            logger.info(f"模型加载成功，类别数: {class_count}")

            if not await self.camera.setup():
                raise CameraSetupError("摄像头打开失败", device_id=getattr(self.camera, 'device_id', None))

            size = self.config.webcam_size
            self.display.mount_preview(size, size)
            self.display.init_debug_labels(class_count)
            self._show_status(STATUS_READY)

        except SetupFailure as e:
            global_error_handler.handle(e, "初始化")
            self._show_status(STATUS_ERROR)
            return False

        self.state_machine.transition_to(GameState.IDLE)
        logger.info("准备完成，等待玩家出手")
        return True

    def _show_status(self, text: str):
        self.display.set_status(text)
        self.display.refresh()

    def _runtime_ready(self) -> bool:
        # 等待期间保持窗口响应
        self.display.refresh()
        return self.model_loader.is_runtime_available()

    async def _wait_for_runtime(self):
        ready = await wait_until(
            self._runtime_ready,
            timeout=self.config.library_timeout,
            interval=self.config.library_poll_interval,
            clock=self.clock
        )
        if not ready:
            raise RuntimeTimeoutError("推理运行时未加载", timeout=self.config.library_timeout)

    async def poll_tick(self) -> Optional[RoundResult]:
        """
        识别循环的一次迭代：捕获一帧，空闲时识别并在置信度足够时开始回合

        Returns:
            Optional[RoundResult]: 本次触发的回合结果，未触发返回None

        Raises:
            PredictionFailure: 识别结果为空或类别无法识别
        """
        if self.state_machine.is_in_state(GameState.AWAITING_SETUP):
            return None

        frame = await self.camera.capture()
        if frame is None:
            if not self._camera_lost and not self.camera.is_connected():
                self._camera_lost = True
                logger.error("摄像头连接已断开，停止识别")
                self.display.set_status(STATUS_ERROR)
            return None
        self.display.update_preview(frame)

        if not self.state.accepts_hand:
            return None

        generation = self._round_generation
        predictions = await self.classifier.predict(frame)
        best = select_best_prediction(predictions)

        if self.config.show_debug_labels:
            self.display.set_debug_labels(self._format_debug_labels(predictions))

        if best.confidence <= self.config.confidence_threshold:
            return None

        player_sign = best.to_hand_sign()

        # 识别期间状态可能已变化（其他识别已触发回合）
        if generation != self._round_generation or not self.state.accepts_hand:
            logger.debug(f"丢弃过期的识别结果: {best}")
            return None

        logger.info(f"识别到手势: {best}")
        return self.resolve_round(player_sign)

    @staticmethod
    def _format_debug_labels(predictions: List[Prediction]) -> List[str]:
        return [str(prediction) for prediction in predictions]

    def resolve_round(self, player_sign: HandSign) -> Optional[RoundResult]:
        """
        进行一回合：电脑随机出手、判定、显示结果，并安排冷却后重置

        Args:
            player_sign: 玩家手势

        Returns:
            Optional[RoundResult]: 回合结果，不在空闲状态时返回None
        """
        if not self.state_machine.transition_to(GameState.ROUND_IN_PROGRESS):
            return None
        self._round_generation += 1

        result = GameRules.play(player_sign, self.rng)
        logger.info(f"玩家={result.player_sign}, 电脑={result.computer_sign}, 结果={result.outcome.value}")

        self.display.set_hands(result.player_sign, result.computer_sign)
        self.display.set_result(result.outcome)
        self._notify_round_result(result)

        self.state_machine.transition_to(GameState.COOLDOWN_PENDING)
        self.clock.call_later(self.config.cooldown_seconds, self.reset_round)
        return result

    def reset_round(self):
        """恢复中立显示并回到空闲状态"""
        if not self._camera_lost:
            self.display.set_status(STATUS_NEXT)
        self.display.set_hands(None, None)
        self.display.set_result(None)
        self.state_machine.transition_to(GameState.IDLE)

    async def run(self):
        """
        识别循环：每帧执行一次 poll_tick，直到显示被关闭或任务被取消
        """
        logger.info("识别循环启动")
        while True:
            await self.scheduler.next_frame()
            await self.poll_tick()
            if not self.display.refresh():
                logger.info("识别循环结束")
                return

    def _on_transition(self, old_state: GameState, new_state: GameState):
        if self.on_state_changed:
            try:
                self.on_state_changed(new_state)
            except Exception as e:
                logger.error(f"状态改变回调异常: {e}")

    def _notify_round_result(self, result: RoundResult):
        if self.on_round_result:
            try:
                self.on_round_result(result)
            except Exception as e:
                logger.error(f"回合结果回调异常: {e}")
