"""
时钟与帧调度
Clock and Frame Scheduling

控制器只通过这里的接口等待和定时，测试时可替换为手动推进的时钟
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Callable
from ..utils.logger import setup_logger

logger = setup_logger("Janken.Scheduling")


class Clock(ABC):
    """时钟抽象基类"""

    @abstractmethod
    def monotonic(self) -> float:
        """当前单调时间（秒）"""
        pass

    @abstractmethod
    async def sleep(self, seconds: float):
        """挂起指定秒数"""
        pass

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]):
        """
        延迟调用回调函数（不阻塞调用方）

        Args:
            delay: 延迟秒数
            callback: 回调函数
        """
        pass


class AsyncioClock(Clock):
    """基于 asyncio 事件循环的时钟"""

    def monotonic(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float):
        await asyncio.sleep(seconds)

    def call_later(self, delay: float, callback: Callable[[], None]):
        return asyncio.get_running_loop().call_later(delay, callback)


class FrameScheduler:
    """帧调度器，每次 next_frame() 等到下一帧的时刻"""

    def __init__(self, clock: Clock, fps: float = 30.0):
        """
        初始化帧调度器

        Args:
            clock: 时钟
            fps: 目标帧率
        """
        if fps <= 0:
            raise ValueError(f"帧率必须大于0: {fps}")
        self.clock = clock
        self.frame_interval = 1.0 / fps
        self._next_frame_time = None

    async def next_frame(self):
        """等待下一帧"""
        now = self.clock.monotonic()
        if self._next_frame_time is None or self._next_frame_time < now:
            # 落后时不追帧
            self._next_frame_time = now
        delay = self._next_frame_time - now
        self._next_frame_time += self.frame_interval
        await self.clock.sleep(delay)


async def wait_until(predicate: Callable[[], bool],
                     timeout: float,
                     interval: float,
                     clock: Clock) -> bool:
    """
    轮询等待条件成立

    Args:
        predicate: 条件函数
        timeout: 最长等待秒数
        interval: 轮询间隔秒数
        clock: 时钟

    Returns:
        bool: 超时前条件是否成立
    """
    deadline = clock.monotonic() + timeout
    while True:
        if predicate():
            return True
        if clock.monotonic() >= deadline:
            logger.debug(f"等待超时: {timeout}s")
            return False
        await clock.sleep(interval)
