"""
测试用替身对象
Test Doubles
"""
import asyncio
import random
from typing import List, Optional

import numpy as np
import pytest

from janken.game import RoundController
from janken.game.gesture_recognition import ClassifierBase, ModelLoaderBase, Prediction
from janken.game.scheduling import Clock
from janken.hardware.base import CameraBase, DisplayBase
from janken.utils.config_loader import GameConfig
from janken.utils.exceptions import ModelLoadError


class ManualClock(Clock):
    """手动推进的时钟"""

    def __init__(self):
        self.now = 0.0
        self.timers = []
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.advance(seconds)
        await asyncio.sleep(0)

    def call_later(self, delay: float, callback):
        self.timers.append((self.now + delay, callback))

    def advance(self, seconds: float):
        self.now += seconds
        due = sorted((t for t in self.timers if t[0] <= self.now), key=lambda t: t[0])
        self.timers = [t for t in self.timers if t[0] > self.now]
        for _, callback in due:
            callback()


class FakeCamera(CameraBase):
    def __init__(self, connect_ok: bool = True, size: int = 300):
        self.connect_ok = connect_ok
        self.size = size
        self.connected = False
        self.capture_count = 0

    def connect(self) -> bool:
        self.connected = self.connect_ok
        return self.connect_ok

    def disconnect(self) -> bool:
        self.connected = False
        return True

    def is_connected(self) -> bool:
        return self.connected

    def capture_frame(self) -> Optional[np.ndarray]:
        if not self.connected:
            return None
        self.capture_count += 1
        return np.zeros((self.size, self.size, 3), dtype=np.uint8)

    def get_resolution(self) -> tuple:
        return self.size, self.size


class FakeClassifier(ClassifierBase):
    def __init__(self, labels=("Gu", "Choki", "Pa")):
        self._labels = list(labels)
        self.confidences = [0.34, 0.33, 0.33]
        self.predict_count = 0

    @property
    def labels(self):
        return list(self._labels)

    def set_confidences(self, *confidences):
        self.confidences = list(confidences)

    async def predict(self, frame):
        self.predict_count += 1
        # 让出事件循环，模拟推理期间的挂起
        await asyncio.sleep(0)
        return [Prediction(label, c) for label, c in zip(self._labels, self.confidences)]


class FakeModelLoader(ModelLoaderBase):
    def __init__(self, classifier: ClassifierBase, available: bool = True,
                 error: Optional[Exception] = None):
        self.classifier = classifier
        self.available = available
        self.error = error
        self.availability_checks = 0
        self.loaded_from = None

    def is_runtime_available(self) -> bool:
        self.availability_checks += 1
        return self.available

    async def load(self, model_url: str, metadata_url: str):
        self.loaded_from = (model_url, metadata_url)
        if self.error is not None:
            raise self.error
        return self.classifier


class RecordingDisplay(DisplayBase):
    interactive = False

    def __init__(self):
        self.statuses: List[str] = []
        self.player = "placeholder"
        self.computer = "placeholder"
        self.outcome = None
        self.preview_size = None
        self.preview_updates = 0
        self.debug_count = None
        self.debug_lines: List[str] = []
        self.refresh_count = 0
        self.max_refreshes = None
        self.closed = False
        # 每次刷新时画面上的状态文本
        self.shown_statuses: List[str] = []

    @property
    def status(self):
        return self.statuses[-1] if self.statuses else None

    def set_status(self, text):
        self.statuses.append(text)

    def set_hands(self, player, computer):
        self.player = player
        self.computer = computer

    def set_result(self, outcome):
        self.outcome = outcome

    def mount_preview(self, width, height):
        self.preview_size = (width, height)

    def update_preview(self, frame):
        self.preview_updates += 1

    def init_debug_labels(self, count):
        self.debug_count = count

    def set_debug_labels(self, lines):
        self.debug_lines = list(lines)

    def refresh(self) -> bool:
        self.refresh_count += 1
        self.shown_statuses.append(self.status)
        return self.max_refreshes is None or self.refresh_count < self.max_refreshes

    def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def model_loader(classifier):
    return FakeModelLoader(classifier)


@pytest.fixture
def make_controller(model_loader, camera, display, clock):
    def _make(**config_overrides):
        return RoundController(
            model_loader=model_loader,
            camera=camera,
            display=display,
            config=GameConfig(**config_overrides),
            clock=clock,
            rng=random.Random(7)
        )
    return _make


@pytest.fixture
def ready_controller(make_controller):
    controller = make_controller()
    assert asyncio.run(controller.initialize())
    return controller


@pytest.fixture
def model_load_error():
    return ModelLoadError("模型文件不存在", model_path="./my_model/model.onnx")
