"""
回合控制器测试
Round Controller Tests
"""
import asyncio

import pytest

from janken.game import GameState, HandSign, RoundOutcome, GameRules
from janken.game.round_controller import (
    STATUS_PREPARING, STATUS_READY, STATUS_NEXT, STATUS_ERROR
)
from janken.utils.exceptions import PredictionFailure


def test_initialize_reaches_idle(make_controller, model_loader, display, camera):
    controller = make_controller()
    assert controller.state == GameState.AWAITING_SETUP

    assert asyncio.run(controller.initialize()) is True

    assert controller.state == GameState.IDLE
    assert display.statuses == [STATUS_PREPARING, STATUS_READY]
    assert display.preview_size == (300, 300)
    assert display.debug_count == 3
    assert camera.connected
    assert model_loader.loaded_from[0].endswith("model.onnx")
    assert model_loader.loaded_from[1].endswith("metadata.json")


def test_runtime_timeout_leaves_awaiting_setup(make_controller, model_loader, display, clock):
    model_loader.available = False
    controller = make_controller()

    assert asyncio.run(controller.initialize()) is False

    assert controller.state == GameState.AWAITING_SETUP
    assert display.status == STATUS_ERROR
    # 10 秒内每 0.1 秒检查一次
    assert clock.now == pytest.approx(10.0, abs=0.11)
    assert model_loader.availability_checks == pytest.approx(101, abs=1)
    assert model_loader.loaded_from is None


def test_runtime_becomes_available_while_waiting(make_controller, model_loader, clock):
    model_loader.available = False
    controller = make_controller()
    clock.call_later(0.5, lambda: setattr(model_loader, 'available', True))

    assert asyncio.run(controller.initialize()) is True
    assert controller.state == GameState.IDLE
    assert clock.now < 1.0


def test_model_load_failure_is_terminal(make_controller, model_loader, display, model_load_error):
    model_loader.error = model_load_error
    controller = make_controller()

    assert asyncio.run(controller.initialize()) is False

    assert controller.state == GameState.AWAITING_SETUP
    assert display.statuses == [STATUS_PREPARING, STATUS_ERROR]


def test_camera_failure_is_terminal(make_controller, camera, display):
    camera.connect_ok = False
    controller = make_controller()

    assert asyncio.run(controller.initialize()) is False

    assert controller.state == GameState.AWAITING_SETUP
    assert display.status == STATUS_ERROR
    # 未就绪时轮询无效果
    assert asyncio.run(controller.poll_tick()) is None
    assert camera.capture_count == 0


def test_confident_prediction_plays_round_and_resets(ready_controller, classifier, display, clock):
    states = []
    results = []
    ready_controller.on_state_changed = states.append
    ready_controller.on_round_result = results.append
    classifier.set_confidences(0.10, 0.97, 0.02)

    result = asyncio.run(ready_controller.poll_tick())

    assert result is not None
    assert result.player_sign is HandSign.SCISSORS
    assert result.computer_sign in list(HandSign)
    assert result.outcome is GameRules.judge(HandSign.SCISSORS, result.computer_sign)
    assert results == [result]
    assert states == [GameState.ROUND_IN_PROGRESS, GameState.COOLDOWN_PENDING]
    assert ready_controller.state == GameState.COOLDOWN_PENDING
    assert display.player is HandSign.SCISSORS
    assert display.computer is result.computer_sign
    assert display.outcome is result.outcome

    clock.advance(2.5)
    assert ready_controller.state == GameState.COOLDOWN_PENDING

    clock.advance(0.5)
    assert ready_controller.state == GameState.IDLE
    assert display.player is None
    assert display.computer is None
    assert display.outcome is None
    assert display.status == STATUS_NEXT


def test_low_confidence_stays_idle(ready_controller, classifier, display):
    classifier.set_confidences(0.40, 0.30, 0.30)

    for _ in range(20):
        assert asyncio.run(ready_controller.poll_tick()) is None

    assert ready_controller.state == GameState.IDLE
    assert classifier.predict_count == 20
    assert display.preview_updates == 20
    assert display.outcome is None


def test_threshold_is_exclusive(ready_controller, classifier):
    classifier.set_confidences(0.95, 0.05, 0.0)

    assert asyncio.run(ready_controller.poll_tick()) is None
    assert ready_controller.state == GameState.IDLE


def test_ticks_during_cooldown_have_no_effect(ready_controller, classifier, display):
    classifier.set_confidences(0.99, 0.005, 0.005)
    first = asyncio.run(ready_controller.poll_tick())
    assert first is not None

    for _ in range(5):
        assert asyncio.run(ready_controller.poll_tick()) is None

    assert ready_controller.state == GameState.COOLDOWN_PENDING
    # 冷却期间只刷新预览，不再识别
    assert classifier.predict_count == 1
    assert display.preview_updates == 6
    assert display.player is HandSign.ROCK


def test_stale_prediction_is_discarded(ready_controller, classifier):
    classifier.set_confidences(0.01, 0.01, 0.98)

    async def overlapping_ticks():
        return await asyncio.gather(ready_controller.poll_tick(), ready_controller.poll_tick())

    results = asyncio.run(overlapping_ticks())

    assert len([r for r in results if r is not None]) == 1
    assert ready_controller.state == GameState.COOLDOWN_PENDING


def test_empty_prediction_list_fails_loudly(ready_controller, classifier):
    classifier.set_confidences()

    with pytest.raises(PredictionFailure):
        asyncio.run(ready_controller.poll_tick())


def test_unknown_confident_label_fails_loudly(make_controller, model_loader, classifier):
    classifier._labels = ["Gu", "Choki", "Nothing"]
    controller = make_controller()
    assert asyncio.run(controller.initialize())
    classifier.set_confidences(0.0, 0.01, 0.99)

    with pytest.raises(PredictionFailure):
        asyncio.run(controller.poll_tick())
    assert controller.state == GameState.IDLE


def test_resolve_round_outside_idle_is_ignored(ready_controller, display):
    assert ready_controller.resolve_round(HandSign.PAPER) is not None
    assert ready_controller.resolve_round(HandSign.ROCK) is None
    assert display.player is HandSign.PAPER


def test_debug_labels(make_controller, classifier, display):
    controller = make_controller(show_debug_labels=True)
    assert asyncio.run(controller.initialize())
    classifier.set_confidences(0.5, 0.25, 0.25)

    asyncio.run(controller.poll_tick())

    assert display.debug_lines == ["Gu: 0.50", "Choki: 0.25", "Pa: 0.25"]


def test_custom_threshold_and_cooldown(make_controller, classifier, clock):
    controller = make_controller(confidence_threshold=0.6, cooldown_seconds=1)
    assert asyncio.run(controller.initialize())
    classifier.set_confidences(0.2, 0.1, 0.7)

    result = asyncio.run(controller.poll_tick())
    assert result.player_sign is HandSign.PAPER

    clock.advance(1)
    assert controller.state == GameState.IDLE


def test_round_outcomes_match_display(ready_controller, classifier, display, clock):
    classifier.set_confidences(0.99, 0.0, 0.01)
    outcomes = set()
    for _ in range(30):
        result = asyncio.run(ready_controller.poll_tick())
        assert display.outcome is result.outcome
        outcomes.add(result.outcome)
        clock.advance(3)
        assert ready_controller.state == GameState.IDLE

    assert outcomes == set(RoundOutcome)


def test_run_loop_ticks_until_display_closes(ready_controller, classifier, display, clock):
    display.max_refreshes = 5
    display.refresh_count = 0

    asyncio.run(ready_controller.run())

    assert display.refresh_count == 5
    assert classifier.predict_count == 5
    # 30fps
    assert clock.now == pytest.approx(4 / 30)


def test_setup_statuses_are_drawn(make_controller, display):
    controller = make_controller()
    asyncio.run(controller.initialize())

    assert STATUS_PREPARING in display.shown_statuses
    assert display.shown_statuses[-1] == STATUS_READY


def test_window_stays_responsive_while_waiting_for_runtime(make_controller, model_loader, display):
    model_loader.available = False
    controller = make_controller()

    asyncio.run(controller.initialize())

    assert display.refresh_count >= model_loader.availability_checks
    assert display.shown_statuses[-1] == STATUS_ERROR


def test_lost_camera_shows_error_once(ready_controller, camera, classifier, display, clock):
    classifier.set_confidences(0.97, 0.02, 0.01)
    asyncio.run(ready_controller.poll_tick())
    camera.disconnect()

    assert asyncio.run(ready_controller.poll_tick()) is None
    assert asyncio.run(ready_controller.poll_tick()) is None
    assert display.statuses.count(STATUS_ERROR) == 1
    assert display.status == STATUS_ERROR

    # 冷却结束后不覆盖错误提示
    clock.advance(3)
    assert ready_controller.state == GameState.IDLE
    assert display.status == STATUS_ERROR
    assert classifier.predict_count == 1
