"""
识别结果选择测试
Prediction Selection Tests
"""
import pytest

from janken.game.gesture_recognition import Prediction, select_best_prediction
from janken.game.game_logic import HandSign
from janken.utils.exceptions import PredictionFailure


def test_selects_highest_confidence():
    predictions = [Prediction("Gu", 0.10), Prediction("Choki", 0.97), Prediction("Pa", 0.02)]
    best = select_best_prediction(predictions)
    assert best.label == "Choki"
    assert best.to_hand_sign() is HandSign.SCISSORS


def test_tie_keeps_first_listed():
    predictions = [Prediction("Pa", 0.50), Prediction("Gu", 0.97), Prediction("Choki", 0.97)]
    assert select_best_prediction(predictions).label == "Gu"

    predictions = [Prediction("Choki", 0.97), Prediction("Gu", 0.97), Prediction("Pa", 0.50)]
    assert select_best_prediction(predictions).label == "Choki"


def test_empty_predictions_raise():
    with pytest.raises(PredictionFailure):
        select_best_prediction([])


def test_unknown_label():
    prediction = Prediction("Nothing", 0.99)
    assert prediction.sign is None
    with pytest.raises(PredictionFailure) as excinfo:
        prediction.to_hand_sign()
    assert excinfo.value.label == "Nothing"


def test_str():
    assert str(Prediction("Gu", 0.456)) == "Gu: 0.46"
