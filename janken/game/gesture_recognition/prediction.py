"""
手势识别结果
Prediction Results
"""
from dataclasses import dataclass
from typing import Sequence, Optional
from ..game_logic.gesture import HandSign
from ...utils.exceptions import PredictionFailure


@dataclass(frozen=True)
class Prediction:
    """单个类别的识别结果"""
    label: str
    confidence: float

    @property
    def sign(self) -> Optional[HandSign]:
        """对应的手势，类别名无法识别时为None"""
        return HandSign.from_label(self.label)

    def to_hand_sign(self) -> HandSign:
        """
        转换为手势

        Raises:
            PredictionFailure: 类别名无法对应到手势
        """
        sign = self.sign
        if sign is None:
            raise PredictionFailure(f"无法识别的类别名: {self.label}", label=self.label)
        return sign

    def __str__(self):
        return f"{self.label}: {self.confidence:.2f}"


def select_best_prediction(predictions: Sequence[Prediction]) -> Prediction:
    """
    选择置信度最高的结果，置信度相同时取靠前的一个

    Args:
        predictions: 按模型类别顺序排列的识别结果

    Returns:
        Prediction: 置信度最高的结果

    Raises:
        PredictionFailure: 结果列表为空
    """
    if not predictions:
        raise PredictionFailure("识别结果为空")

    best = predictions[0]
    for prediction in predictions[1:]:
        if prediction.confidence > best.confidence:
            best = prediction
    return best
