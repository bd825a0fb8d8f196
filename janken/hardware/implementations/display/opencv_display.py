"""
OpenCV 窗口显示实现
OpenCV Window Display Implementation
"""
import cv2
import numpy as np
from typing import Optional, List
from ...base.display_base import DisplayBase, RESULT_TEXTS, NEUTRAL_RESULT_TEXT
from ....utils.logger import setup_logger

logger = setup_logger("Janken.OpenCVDisplay")

# BGR
COLOR_TEXT = (255, 255, 255)
COLOR_MUTED = (160, 160, 160)
COLOR_HIGHLIGHT = (0, 215, 255)
RESULT_COLORS = {
    'win': (80, 200, 80),
    'lose': (80, 80, 230),
    'draw': (0, 200, 230),
    None: COLOR_TEXT,
}

# OpenCV 字体无法绘制绘文字，占位符用文本代替
PLAYER_PLACEHOLDER_TEXT = "YOU"
COMPUTER_PLACEHOLDER_TEXT = "CPU"


class OpenCVDisplay(DisplayBase):
    """使用 OpenCV 窗口绘制游戏画面"""

    def __init__(self, window_name: str = "Janken", panel_width: int = 360,
                 show_window: bool = True):
        """
        初始化显示

        Args:
            window_name: 窗口名称
            panel_width: 右侧信息面板宽度
            show_window: 是否创建窗口（False 时只合成画面）
        """
        self.window_name = window_name
        self.panel_width = panel_width
        self.show_window = show_window

        self.status = ""
        self.player_text = PLAYER_PLACEHOLDER_TEXT
        self.computer_text = COMPUTER_PLACEHOLDER_TEXT
        self.result_text = NEUTRAL_RESULT_TEXT
        self.result_style: Optional[str] = None
        self.winner: Optional[str] = None
        self.preview_size = (300, 300)
        self.preview: Optional[np.ndarray] = None
        self.debug_lines: List[str] = []
        self._window_created = False

    @property
    def interactive(self) -> bool:
        return self.show_window

    def set_status(self, text: str):
        self.status = text

    def set_hands(self, player, computer):
        self.player_text = player.name if player is not None else PLAYER_PLACEHOLDER_TEXT
        self.computer_text = computer.name if computer is not None else COMPUTER_PLACEHOLDER_TEXT

    def set_result(self, outcome):
        if outcome is None:
            self.result_text = NEUTRAL_RESULT_TEXT
            self.result_style = None
            self.winner = None
            return

        self.result_style = outcome.value
        self.result_text = RESULT_TEXTS[outcome.value]
        self.winner = {'win': 'player', 'lose': 'computer'}.get(outcome.value)

    def mount_preview(self, width: int, height: int):
        self.preview_size = (width, height)
        logger.debug(f"预览区域: {width}x{height}")

    def update_preview(self, frame: np.ndarray):
        self.preview = frame

    def init_debug_labels(self, count: int):
        self.debug_lines = [""] * count

    def set_debug_labels(self, lines: List[str]):
        self.debug_lines = list(lines)

    def _put_text(self, canvas: np.ndarray, text: str, origin: tuple,
                  scale: float = 0.6, color: tuple = COLOR_TEXT, thickness: int = 1):
        cv2.putText(canvas, text, origin, cv2.FONT_HERSHEY_SIMPLEX,
                    scale, color, thickness, cv2.LINE_AA)

    def compose(self) -> np.ndarray:
        """
        合成当前画面

        Returns:
            np.ndarray: BGR 画面，左侧为摄像头预览，右侧为信息面板
        """
        preview_w, preview_h = self.preview_size
        height = max(preview_h, 300)
        canvas = np.zeros((height, preview_w + self.panel_width, 3), dtype=np.uint8)

        if self.preview is not None:
            preview = cv2.resize(self.preview, (preview_w, preview_h))
            canvas[:preview_h, :preview_w] = preview

        x = preview_w + 15
        self._put_text(canvas, self.status, (x, 30), scale=0.5)

        # 双方手势，胜者高亮
        player_color = COLOR_HIGHLIGHT if self.winner == 'player' else COLOR_TEXT
        computer_color = COLOR_HIGHLIGHT if self.winner == 'computer' else COLOR_TEXT
        self._put_text(canvas, self.player_text, (x, 90), scale=0.9, color=player_color, thickness=2)
        self._put_text(canvas, self.computer_text, (x + 180, 90), scale=0.9,
                       color=computer_color, thickness=2)

        self._put_text(canvas, self.result_text, (x, 150), scale=1.0,
                       color=RESULT_COLORS.get(self.result_style, COLOR_TEXT), thickness=2)

        y = 190
        for line in self.debug_lines:
            if line:
                self._put_text(canvas, line, (x, y), scale=0.45, color=COLOR_MUTED)
            y += 20

        return canvas

    def refresh(self) -> bool:
        if not self.show_window:
            return True

        if not self._window_created:
            cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
            self._window_created = True

        cv2.imshow(self.window_name, self.compose())
        key = cv2.waitKey(1) & 0xFF
        if key in (ord('q'), 27):
            logger.info("用户关闭窗口")
            return False
        return True

    def close(self):
        if self._window_created:
            cv2.destroyWindow(self.window_name)
            self._window_created = False
