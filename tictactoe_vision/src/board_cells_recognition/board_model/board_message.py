"""
外部棋盘消息

与机器人控制系统交换的固定长度棋盘状态格式。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ..core.interfaces import COL_EMPTY


@dataclass
class BoardMessage:
    """
    固定长度的棋盘状态消息

    cells 中的每一项是一个格子状态标记，顺序为行优先。
    标记本身在这里不做校验，由 Board.from_message 负责。
    """

    NUM_CELLS = 9

    cells: List[str] = field(default_factory=lambda: [COL_EMPTY] * BoardMessage.NUM_CELLS)
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self.cells = list(self.cells)
        if len(self.cells) != self.NUM_CELLS:
            raise ValueError(
                f"棋盘消息必须包含 {self.NUM_CELLS} 个格子，当前: {len(self.cells)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'cells': list(self.cells),
            'timestamp': self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BoardMessage':
        """从字典创建消息"""
        timestamp = data.get('timestamp')
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)

        if timestamp is None:
            return cls(cells=data['cells'])
        return cls(cells=data['cells'], timestamp=timestamp)
