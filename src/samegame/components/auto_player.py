from dataclasses import dataclass, field
from typing import Optional

from samegame.constants import AUTOPLAY_DELAY_DEFAULT
from samegame.utils.scheduler import TaskHandle


@dataclass(slots=True)
class AutoPlayer:
    """Automation switch plus the handle of the next scheduled move, if any."""

    enabled: bool = False
    delay: float = AUTOPLAY_DELAY_DEFAULT
    pending: Optional[TaskHandle] = field(default=None, repr=False)
    moves_played: int = 0
