from dataclasses import dataclass, field
from typing import Optional, Tuple

Cell = Optional[int]
Grid = Tuple[Tuple[Cell, ...], ...]


@dataclass(slots=True)
class Board:
    """Committed board snapshot.

    ``cells`` is replaced wholesale on every successful move; systems must
    read it at the moment they act instead of caching it.
    """
    size: int
    cells: Grid = field(default_factory=tuple)
    revision: int = 0
