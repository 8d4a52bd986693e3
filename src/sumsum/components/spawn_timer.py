from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class SpawnTimer:
    elapsed_ms: float = 0.0
    armed: bool = False
    # Column announced by the spawn warning; None when every column was full.
    pending_column: Optional[int] = None
