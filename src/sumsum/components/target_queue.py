from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class TargetQueue:
    """Current target at index 0 followed by the lookahead."""
    depth: int
    targets: List[int] = field(default_factory=list)

    @property
    def current(self) -> Optional[int]:
        return self.targets[0] if self.targets else None
