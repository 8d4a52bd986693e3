from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class CubeQueues:
    """Per-column preview of the next cube values, front first."""
    queues: List[List[int]] = field(default_factory=list)

    def upcoming_values(self) -> List[int]:
        return [value for queue in self.queues for value in queue]
