from dataclasses import dataclass, field
from typing import Deque, List


@dataclass(slots=True)
class PlannedCubes:
    """Values promised to specific columns so an issued target stays solvable."""
    columns: List[Deque[int]] = field(default_factory=list)

    def planned_values(self) -> List[int]:
        return [value for column in self.columns for value in column]

    def clear(self) -> None:
        for column in self.columns:
            column.clear()
