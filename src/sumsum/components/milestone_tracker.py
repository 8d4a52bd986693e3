from dataclasses import dataclass, field
from typing import Set


@dataclass(slots=True)
class MilestoneTracker:
    """Milestone keys already reported during the current session."""
    reached: Set[str] = field(default_factory=set)
