from dataclasses import dataclass


@dataclass(slots=True)
class ComboState:
    """Consecutive-match counter.

    ``since_last_match_ms`` is advanced by ticks; ``has_matched`` stays False
    until the first match of the session.
    """
    count: int = 0
    since_last_match_ms: float = 0.0
    has_matched: bool = False
