from dataclasses import dataclass


@dataclass(slots=True)
class FallAnimation:
    src_row: int
    dst_row: int
    duration: float  # seconds
    linear: float = 0.0  # 0..1
