from dataclasses import dataclass


@dataclass(slots=True)
class FadeAnimation:
    """Marks a cube as removing; the entity is deleted once alpha reaches 0."""
    duration: float  # seconds
    alpha: float = 1.0
