# core/color.py
import logging
from typing import Optional

from pathtracer.config import COLOR_TOLERANCE
from pathtracer.core.vector import Vector3

logger = logging.getLogger(__name__)

CHANNELS = ("red", "green", "blue")


class ColorRangeError(ValueError):
    """A color channel fell outside [0, 1]."""

    def __init__(self, channel: str, value: float):
        # args must hold the constructor arguments to survive pickling
        # across the process pool.
        super().__init__(channel, value)
        self.channel = channel
        self.value = value

    def __str__(self) -> str:
        return f"{self.channel} is out of range 0-1, value is: {self.value}"


class Color(Vector3):
    """
    An RGB color whose channels lie in [0, 1].

    Two construction paths exist. ``validated`` raises ColorRangeError and is
    used wherever an out-of-range value means a bug (material albedos, the
    final pixel average). ``maybe`` logs and returns None so that the caller
    can skip the value.
    """
    __slots__ = ()

    @property
    def red(self) -> float:
        return self.x

    @property
    def green(self) -> float:
        return self.y

    @property
    def blue(self) -> float:
        return self.z

    @classmethod
    def validated(cls, v) -> "Color":
        for channel, value in zip(CHANNELS, v):
            if not 0.0 <= value <= 1.0:
                raise ColorRangeError(channel, value)
        return cls(*v)

    @classmethod
    def maybe(cls, v) -> Optional["Color"]:
        for channel, value in zip(CHANNELS, v):
            if not 0.0 <= value <= 1.0:
                logger.warning("%s is out of range, %s is: %s", channel, channel, value)
                return None
        return cls(*v)

    @classmethod
    def clamped(cls, v, tolerance: float = COLOR_TOLERANCE) -> "Color":
        """
        Snaps floating-point overshoot of at most ``tolerance`` back into
        [0, 1]. Anything further out raises ColorRangeError.
        """
        channels = []
        for channel, value in zip(CHANNELS, v):
            if not -tolerance <= value <= 1.0 + tolerance:
                raise ColorRangeError(channel, value)
            channels.append(min(max(value, 0.0), 1.0))
        return cls(*channels)

    def __repr__(self) -> str:
        return f"Color({self.x}, {self.y}, {self.z})"


BLACK = Color(0.0, 0.0, 0.0)
