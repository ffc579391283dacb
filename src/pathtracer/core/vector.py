# core/vector.py
import math

from pathtracer.config import EPSILON


class Vector3:
    """
    A 3D vector used for points, directions and linear RGB colors.

    Instances are treated as immutable: every operator returns a new vector.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        # Component-wise product, used for attenuation.
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector3":
        """
        Returns the unit vector pointing the same way.

        A zero-length vector has no direction; the result is then a vector of
        NaNs rather than a silently clamped value. Callers that may produce
        degenerate vectors check near_zero() first.
        """
        l = self.length()
        if l == 0:
            return Vector3(math.nan, math.nan, math.nan)
        return self / l

    def near_zero(self, tolerance: float = EPSILON) -> bool:
        return abs(self.x) < tolerance and abs(self.y) < tolerance and abs(self.z) < tolerance

    def is_close(self, other: "Vector3", tolerance: float = 1e-9) -> bool:
        return (abs(self.x - other.x) <= tolerance
                and abs(self.y - other.y) <= tolerance
                and abs(self.z - other.z) <= tolerance)

    def to_tuple(self) -> tuple:
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


# Points share the vector representation.
Point3 = Vector3
