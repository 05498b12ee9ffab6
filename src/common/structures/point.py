from ..exceptions import ICPIndexOutOfRangeError
import math
from typing import Iterable


class Point:
    """
    Simple coordinate container for correspondence search.
    Dimension is whatever was supplied at construction, or what prepare() allocated.
    """

    _coords: list[float]

    def __init__(
        self,
        *coords: float
    ):
        self._coords = [float(coord) for coord in coords]

    @staticmethod
    def from_iterable(
        values: Iterable[float]
    ) -> 'Point':
        return Point(*values)

    def prepare(
        self,
        size: int
    ) -> None:
        """
        Allocate size zero-valued slots. Use this on an empty Point before set_value().
        """
        self._coords.extend([0.0] * size)

    def set_value(
        self,
        value: float,
        pos: int
    ) -> None:
        self[pos] = value

    def set_points(
        self,
        values: Iterable[float]
    ) -> None:
        self._coords.extend(float(value) for value in values)

    def size(self) -> int:
        return len(self._coords)

    def as_float_list(self) -> list[float]:
        return list(self._coords)

    def distance_to(
        self,
        other: 'Point'
    ) -> float:
        """
        Euclidean distance, computed over the dimension of other.
        """
        diff: Point = self - other
        return math.sqrt(sum(diff[i] * diff[i] for i in range(0, other.size())))

    def _check_index(
        self,
        index: int
    ) -> None:
        if index < 0 or index >= len(self._coords):
            raise ICPIndexOutOfRangeError(index=index, size=len(self._coords))

    def __len__(self) -> int:
        return len(self._coords)

    def __getitem__(
        self,
        index: int
    ) -> float:
        self._check_index(index)
        return self._coords[index]

    def __setitem__(
        self,
        index: int,
        value: float
    ) -> None:
        self._check_index(index)
        self._coords[index] = float(value)

    def __sub__(
        self,
        other: 'Point'
    ) -> 'Point':
        # result takes the dimension of other
        result = Point()
        result.prepare(other.size())
        for i in range(0, other.size()):
            result[i] = self[i] - other[i]
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._coords == other._coords

    def __repr__(self) -> str:
        return f"Point({', '.join(str(coord) for coord in self._coords)})"
