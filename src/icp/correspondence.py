from src.common.structures import Point
import abc
import numpy


class CorrespondenceSearch(abc.ABC):
    """
    Pairs each reference point with a target point.
    Inputs are matrices with one point per row and equal column counts.
    """

    @abc.abstractmethod
    def find_closest_indices(
        self,
        reference: numpy.ndarray,
        target: numpy.ndarray
    ) -> list[int]: ...

    def find_closest(
        self,
        reference: numpy.ndarray,
        target: numpy.ndarray
    ) -> numpy.ndarray:
        """
        :return: matrix of the same shape as reference where row i is the target row matched to reference row i
        """
        indices: list[int] = self.find_closest_indices(reference=reference, target=target)
        return numpy.array(target, dtype="float64")[indices, :]


class BruteForceCorrespondenceSearch(CorrespondenceSearch):
    """
    Linear scan over all target points for every reference point, O(n*m).
    Ties go to the first target point encountered.
    """

    @staticmethod
    def _to_points(
        matrix: numpy.ndarray
    ) -> list[Point]:
        points: list[Point] = list()
        for row in matrix:
            point = Point()
            point.prepare(len(row))
            for column_index, value in enumerate(row):
                point.set_value(float(value), column_index)
            points.append(point)
        return points

    def find_closest_indices(
        self,
        reference: numpy.ndarray,
        target: numpy.ndarray
    ) -> list[int]:
        reference_points: list[Point] = self._to_points(numpy.asarray(reference))
        target_points: list[Point] = self._to_points(numpy.asarray(target))
        closest_indices: list[int] = list()
        for reference_point in reference_points:
            best_distance: float = numpy.inf
            best_index: int = 0
            for target_index, target_point in enumerate(target_points):
                distance: float = reference_point.distance_to(target_point)
                if distance < best_distance:
                    best_distance = distance
                    best_index = target_index
            closest_indices.append(best_index)
        return closest_indices
