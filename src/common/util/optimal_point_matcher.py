# Optimal rotation by the Kabsch method:
# Kabsch. A solution for the best rotation to relate two sets of vectors. (1976)
# Arun et al. Least square fitting of two 3D point sets (1987)
from ..exceptions import ICPInvalidInputError
import logging
import numpy
from typing import Final


logger = logging.getLogger(__name__)

# Singular values below this fraction of the largest are considered zero
_RANK_ZERO_THRESHOLD: Final[float] = 0.0001


class OptimalPointMatcher:
    """
    static class computing the optimal rigid motion between two point sets.
    Point sets are matrices with one point per row, one axis per column.
    Rotations returned here are applied by right-multiplication: points @ rotation.
    """

    def __init__(self):
        raise RuntimeError("This class is not meant to be initialized.")

    @staticmethod
    def _as_point_matrix(
        points: numpy.ndarray | list[list[float]],
        label: str
    ) -> numpy.ndarray:
        matrix: numpy.ndarray = numpy.array(points, dtype="float64")
        if matrix.ndim != 2:
            message: str = f"{label} must be a 2D matrix (one point per row). Got {matrix.ndim} dimension(s)."
            logger.error(message)
            raise ICPInvalidInputError(message)
        if matrix.shape[0] == 0 or matrix.shape[1] == 0:
            message: str = f"{label} must contain at least one point of at least one coordinate."
            logger.error(message)
            raise ICPInvalidInputError(message)
        return matrix

    @staticmethod
    def _check_same_shape(
        ref: numpy.ndarray,
        target: numpy.ndarray
    ) -> None:
        if ref.shape != target.shape:
            message: str = f"Point sets must have identical shapes. Got {ref.shape} and {target.shape}."
            logger.error(message)
            raise ICPInvalidInputError(message)

    @staticmethod
    def _check_same_size(
        data_one: numpy.ndarray,
        data_two: numpy.ndarray
    ) -> None:
        if data_one.size != data_two.size:
            message: str = f"Matrix size mismatch: {data_one.size} versus {data_two.size} elements."
            logger.error(message)
            raise ICPInvalidInputError(message)

    @staticmethod
    def centroid(
        points: numpy.ndarray | list[list[float]]
    ) -> numpy.ndarray:
        """
        Returns a column vector where row i is the mean of column i of points.
        For an n x d input, the result is d x 1.
        """
        points = OptimalPointMatcher._as_point_matrix(points, label="points")
        row_count: int = points.shape[0]
        return (numpy.sum(points, axis=0) / row_count).reshape((points.shape[1], 1))

    @staticmethod
    def solve_for_optimal_rotation(
        ref: numpy.ndarray | list[list[float]],
        target: numpy.ndarray | list[list[float]]
    ) -> numpy.ndarray:
        """
        Solves for the optimal rotation using singular value decomposition,
        mapping ref onto target: (ref - centroid(ref)) @ rotation ~ (target - centroid(target)).
        The result is always a proper rotation (determinant +1).
        Collinear or coincident inputs do not determine a unique rotation; a warning is logged
        and one of the admissible rotations is returned.
        """
        ref = OptimalPointMatcher._as_point_matrix(ref, label="ref")
        target = OptimalPointMatcher._as_point_matrix(target, label="target")
        OptimalPointMatcher._check_same_shape(ref, target)

        centroid_ref: numpy.ndarray = OptimalPointMatcher.centroid(ref)
        centroid_target: numpy.ndarray = OptimalPointMatcher.centroid(target)
        centered_ref: numpy.ndarray = ref - centroid_ref.transpose()
        centered_target: numpy.ndarray = target - centroid_target.transpose()

        covariance: numpy.ndarray = numpy.matmul(centered_target.transpose(), centered_ref)
        u, singular_values, vh = numpy.linalg.svd(covariance)

        dimension: int = covariance.shape[0]
        largest_singular_value: float = float(singular_values[0])
        rank: int = 0
        if largest_singular_value > 0.0:
            rank = int(numpy.sum(singular_values > _RANK_ZERO_THRESHOLD * largest_singular_value))
        if rank < dimension - 1:
            logger.warning(
                f"Covariance has rank {rank} for {dimension}D points (collinear or coincident input). "
                "The solved rotation is not unique.")

        # if svd(cov) = [U, S, V], then rotation R = V * U^T
        rotation: numpy.ndarray = numpy.matmul(vh.transpose(), u.transpose())

        # reflection correction
        if numpy.linalg.det(rotation) < 0:
            rotation[-1, :] *= -1
        return rotation

    @staticmethod
    def solve_for_optimal_translation(
        ref: numpy.ndarray | list[list[float]],
        target: numpy.ndarray | list[list[float]],
        rotation: numpy.ndarray
    ) -> numpy.ndarray:
        """
        Solves for the translation (column vector) that, combined with rotation as done by
        apply_transformation (translate, then rotate), maps the centroid of ref onto the centroid of target.
        """
        ref = OptimalPointMatcher._as_point_matrix(ref, label="ref")
        target = OptimalPointMatcher._as_point_matrix(target, label="target")
        OptimalPointMatcher._check_same_shape(ref, target)
        rotation = numpy.asarray(rotation, dtype="float64")
        dimension: int = ref.shape[1]
        if rotation.shape != (dimension, dimension):
            message: str = f"Rotation must be {dimension}x{dimension}. Got {rotation.shape}."
            logger.error(message)
            raise ICPInvalidInputError(message)
        centroid_ref: numpy.ndarray = OptimalPointMatcher.centroid(ref)
        centroid_target: numpy.ndarray = OptimalPointMatcher.centroid(target)
        # (c_ref + t)^T @ R = c_target^T  =>  t = R @ c_target - c_ref, since R is orthonormal
        return numpy.matmul(rotation, centroid_target) - centroid_ref

    @staticmethod
    def apply_transformation(
        data: numpy.ndarray | list[list[float]],
        translation: numpy.ndarray | list[float],
        rotation: numpy.ndarray
    ) -> numpy.ndarray:
        """
        Adds translation to every point of data, then right-multiplies by rotation.
        :param data: point set, one point per row
        :param translation: row vector, column vector, flat vector, or a matrix of the same shape as data
        :param rotation: square matrix matching the column count of data
        """
        data = OptimalPointMatcher._as_point_matrix(data, label="data")
        translation = numpy.asarray(translation, dtype="float64")
        rotation = numpy.asarray(rotation, dtype="float64")
        column_count: int = data.shape[1]
        if rotation.shape != (column_count, column_count):
            message: str = f"Rotation must be {column_count}x{column_count}. Got {rotation.shape}."
            logger.error(message)
            raise ICPInvalidInputError(message)

        offsets: numpy.ndarray
        if translation.shape == data.shape:
            offsets = translation
        elif translation.ndim == 2 and translation.shape == (column_count, 1):
            offsets = translation[:, 0]  # column vector
        elif translation.ndim == 2 and translation.shape == (1, column_count):
            offsets = translation[0, :]  # row vector
        elif translation.ndim == 1 and translation.shape[0] == column_count:
            offsets = translation
        else:
            message: str = \
                f"Translation of shape {translation.shape} cannot be applied to data of shape {data.shape}."
            logger.error(message)
            raise ICPInvalidInputError(message)
        return numpy.matmul(data + offsets, rotation)

    @staticmethod
    def _point_distances(
        data_one: numpy.ndarray | list[list[float]],
        data_two: numpy.ndarray | list[list[float]]
    ) -> numpy.ndarray:
        data_one = OptimalPointMatcher._as_point_matrix(data_one, label="data_one")
        data_two = OptimalPointMatcher._as_point_matrix(data_two, label="data_two")
        OptimalPointMatcher._check_same_size(data_one, data_two)
        differences: numpy.ndarray = data_one - data_two.reshape(data_one.shape)
        return numpy.linalg.norm(differences, axis=1)

    @staticmethod
    def rmse(
        data_one: numpy.ndarray | list[list[float]],
        data_two: numpy.ndarray | list[list[float]]
    ) -> float:
        """
        Residual between two point sets of equal element count, computed as the
        SUM (not the mean) over rows of the Euclidean norm of each row difference.
        See mean_point_distance and rms_point_distance for normalized metrics.
        """
        return float(numpy.sum(OptimalPointMatcher._point_distances(data_one, data_two)))

    @staticmethod
    def mean_point_distance(
        data_one: numpy.ndarray | list[list[float]],
        data_two: numpy.ndarray | list[list[float]]
    ) -> float:
        return float(numpy.mean(OptimalPointMatcher._point_distances(data_one, data_two)))

    @staticmethod
    def rms_point_distance(
        data_one: numpy.ndarray | list[list[float]],
        data_two: numpy.ndarray | list[list[float]]
    ) -> float:
        point_distances: numpy.ndarray = OptimalPointMatcher._point_distances(data_one, data_two)
        return float(numpy.sqrt(numpy.mean(numpy.square(point_distances))))
