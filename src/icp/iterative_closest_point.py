# Algorithm is based on ICP: Besl and McKay. Method for registration of 3-D shapes. 1992.
from .correspondence import \
    BruteForceCorrespondenceSearch, \
    CorrespondenceSearch
from src.common.exceptions import ICPInvalidInputError
from src.common.structures import \
    ICPSettings, \
    IterativeClosestPointOutput, \
    RotationComposition
from src.common.util import OptimalPointMatcher
import logging
import math
import numpy
from typing import Final


logger = logging.getLogger(__name__)

# Tolerance when checking that an initial rotation is orthonormal
_ORTHONORMAL_TOLERANCE: Final[float] = 0.000001


class _TransformState:
    """
    Accumulated transform at the end of one iteration.
    working_reference is always the original reference under (translation, rotation).
    """

    rotation: numpy.ndarray
    translation: numpy.ndarray
    working_reference: numpy.ndarray

    def __init__(
        self,
        rotation: numpy.ndarray,
        translation: numpy.ndarray,
        working_reference: numpy.ndarray
    ):
        self.rotation = rotation
        self.translation = translation
        self.working_reference = working_reference


class IterativeClosestPoint:
    """
    Iterative closest point algorithm. It is assumed that a row in both the
    reference and target data is a point. Runs exactly settings.max_iterations
    iterations, there is no tolerance-based termination.
    The solved transform maps the reference onto the target as
    OptimalPointMatcher.apply_transformation(reference, translation, rotation).
    """

    _reference: numpy.ndarray
    _target: numpy.ndarray
    _settings: ICPSettings
    _correspondence_search: CorrespondenceSearch

    _initial_rotation: numpy.ndarray
    _initial_translation: numpy.ndarray

    # outputs of the last solve()
    _state: _TransformState
    _errors: list[float]

    def __init__(
        self,
        reference: numpy.ndarray | list[list[float]],
        target: numpy.ndarray | list[list[float]],
        settings: ICPSettings,
        correspondence_search: CorrespondenceSearch | None = None
    ):
        """
        :param reference: points to be moved, one per row
        :param target: points to align onto, same shape as reference
        :param settings:
        :param correspondence_search: defaults to a brute force nearest neighbour search
        """
        dimension: int = settings.dimension()
        self._reference = self._validated_point_set(reference, label="reference", dimension=dimension)
        self._target = self._validated_point_set(target, label="target", dimension=dimension)
        if self._reference.shape != self._target.shape:
            self._reject(
                f"reference and target must have the same shape. "
                f"Got {self._reference.shape} and {self._target.shape}.")

        if settings.rotation_composition == RotationComposition.ANGLE_2D and dimension != 2:
            self._reject(f"Rotation composition {settings.rotation_composition} only supports 2D points.")

        self._initial_rotation = numpy.identity(dimension, dtype="float64")
        if settings.initial_rotation is not None:
            initial_rotation = numpy.array(settings.initial_rotation, dtype="float64")
            if initial_rotation.shape != (dimension, dimension):
                self._reject(f"initial_rotation must be {dimension}x{dimension}. Got {initial_rotation.shape}.")
            if not numpy.allclose(
                numpy.matmul(initial_rotation, initial_rotation.transpose()),
                numpy.identity(dimension),
                atol=_ORTHONORMAL_TOLERANCE
            ):
                self._reject("initial_rotation must be orthonormal.")
            if numpy.linalg.det(initial_rotation) < 0:
                self._reject("initial_rotation must be a proper rotation (determinant +1), not a reflection.")
            self._initial_rotation = initial_rotation

        self._initial_translation = numpy.zeros((dimension, 1), dtype="float64")
        if settings.initial_translation is not None:
            if len(settings.initial_translation) != dimension:
                self._reject(
                    f"initial_translation must have {dimension} values. "
                    f"Got {len(settings.initial_translation)}.")
            self._initial_translation = \
                numpy.array(settings.initial_translation, dtype="float64").reshape((dimension, 1))

        # private copy of the settings validated above
        self._settings = settings.model_copy(deep=True)
        if correspondence_search is None:
            correspondence_search = BruteForceCorrespondenceSearch()
        self._correspondence_search = correspondence_search
        self._state = self._initial_state()
        self._errors = list()

    @staticmethod
    def _reject(message: str) -> None:
        logger.error(message)
        raise ICPInvalidInputError(message)

    @staticmethod
    def _validated_point_set(
        points: numpy.ndarray | list[list[float]],
        label: str,
        dimension: int
    ) -> numpy.ndarray:
        matrix: numpy.ndarray = numpy.array(points, dtype="float64")
        if matrix.ndim != 2:
            IterativeClosestPoint._reject(f"{label} must be a 2D matrix (one point per row).")
        if matrix.shape[0] == 0:
            IterativeClosestPoint._reject(f"{label} must contain at least one point.")
        if matrix.shape[1] != dimension:
            IterativeClosestPoint._reject(
                f"{label} must have {dimension} columns for {dimension}D points. Got {matrix.shape[1]}.")
        return matrix

    def _initial_state(self) -> _TransformState:
        return _TransformState(
            rotation=numpy.array(self._initial_rotation),
            translation=numpy.array(self._initial_translation),
            working_reference=OptimalPointMatcher.apply_transformation(
                data=self._reference,
                translation=self._initial_translation,
                rotation=self._initial_rotation))

    def solve(self) -> IterativeClosestPointOutput:
        state: _TransformState = self._initial_state()
        initial_error: float = OptimalPointMatcher.rmse(self._target, state.working_reference)
        errors: list[float] = list()

        iterations_remaining: int = self._settings.max_iterations
        while iterations_remaining > 0:
            last_rotation: numpy.ndarray = state.rotation

            closest: numpy.ndarray = self._correspondence_search.find_closest(
                reference=state.working_reference,
                target=self._target)

            incremental_rotation: numpy.ndarray = OptimalPointMatcher.solve_for_optimal_rotation(
                ref=state.working_reference,
                target=closest)
            rotation: numpy.ndarray = self._compose_rotation(
                last_rotation=last_rotation,
                incremental_rotation=incremental_rotation)

            # translation is re-solved against the original reference, not accumulated
            translation: numpy.ndarray = OptimalPointMatcher.solve_for_optimal_translation(
                ref=self._reference,
                target=closest,
                rotation=rotation)

            state = _TransformState(
                rotation=rotation,
                translation=translation,
                working_reference=OptimalPointMatcher.apply_transformation(
                    data=self._reference,
                    translation=translation,
                    rotation=rotation))

            error: float = OptimalPointMatcher.rmse(self._target, state.working_reference)
            errors.append(error)
            logger.info(f"Iteration {len(errors)} of {self._settings.max_iterations}: error {error}")

            iterations_remaining -= 1

        self._state = state
        self._errors = errors
        return IterativeClosestPointOutput(
            rotation=self.get_best_rotation(),
            translation=self.get_best_translation(),
            transformed_reference=self.get_transformed_reference(),
            iteration_count=len(errors),
            initial_error=initial_error,
            errors=list(errors),
            mean_point_distance=OptimalPointMatcher.mean_point_distance(self._target, state.working_reference),
            rms_point_distance=OptimalPointMatcher.rms_point_distance(self._target, state.working_reference))

    def get_best_translation(self) -> numpy.ndarray:
        return numpy.array(self._state.translation)

    def get_best_rotation(self) -> numpy.ndarray:
        return numpy.array(self._state.rotation)

    def get_transformed_reference(self) -> numpy.ndarray:
        return numpy.array(self._state.working_reference)

    def get_errors(self) -> list[float]:
        return list(self._errors)

    def _compose_rotation(
        self,
        last_rotation: numpy.ndarray,
        incremental_rotation: numpy.ndarray
    ) -> numpy.ndarray:
        if self._settings.rotation_composition == RotationComposition.ANGLE_2D:
            angle_degrees: float = \
                self._rotation_matrix_to_degrees(last_rotation) + \
                self._rotation_matrix_to_degrees(incremental_rotation)
            return self._degrees_to_rotation_matrix(angle_degrees)
        # rotations are right-multiplied, so the newest one goes last
        return numpy.matmul(last_rotation, incremental_rotation)

    @staticmethod
    def _rotation_matrix_to_degrees(
        rotation: numpy.ndarray
    ) -> float:
        # asin only covers [-90, 90] degrees
        return math.degrees(math.asin(min(1.0, max(-1.0, float(rotation[1, 0])))))

    @staticmethod
    def _degrees_to_rotation_matrix(
        angle_degrees: float
    ) -> numpy.ndarray:
        angle_radians: float = math.radians(angle_degrees)
        return numpy.array([
            [math.cos(angle_radians), -math.sin(angle_radians)],
            [math.sin(angle_radians), math.cos(angle_radians)]])
