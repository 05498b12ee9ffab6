import numpy


class IterativeClosestPointOutput:
    rotation: numpy.ndarray  # d x d, applied by right-multiplication
    translation: numpy.ndarray  # d x 1, added before rotating
    transformed_reference: numpy.ndarray
    iteration_count: int

    # sum of per-point distances before the first iteration, then after each iteration
    initial_error: float
    errors: list[float]

    # conventional metrics of the final alignment
    mean_point_distance: float
    rms_point_distance: float  # root-mean-square

    def __init__(
        self,
        rotation: numpy.ndarray,
        translation: numpy.ndarray,
        transformed_reference: numpy.ndarray,
        iteration_count: int,
        initial_error: float,
        errors: list[float],
        mean_point_distance: float,
        rms_point_distance: float
    ):
        self.rotation = rotation
        self.translation = translation
        self.transformed_reference = transformed_reference
        self.iteration_count = iteration_count
        self.initial_error = initial_error
        self.errors = errors
        self.mean_point_distance = mean_point_distance
        self.rms_point_distance = rms_point_distance

    def final_error(self) -> float:
        if len(self.errors) == 0:
            return self.initial_error
        return self.errors[-1]
