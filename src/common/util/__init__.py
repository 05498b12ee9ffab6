from .io_utils import IOUtils
from .optimal_point_matcher import OptimalPointMatcher
