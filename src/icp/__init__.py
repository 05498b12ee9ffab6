from .correspondence import \
    BruteForceCorrespondenceSearch, \
    CorrespondenceSearch
from .fileio import \
    ICPConfiguration, \
    load_icp_configuration
from .iterative_closest_point import \
    IterativeClosestPoint
