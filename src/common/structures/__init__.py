from .icp_output import \
    IterativeClosestPointOutput
from .icp_settings import \
    ICPSettings, \
    PointType, \
    RotationComposition
from .point import \
    Point
