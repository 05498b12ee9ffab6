from .exceptions import \
    ICPError, \
    ICPIndexOutOfRangeError, \
    ICPInvalidInputError
from .status_messages import \
    SEVERITY_LABEL_TO_INT, \
    SeverityLabel
from .structures import \
    ICPSettings, \
    IterativeClosestPointOutput, \
    Point, \
    PointType, \
    RotationComposition
from .util import \
    IOUtils, \
    OptimalPointMatcher
