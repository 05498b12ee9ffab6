from enum import StrEnum
import logging
from typing import Final


class SeverityLabel(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


SEVERITY_LABEL_TO_INT: Final[dict[SeverityLabel, int]] = {
    SeverityLabel.DEBUG: logging.DEBUG,
    SeverityLabel.INFO: logging.INFO,
    SeverityLabel.WARNING: logging.WARNING,
    SeverityLabel.ERROR: logging.ERROR,
    SeverityLabel.CRITICAL: logging.CRITICAL}
