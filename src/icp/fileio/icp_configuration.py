from src.common.exceptions import ICPInvalidInputError
from src.common.status_messages import \
    SEVERITY_LABEL_TO_INT, \
    SeverityLabel
from src.common.structures import ICPSettings
from src.common.util import IOUtils
import logging
from pydantic import BaseModel, Field, ValidationError
from typing import Final


logger = logging.getLogger(__name__)

# parent of every module logger in this project
PACKAGE_LOGGER_NAME: Final[str] = "src"


class ICPConfiguration(BaseModel):
    settings: ICPSettings = Field()
    log_level: SeverityLabel = Field(default=SeverityLabel.INFO)

    def logging_level(self) -> int:
        return SEVERITY_LABEL_TO_INT[self.log_level]

    def apply_logging_level(self) -> None:
        """
        Set the level of the package logger, which every module logger here inherits from.
        """
        logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(self.logging_level())


def load_icp_configuration(
    filepath: str
) -> ICPConfiguration:
    """
    Read ICP settings from an hjson file, for example:
        {
            settings: {
                point_type: 0
                max_iterations: 20
                rotation_composition: matrix
            }
            log_level: info
        }
    Only settings are read here, point data is supplied by the caller.
    The configured log_level is applied to the package logger.
    """
    json_dict: dict | None = IOUtils.hjson_read(
        filepath=filepath,
        on_error_for_user=logger.warning,
        on_error_for_dev=logger.error)
    if not json_dict:
        raise ICPInvalidInputError(f"Failed to load ICP configuration from file {filepath}.")
    configuration: ICPConfiguration
    try:
        configuration = ICPConfiguration(**json_dict)
    except ValidationError as e:
        logger.error(e)
        raise ICPInvalidInputError(f"Failed to parse ICP configuration from file {filepath}.") from e
    configuration.apply_logging_level()
    return configuration
