from enum import IntEnum, StrEnum
from pydantic import BaseModel, Field


class PointType(IntEnum):
    TWO_D = 0
    THREE_D = 1

    def dimension(self) -> int:
        return 2 if self == PointType.TWO_D else 3


class RotationComposition(StrEnum):
    # rotation = last_rotation @ incremental_rotation, valid in any dimension
    MATRIX = "matrix"
    # sum of angles read from element [1][0], only meaningful for 2D rotations
    ANGLE_2D = "angle_2d"


class ICPSettings(BaseModel):
    point_type: PointType = Field()

    # ICP always runs exactly this many iterations
    max_iterations: int = Field(ge=0)

    rotation_composition: RotationComposition = Field(default=RotationComposition.MATRIX)

    # Optional initial guess, in the same (right-multiplied) convention as the solved rotation.
    initial_rotation: list[list[float]] | None = Field(default=None)
    initial_translation: list[float] | None = Field(default=None)

    def dimension(self) -> int:
        return self.point_type.dimension()
