class ICPError(Exception):
    message: str

    def __init__(self, message: str, *args):
        super().__init__(message, *args)
        self.message = message


class ICPInvalidInputError(ICPError):
    """
    Raised when matrices or settings handed to the solver do not satisfy its preconditions
    (mismatched shapes, wrong dimensionality, empty point sets, ...).
    """

    def __init__(self, message: str, *args):
        super().__init__(message, *args)


class ICPIndexOutOfRangeError(ICPError, IndexError):
    index: int
    size: int

    def __init__(self, index: int, size: int, *args):
        super().__init__(f"Index {index} is out of range for a point of size {size}.", *args)
        self.index = index
        self.size = size
