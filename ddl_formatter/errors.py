class DdlError(Exception):
    pass


class InvalidArgument(DdlError, ValueError):
    """Raised when a statement builder receives arguments of the wrong shape."""
