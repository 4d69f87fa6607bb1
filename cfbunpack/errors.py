class CFBError(Exception):
    """Base class for every error raised while decoding a compound file."""

class CFBFormatError(CFBError, ValueError):
    """The container violates a structural invariant of the format."""

class CFBIOError(CFBError, OSError):
    """The underlying storage failed, independently of the container contents."""
