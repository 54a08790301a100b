"""
Exceptions raised by sukilog.

Builders never raise on bad data; only sink construction and the
panic level surface exceptions to the caller.
"""


class SukiLogError(Exception):
    """Base class for sukilog exceptions"""
    pass


class SinkBuildError(SukiLogError):
    """Raised when the backend sink cannot be constructed"""
    pass


class PanicError(SukiLogError):
    """
    Raised after a record is emitted at PANIC level.

    Attributes:
        message: The log message that triggered the panic
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
