"""BUCL runtime exception types.

Every runtime failure derives from bucl.errors.BuclError, so hosts can
catch front-end and runtime errors with one except clause:
  bad arguments, bad numbers:   BuclRuntimeError
  no built-in or script found:  UnknownFunctionError
  file system failures:         BuclIOError
  malformed bucl.config:        BuclConfigError
"""

from bucl.errors import BuclError


class BuclRuntimeError(BuclError):
    """Evaluation failed."""
    pass


class UnknownFunctionError(BuclError):
    """No built-in and no function script matches the called name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function: '{name}'")


class BuclIOError(BuclError):
    """File operation failed."""
    pass


class BuclConfigError(BuclError):
    """Configuration error."""
    pass
