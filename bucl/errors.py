"""BUCL error types with source location info."""


class BuclError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        if line:
            super().__init__(f"Line {line}, Col {column}: {message}")
        else:
            super().__init__(message)


class ParseError(BuclError):
    pass
