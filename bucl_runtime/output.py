"""Script output and diagnostic logging.

OutputCollector — append-only list of emitted lines with an optional
listener notified as each line is emitted.
log — ``[bucl]``-prefixed diagnostics on stderr, stdout stays script output.
"""

import sys


class OutputCollector:
    def __init__(self, listener=None):
        self.lines: list[str] = []
        self.listener = listener

    def append(self, line: str) -> None:
        """Record a newly emitted line and notify the listener."""
        self.lines.append(line)
        if self.listener is not None:
            self.listener(line)

    def extend(self, lines: list[str]) -> None:
        """Adopt lines already emitted (and announced) by a child scope."""
        self.lines.extend(lines)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self):
        return len(self.lines)


def log(message):
    """Log a message with [bucl] prefix."""
    print(f"[bucl] {message}", file=sys.stderr)
