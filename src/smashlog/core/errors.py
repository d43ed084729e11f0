"""
Exception classes for smashlog.

Centralized location for the battle log error taxonomy. Every parse failure
raises one of these and aborts the whole parse.
"""


class BattleLogError(Exception):
    """Base exception for all battle log reading and parsing errors."""

    kind = "Battle log error"

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        super().__init__(message)

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"{self.kind}: line {self.line_number}: {self.message}"
        return f"{self.kind}: {self.message}"


class LogIOError(BattleLogError):
    """The log could not be read (missing file, permission denied, read fault)."""

    kind = "I/O error"


class InvalidFormatError(BattleLogError, ValueError):
    """A line had the wrong number of comma-separated fields."""

    kind = "Invalid format"

    def __init__(self, message: str, line: str, line_number: int | None = None) -> None:
        self.line = line
        super().__init__(message, line_number)


class FieldParseError(BattleLogError, ValueError):
    """A field had the right shape but could not be converted to a number."""

    kind = "Parse error"

    def __init__(self, message: str, text: str, line_number: int | None = None) -> None:
        self.text = text
        super().__init__(message, line_number)


class EmptyDataError(BattleLogError):
    """The log has no header line, or a header but no action records."""

    kind = "Empty data"
