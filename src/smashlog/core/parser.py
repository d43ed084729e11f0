"""
Battle Log Parser

Reads a comma-delimited battle log into a BattleLog.

File format:
    b1022024,1          <- student_id,match_number
    1.04,us             <- timestamp,action_code
    1.64,ss
    2.41,ds

Blank lines after the header are skipped. Line numbers in error messages are
physical (1-based) positions in the file, so skipped lines still count.
Any error aborts the parse; no partial log is ever returned.
"""

import codecs
import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from smashlog.core.errors import (
    EmptyDataError,
    FieldParseError,
    InvalidFormatError,
    LogIOError,
)
from smashlog.core.models import ActionRecord, BattleLog, PlayerHeader
from smashlog.core.taxonomy import classify, is_known_code

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ","
HEADER_FIELDS = "student_id,match_number"
ACTION_FIELDS = "timestamp,action_code"

# No digit separators; timestamps also take inf/infinity/nan in any case
_MATCH_NUMBER_RE = re.compile(r"\+?[0-9]+")
_TIMESTAMP_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _strip_newline(line: str) -> str:
    return line.rstrip("\r\n")


def _split_fields(line: str) -> list[str]:
    return line.split(FIELD_DELIMITER)


def parse_header(line: str) -> PlayerHeader:
    """
    Parse the first line of a log into a PlayerHeader.

    Raises:
        InvalidFormatError: If the line does not have exactly two fields
        FieldParseError: If the match number is not a non-negative integer
    """
    parts = _split_fields(line)
    if len(parts) != 2:
        raise InvalidFormatError(
            f"first line must be in the form '{HEADER_FIELDS}', got: {line}",
            line=line,
            line_number=1,
        )

    student_id = parts[0].strip()
    match_text = parts[1].strip()
    if not _MATCH_NUMBER_RE.fullmatch(match_text):
        raise FieldParseError(
            f"match number is not a non-negative integer: {parts[1]}",
            text=parts[1],
            line_number=1,
        )

    return PlayerHeader(student_id=student_id, match_number=int(match_text))


def parse_action_line(line: str, line_number: int) -> ActionRecord:
    """
    Parse one "timestamp,action_code" line into an ActionRecord.

    Args:
        line: Line content without the trailing newline
        line_number: Physical line number, used in error messages

    Raises:
        InvalidFormatError: If the line does not have exactly two fields
        FieldParseError: If the timestamp is not a number
    """
    parts = _split_fields(line)
    if len(parts) != 2:
        raise InvalidFormatError(
            f"expected '{ACTION_FIELDS}', got: {line}",
            line=line,
            line_number=line_number,
        )

    timestamp_text = parts[0].strip()
    if not _TIMESTAMP_RE.fullmatch(timestamp_text):
        raise FieldParseError(
            f"timestamp is not a number: {parts[0]}",
            text=parts[0],
            line_number=line_number,
        )

    raw_code = parts[1].strip()
    return ActionRecord(
        timestamp=float(timestamp_text),
        category=classify(raw_code),
        raw_code=raw_code,
    )


def _iter_actions(lines: Iterator[str]) -> Iterator[ActionRecord]:
    """Parse the remaining lines, starting at physical line 2."""
    for line_number, raw_line in enumerate(lines, start=2):
        line = _strip_newline(raw_line).strip()
        if not line:
            logger.debug(f"Skipping blank line {line_number}")
            continue
        yield parse_action_line(line, line_number)


def parse_lines(lines: Iterable[str]) -> BattleLog:
    """
    Parse a battle log from a sequence of text lines.

    Args:
        lines: Lines of the log, with or without trailing newlines. A file
            object opened in text mode works directly.

    Returns:
        BattleLog with the header and at least one action

    Raises:
        EmptyDataError: If there is no header line or no action lines
        InvalidFormatError: If a line has the wrong number of fields
        FieldParseError: If a numeric field cannot be converted
    """
    line_iter = iter(lines)

    first_line = next(line_iter, None)
    if first_line is None:
        raise EmptyDataError("file is empty")

    header = parse_header(_strip_newline(first_line))
    actions = tuple(_iter_actions(line_iter))

    if not actions:
        raise EmptyDataError("no action records found")

    unknown = sum(1 for action in actions if not is_known_code(action.raw_code))
    if unknown:
        logger.debug(f"{unknown} action(s) used codes outside the action tables")

    logger.info(
        f"Parsed {len(actions)} actions for {header.student_id} "
        f"(match {header.match_number})"
    )
    return BattleLog(header=header, actions=actions)


def read_battle_log(log_path: str | Path, encoding: str = "utf-8") -> BattleLog:
    """
    Read and parse a battle log file.

    Args:
        log_path: Path to the log file
        encoding: Text encoding of the file

    Returns:
        Parsed BattleLog

    Raises:
        LogIOError: If the file cannot be opened or read, or the encoding is unknown
        BattleLogError: For any format or content error (see parse_lines)
    """
    log_path = Path(log_path)
    logger.info(f"Reading battle log: {log_path}")

    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise LogIOError(f"cannot read {log_path}: {e}") from e

    try:
        with open(log_path, encoding=encoding) as f:
            return parse_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        raise LogIOError(f"cannot read {log_path}: {e}") from e


class BattleLogParser:
    """
    Parser bound to a single battle log file.

    Usage:
        parser = BattleLogParser("match1.csv")
        log = parser.parse()
    """

    def __init__(self, log_path: str | Path, encoding: str = "utf-8"):
        self.log_path = Path(log_path)
        self.encoding = encoding
        self._log: BattleLog | None = None

    def parse(self) -> BattleLog:
        """Parse the file, caching the result for repeated calls."""
        if self._log is None:
            self._log = read_battle_log(self.log_path, encoding=self.encoding)
        return self._log


def parse_battle_log(log_path: str | Path, encoding: str = "utf-8") -> BattleLog:
    """Convenience function to parse a battle log file."""
    return BattleLogParser(log_path, encoding=encoding).parse()
