"""CSV reader for secret definitions.

The file must have a header row. The header is inspected to find the
"name" and "value" columns and an optional "description" column; any
other columns are ignored.
"""
import csv
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import FormatError
from .models import SecretRecord
from .validators import validate_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "value")
OPTIONAL_COLUMNS = ("description",)


class _LineRecorder:
    """Line iterator that keeps the raw text of the lines handed to the csv reader."""

    def __init__(self, lines):
        self._lines = iter(lines)
        self._taken: List[str] = []

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self._taken.append(line)
        return line

    def take(self) -> str:
        """Return the raw text read since the last call."""
        text = "".join(self._taken)
        self._taken = []
        return text


def _has_bare_quote(raw: str) -> bool:
    """
    Report whether a raw record has a quote inside a non-quoted field.

    The csv module keeps such quotes as literal characters; strict CSV
    only allows a quote as the first character of a field.
    """
    quoted = False
    field_start = True
    i = 0
    while i < len(raw):
        c = raw[i]
        if quoted:
            if c == '"':
                if raw[i + 1:i + 2] == '"':
                    i += 1
                else:
                    quoted = False
        elif c == '"':
            if not field_start:
                return True
            quoted = True
        field_start = not quoted and c in ",\r\n"
        i += 1
    return False


def build_column_map(header: List[str]) -> Dict[str, int]:
    """
    Map recognized column names to their position in the header.

    Matching ignores case and surrounding whitespace.

    Args:
        header: Cells of the header row

    Returns:
        Dict of column name -> index, "description" present only if found

    Raises:
        FormatError: If a required column is missing or a recognized column repeats
    """
    recognized = REQUIRED_COLUMNS + OPTIONAL_COLUMNS
    columns: Dict[str, int] = {}

    for index, cell in enumerate(header):
        key = cell.strip().lower()
        if key not in recognized:
            continue
        if key in columns:
            raise FormatError(f"csv header: duplicate column {key!r}")
        columns[key] = index

    missing = [key for key in REQUIRED_COLUMNS if key not in columns]
    if missing:
        raise FormatError(
            f"csv header: missing required column(s): {', '.join(missing)}"
        )

    return columns


def _decode_row(row: List[str], columns: Dict[str, int], line: int) -> SecretRecord:
    desc_index: Optional[int] = columns.get("description")
    return SecretRecord(
        name=row[columns["name"]],
        value=row[columns["value"]],
        description=row[desc_index] if desc_index is not None else "",
        line=line,
    )


def _rows(reader, source: _LineRecorder) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (first line, row) for non-blank rows.

    Reader failures and bare quotes are raised as FormatError.
    """
    while True:
        line = reader.line_num + 1
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise FormatError(f"csv line {line}: {e}") from e
        except UnicodeDecodeError as e:
            raise FormatError(f"csv line {line}: {e}") from e

        if _has_bare_quote(source.take()):
            raise FormatError(f'csv line {line}: bare " in non-quoted field')

        if row:
            yield line, row


def read_secrets(path: str) -> List[SecretRecord]:
    """
    Read and validate secret records from a CSV file.

    Args:
        path: Path to the CSV file

    Returns:
        Records in file order; empty list if the file has only a header

    Raises:
        OSError: If the file cannot be opened or read
        FormatError: If the header is missing or invalid, or a row is malformed
        ValidationError: If a record has an empty name or value
    """
    records: List[SecretRecord] = []

    # utf-8-sig drops a leading BOM left by spreadsheet exports
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        source = _LineRecorder(f)
        reader = csv.reader(source, strict=True)
        rows = _rows(reader, source)

        first = next(rows, None)
        if first is None:
            raise FormatError("csv header read: file is empty")
        _, header = first

        columns = build_column_map(header)
        logger.debug(f"Column mapping for {path}: {columns}")

        for line, row in rows:
            if len(row) != len(header):
                raise FormatError(
                    f"csv line {line}: wrong number of fields "
                    f"(got {len(row)}, want {len(header)})"
                )
            record = _decode_row(row, columns, line)
            validate_record(record)
            records.append(record)

    logger.info(f"Read {len(records)} secret(s) from {path}")
    return records
