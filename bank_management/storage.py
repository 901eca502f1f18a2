"""
Storage Backend Module

Provides an abstract storage interface and implementations for in-memory
(testing) and text-file (persistence) use. Account data is stored as one
labelled block per account:

    Customer Name: Asha
    Customer Address: 12 Oak St
    Customer Contact: 9876543210
    Account Number: 1234567890123
    Balance: 650.00
    <blank line>

Lines are read as "label: value" pairs and trimmed, so the reader does not
depend on column offsets. The writer keeps the labels and field order above.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import copy

from .accounts import parse_account_number, validate_account_number
from .amounts import to_amount
from .customers import is_single_line
from .exceptions import (
    InvalidAccountNumberError, InvalidAmountError, StorageError, StorageFormatError
)

# (label, record key) in the order they are written
FIELDS = (
    ("Customer Name", "name"),
    ("Customer Address", "address"),
    ("Customer Contact", "contact"),
    ("Account Number", "account_number"),
    ("Balance", "balance"),
)

LABEL_TO_KEY = dict(FIELDS)


def dumps(records: List[Dict[str, Any]]) -> str:
    """
    Serialize account records to the labelled block format

    Raises:
        StorageFormatError: If a value spans more than one line
    """
    lines = []
    for record in records:
        for label, key in FIELDS:
            value = str(record[key])
            if not is_single_line(value):
                raise StorageFormatError(f"{label} may not contain a line break")
            lines.append(f"{label}: {value}")
        lines.append("")
    return "".join(line + "\n" for line in lines)


def loads(text: str) -> List[Dict[str, Any]]:
    """
    Parse the labelled block format into account records

    Each record has name, address and contact strings, an int
    account_number and a Decimal balance.

    Raises:
        StorageFormatError: On unknown, duplicate or missing labels,
            unparseable numbers, or an account number that is not 13 digits
            or appears twice
    """
    records = []
    block: Dict[str, str] = {}
    block_start = 0
    seen = set()

    # Only \n ends a line; other Unicode line boundaries stay inside values
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            if block:
                records.append(_parse_block(block, block_start, seen))
                block = {}
            continue

        if ":" not in line:
            raise StorageFormatError(f"expected 'label: value', got {line!r}", line_number)

        label, value = line.split(":", 1)
        label = label.strip()
        key = LABEL_TO_KEY.get(label)
        if key is None:
            raise StorageFormatError(f"unknown label {label!r}", line_number)
        if not block:
            block_start = line_number
        if key in block:
            raise StorageFormatError(f"duplicate label {label!r}", line_number)
        block[key] = value.strip()

    if block:
        records.append(_parse_block(block, block_start, seen))

    return records


def _parse_block(block: Dict[str, str], line_number: int, seen: set) -> Dict[str, Any]:
    missing = [label for label, key in FIELDS if key not in block]
    if missing:
        raise StorageFormatError(f"missing {', '.join(missing)}", line_number)

    try:
        account_number = validate_account_number(parse_account_number(block["account_number"]))
    except InvalidAccountNumberError:
        raise StorageFormatError(
            f"invalid account number {block['account_number']!r}", line_number
        ) from None
    if account_number in seen:
        raise StorageFormatError(f"duplicate account number {account_number}", line_number)
    seen.add(account_number)

    try:
        balance = to_amount(block["balance"])
    except InvalidAmountError:
        raise StorageFormatError(f"invalid balance {block['balance']!r}", line_number) from None

    return {
        "name": block["name"],
        "address": block["address"],
        "contact": block["contact"],
        "account_number": account_number,
        "balance": balance,
    }


class StorageInterface(ABC):
    """Abstract interface for storage backends"""

    @abstractmethod
    def save_all(self, records: List[Dict[str, Any]]) -> None:
        """Replace the stored data with the given account records"""
        pass

    @abstractmethod
    def load_all(self) -> Optional[List[Dict[str, Any]]]:
        """Load all account records, or None when nothing has been stored"""
        pass

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the stored data"""
        pass


class InMemoryStorage(StorageInterface):
    """In-memory storage for testing"""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self._records = copy.deepcopy(records) if records is not None else None

    def save_all(self, records: List[Dict[str, Any]]) -> None:
        self._records = copy.deepcopy(records)

    def load_all(self) -> Optional[List[Dict[str, Any]]]:
        if self._records is None:
            return None
        return copy.deepcopy(self._records)

    @property
    def location(self) -> str:
        return "memory"


class TextFileStorage(StorageInterface):
    """Text file storage in the labelled block format"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def save_all(self, records: List[Dict[str, Any]]) -> None:
        content = dumps(records)
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as e:
            raise StorageError(f"Unable to write {self.path}: {e}") from e

    def load_all(self) -> Optional[List[Dict[str, Any]]]:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                text = handle.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Unable to read {self.path}: {e}") from e
        return loads(text)

    @property
    def location(self) -> str:
        return str(self.path)

