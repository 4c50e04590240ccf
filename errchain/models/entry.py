"""Error chain entry models."""

from datetime import datetime, timezone
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


# Timestamp reported for headers outside a chain's bounds.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class Header(NamedTuple):
    """Location and creation time of a single chain entry."""

    file: str
    line: int
    timestamp: datetime


MISSING_HEADER = Header("", -1, ZERO_TIME)


class ErrorEntry(BaseModel):
    """One layer of an error chain."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    timestamp: datetime
    file: str
    line: int
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error)

    def header(self) -> Header:
        return Header(self.file, self.line, self.timestamp)
