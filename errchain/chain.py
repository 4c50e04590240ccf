"""
Error chains.

An ErrorChain is a single failure annotated with context as it travels up
the call stack:

    err = new("open %s", path)
    ...
    return wrap(err, "load config")

Every layer records the file and line that added it and when. The chain
renders as ``file:line message`` per layer, joined by `` :: ``.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from errchain.models.entry import MISSING_HEADER, ErrorEntry, Header
from errchain.caller import fileline

SEPARATOR = " :: "


def _safe_repr(x: Any) -> str:
    try:
        return repr(x)
    except Exception:
        return f"<unprintable {type(x).__name__}>"


def _sprintf(format: str, args: Tuple[Any, ...]) -> str:
    """Format eagerly, falling back to a best-effort string on bad input."""
    if not isinstance(format, str):
        format = _safe_repr(format)
    try:
        return format % args
    except Exception:
        return " ".join([format] + [_safe_repr(arg) for arg in args])


class ErrorChain(Exception):
    """
    An append-only stack of error entries.

    Index 0 is the root cause and the last index is the outermost context.
    Entries are never modified or removed once added.

    A chain is meant to be grown along one call stack. Wrapping the same
    chain from several threads needs external locking.
    """

    def __init__(self) -> None:
        super().__init__()
        self._entries: List[ErrorEntry] = []

    def depth(self) -> int:
        """Number of entries in the chain."""
        return len(self._entries)

    def header(self, i: int) -> Header:
        """File, line and timestamp of the ith entry."""
        if i < 0 or i >= self.depth():
            return MISSING_HEADER
        return self._entries[i].header()

    def msg(self, i: int) -> str:
        """Message of the ith entry."""
        if i < 0 or i >= self.depth():
            return ""
        return self._entries[i].message

    def render(self) -> str:
        parts = []
        for i in range(self.depth()):
            file, line, _ = self.header(i)
            parts.append(f"{file}:{line} {self.msg(i)}")
        return SEPARATOR.join(parts)

    def root(self) -> Optional[BaseException]:
        if not self._entries:
            return None
        return self._entries[0].error

    def _add(self, file: str, line: int, error: BaseException) -> "ErrorChain":
        self._entries.append(
            ErrorEntry(
                timestamp=datetime.now(timezone.utc),
                file=file,
                line=line,
                error=error,
            )
        )
        return self

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ErrorChain(depth={self.depth()}, {self.render()!r})"


def new(format: str, *args: Any) -> ErrorChain:
    """
    Create a chain holding a single root cause.

    Args:
        format: %-style format string
        *args: Format arguments

    Returns:
        New chain of depth 1, located at the caller
    """
    file, line = fileline(2)
    return ErrorChain()._add(file, line, Exception(_sprintf(format, args)))


def wrap(err: Optional[BaseException], format: str, *args: Any) -> Optional[ErrorChain]:
    """
    Add a layer of context on top of an error.

    Wrapping None returns None, so results can be wrapped without checking
    them first. A chain is extended in place and returned. Any other
    exception becomes the root of a new chain, located at this call since
    it carries no location of its own.

    Args:
        err: Error to annotate
        format: %-style format string
        *args: Format arguments

    Returns:
        The extended chain, or None
    """
    if err is None:
        return None

    file, line = fileline(2)
    if isinstance(err, ErrorChain):
        chain = err
    else:
        chain = ErrorChain()._add(file, line, err)
        chain.__cause__ = err

    return chain._add(file, line, Exception(_sprintf(format, args)))


def cause(err: Optional[BaseException]) -> Optional[BaseException]:
    """
    Return the root error.

    For a chain this is the error of its first entry, without any of the
    context added later. Other exceptions are their own cause.
    """
    if err is None:
        return None
    if isinstance(err, ErrorChain):
        return err.root()
    return err
