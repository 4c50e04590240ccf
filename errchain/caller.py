"""
Caller location capture.

Entries record the file and line of the code that created them. The
lookup walks the interpreter's frame stack, so callers pass how many
frames above ``fileline`` itself the interesting call site sits.
"""

import inspect
import os
from types import FrameType
from typing import Optional, Tuple

UNKNOWN_FILE = "???"
UNKNOWN_LINE = 1


def fileline(depth: int) -> Tuple[str, int]:
    """
    Return the base file name and line of the frame ``depth`` levels up.

    Depth 0 is ``fileline`` itself, 1 is its caller, and so on.

    Args:
        depth: Number of frames to skip

    Returns:
        Tuple of (file base name, line number), or ("???", 1) when the
        stack is not that deep
    """
    frame: Optional[FrameType] = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                break
            frame = frame.f_back

        if frame is None:
            return UNKNOWN_FILE, UNKNOWN_LINE

        return os.path.basename(frame.f_code.co_filename), frame.f_lineno
    finally:
        # Frames hold references to their locals
        del frame
