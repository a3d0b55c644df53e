"""
Source location capture for declaration-time records.

Declarations (helpers, examples, templates, inclusions) remember where they
were written so errors can point the author at the offending line.
"""

import inspect
import os

from attrs import frozen

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@frozen
class SourceLocation:
    """File and line where a declaration was made."""

    file: str
    line: int

    @property
    def basename(self) -> str:
        return os.path.basename(self.file)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


UNKNOWN_LOCATION = SourceLocation(file="<unknown>", line=0)


def _is_internal(filename: str) -> bool:
    return os.path.abspath(filename).startswith(_PACKAGE_DIR + os.sep)


def caller_location() -> SourceLocation:
    """
    Find the first stack frame outside the spectree package.

    Returns:
        SourceLocation of the user code that triggered the declaration, or
        UNKNOWN_LOCATION when the interpreter exposes no frames.
    """
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if not _is_internal(filename):
                return SourceLocation(file=filename, line=frame.f_lineno)
            frame = frame.f_back
        return UNKNOWN_LOCATION
    finally:
        del frame
