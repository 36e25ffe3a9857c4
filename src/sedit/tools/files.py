"""UTF-8 file access for the batch handler, preserving on-disk line endings."""

from __future__ import annotations

import difflib
import errno
import re
from pathlib import Path
from typing import Any, Mapping, Protocol


class FileAccessError(RuntimeError):
    """Raised when a file cannot be read or written."""

    def __init__(self, message: str, *, code: str | None = None, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = dict(details or {})


class EditFileNotFoundError(FileAccessError):
    """Raised when the file targeted by an edit does not exist."""


class FileStore(Protocol):
    """Reader/writer pair consumed by :func:`sedit.tools.edit_files.edit_files`."""

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, text: str) -> None: ...


def _errno_name(error: OSError) -> str | None:
    if error.errno is None:
        return None
    return errno.errorcode.get(error.errno)


def _os_details(path: Path, operation: str, error: OSError | None = None) -> dict[str, Any]:
    details: dict[str, Any] = {"path": str(path), "operation": operation}
    if error is not None and error.errno is not None:
        details["errno"] = error.errno
    return details


class LocalFileStore:
    """Read and write files on the local filesystem without newline translation."""

    encoding = "utf-8"

    def read_text(self, path: Path) -> str:
        try:
            with Path(path).open("r", encoding=self.encoding, newline="") as handle:
                return handle.read()
        except FileNotFoundError as error:
            raise EditFileNotFoundError(
                f"File not found: {path}", code="ENOENT", details=_os_details(path, "read", error)
            ) from error
        except UnicodeDecodeError as error:
            raise FileAccessError(
                f"File is not valid UTF-8: {path}", code="EILSEQ", details=_os_details(path, "read")
            ) from error
        except OSError as error:
            raise FileAccessError(
                f"Unable to read {path}: {error.strerror or error}",
                code=_errno_name(error),
                details=_os_details(path, "read", error),
            ) from error

    def write_text(self, path: Path, text: str) -> None:
        try:
            with Path(path).open("w", encoding=self.encoding, newline="") as handle:
                handle.write(text)
        except OSError as error:
            raise FileAccessError(
                f"Unable to write {path}: {error.strerror or error}",
                code=_errno_name(error),
                details=_os_details(path, "write", error),
            ) from error


_LINE_BREAK = re.compile(r"\r\n|\n")


def split_line_endings(text: str) -> tuple[list[str], list[str]]:
    """Split ``text`` into line bodies and the terminator that ended each one.

    The final body always carries an empty terminator, so
    ``"\\n".join(bodies)`` is the LF-normalised text.
    """
    bodies: list[str] = []
    endings: list[str] = []
    position = 0
    for match in _LINE_BREAK.finditer(text):
        bodies.append(text[position : match.start()])
        endings.append(match.group())
        position = match.end()
    bodies.append(text[position:])
    endings.append("")
    return bodies, endings


def detect_newline(text: str) -> str:
    """Return the dominant line terminator of ``text`` (LF unless CRLF outnumbers it)."""
    crlf = text.count("\r\n")
    lf = text.count("\n") - crlf
    return "\r\n" if crlf > lf else "\n"


def normalise_line_endings(text: str) -> str:
    """Convert CRLF terminators to LF."""
    return "\n".join(split_line_endings(text)[0])


def restore_line_endings(original: str, edited: str, newline: str) -> str:
    """Re-terminate LF-normalised ``edited`` text using the endings of ``original``.

    Lines carried over from ``original`` keep their own terminator. Replaced
    lines reuse the terminator of the line they replace, and inserted lines
    take ``newline``.
    """
    if "\r\n" not in original:
        return edited
    bodies, endings = split_line_endings(original)
    edited_lines = edited.split("\n")
    matcher = difflib.SequenceMatcher(None, bodies, edited_lines, autojunk=False)
    terminators: list[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            terminators.extend(endings[i1:i2])
        elif tag in ("replace", "insert"):
            for offset in range(j2 - j1):
                terminators.append(endings[i1 + offset] if i1 + offset < i2 else newline)

    last = len(edited_lines) - 1
    chunks = []
    for index, line in enumerate(edited_lines):
        if index == last:
            chunks.append(line)
        else:
            chunks.append(line + (terminators[index] or newline))
    return "".join(chunks)


__all__ = [
    "EditFileNotFoundError",
    "FileAccessError",
    "FileStore",
    "LocalFileStore",
    "detect_newline",
    "normalise_line_endings",
    "restore_line_endings",
    "split_line_endings",
]
