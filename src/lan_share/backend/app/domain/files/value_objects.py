# lan_share/backend/app/domain/files/value_objects.py
from __future__ import annotations

import re
import threading
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Optional

from .errors import InvalidPath

DEFAULT_UPLOAD_NAME = "upload"
MAX_ORIGINAL_NAME_CHARS = 200

_ID_PREFIX = re.compile(r"^(\d+)-(.+)$")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_original_name(name: Optional[str]) -> str:
    """
    Reduce a client supplied file name to a single safe path component.
    Directory parts (both separator styles) are dropped and control characters removed.
    """
    if not name:
        return DEFAULT_UPLOAD_NAME

    base = _CONTROL_CHARS.sub("", name.replace("\\", "/").split("/")[-1]).strip()
    # leading dots would make the blob hidden, which is reserved for partial uploads
    base = base.lstrip(".")
    if not base:
        return DEFAULT_UPLOAD_NAME

    if len(base) > MAX_ORIGINAL_NAME_CHARS:
        suffix = PurePath(base).suffix
        if len(suffix) >= MAX_ORIGINAL_NAME_CHARS:
            suffix = ""
        base = base[: MAX_ORIGINAL_NAME_CHARS - len(suffix)] + suffix
    return base


@dataclass(frozen=True)
class StoredName:
    """
    Name of a blob inside the storage directory: "<file id>-<original name>".
    Any value that could address something other than a direct child of the
    directory is rejected.
    """
    value: str

    def __post_init__(self) -> None:
        value = self.value
        if not value or value.startswith("."):
            raise InvalidPath(value)
        if "/" in value or "\\" in value or _CONTROL_CHARS.search(value):
            raise InvalidPath(value)

    @classmethod
    def compose(cls, file_id: int, original_name: str) -> StoredName:
        return cls(f"{file_id}-{sanitize_original_name(original_name)}")

    @property
    def file_id(self) -> Optional[int]:
        match = _ID_PREFIX.match(self.value)
        return int(match.group(1)) if match else None

    @property
    def original_name(self) -> str:
        match = _ID_PREFIX.match(self.value)
        return match.group(2) if match else self.value

    def __str__(self) -> str:
        return self.value


class FileIdGenerator:
    """
    Millisecond timestamps, bumped by one whenever two uploads land in the same millisecond.
    Ids are unique and increasing for the lifetime of the generator.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            now = int(self._clock() * 1000)
            self._last = max(now, self._last + 1)
            return self._last

    def advance_past(self, file_id: int) -> None:
        with self._lock:
            self._last = max(self._last, file_id)
