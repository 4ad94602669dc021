from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator


class RecordStorage(ABC):
    @abstractmethod
    def read_lines(self) -> Iterator[str]:
        """Yield stored lines without their trailing newline."""

    @abstractmethod
    def replace_lines(self, lines: Iterable[str]) -> None:
        """Replace the stored content with lines, all or nothing."""

    @abstractmethod
    def exists(self) -> bool:
        """Return whether anything has been stored yet."""

    @abstractmethod
    def resolve_uri(self) -> str:
        """Return canonical storage URI for the record file."""
