from typing import Protocol


class Formatter(Protocol):
    def format(self, filename: str, source: bytes) -> bytes: ...
