"""Decoded memory accesses fed to the simulator."""

from dataclasses import dataclass
from enum import Enum


class AccessKind(Enum):
    LOAD = "l"
    STORE = "s"

    @classmethod
    def from_token(cls, token: str) -> "AccessKind":
        return cls(token.strip().lower())


@dataclass(frozen=True)
class Access:
    kind: AccessKind
    address: int

    @property
    def is_store(self) -> bool:
        return self.kind is AccessKind.STORE

    @classmethod
    def load(cls, address: int) -> "Access":
        return cls(AccessKind.LOAD, address)

    @classmethod
    def store(cls, address: int) -> "Access":
        return cls(AccessKind.STORE, address)
