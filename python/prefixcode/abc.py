from abc import ABC, abstractmethod
from typing import Any, TypeAlias


# (symbol value, symbol count) pairs, in caller order
SymbolTableType: TypeAlias = list[tuple[int, int]]
# symbol value -> code made of "0"/"1" characters, in traversal order
CodeTableType: TypeAlias = dict[int, str]


class Encoder(ABC):
    @abstractmethod
    def encode(self, data: bytes) -> dict[str, Any]:
        pass
