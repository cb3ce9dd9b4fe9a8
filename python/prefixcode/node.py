from typing import Iterator

from prefixcode.errors import ConstructionError

# symbol_value carried by every internal (merge) node
INTERNAL_NODE_VALUE = -1


class Node(object):
    def __init__(self, symbol_value: int, symbol_count: int) -> None:
        self.symbol_count = symbol_count  # weight of the subtree
        self.symbol_value = symbol_value  # byte value, or -1 for a merge node
        self._left: "Node | None" = None
        self._right: "Node | None" = None

    @classmethod
    def merge(cls, left: "Node", right: "Node") -> "Node":
        parent = cls(INTERNAL_NODE_VALUE, left.symbol_count + right.symbol_count)
        parent.left = left
        parent.right = right
        return parent

    @property
    def left(self) -> "Node | None":
        return self._left

    @left.setter
    def left(self, child: "Node") -> None:
        if self._left is not None:
            raise ConstructionError("left child is already assigned")
        self._left = child

    @property
    def right(self) -> "Node | None":
        return self._right

    @right.setter
    def right(self, child: "Node") -> None:
        if self._right is not None:
            raise ConstructionError("right child is already assigned")
        self._right = child

    def is_leaf(self) -> bool:
        return self._left is None and self._right is None

    def is_internal(self) -> bool:
        return self.symbol_value == INTERNAL_NODE_VALUE and not self.is_leaf()

    def walk(self) -> Iterator["Node"]:
        """Yield every node of the subtree, parents before children, left first."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node._right is not None:
                stack.append(node._right)
            if node._left is not None:
                stack.append(node._left)

    def __repr__(self) -> str:
        if self.symbol_value == INTERNAL_NODE_VALUE:
            return f"Node(internal, count={self.symbol_count})"
        return f"Node(value={self.symbol_value}, count={self.symbol_count})"
