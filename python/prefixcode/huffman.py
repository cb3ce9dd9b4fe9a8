import warnings
from collections import Counter
from collections.abc import Iterable
from typing import Any

import tqdm  # noqa

from prefixcode.abc import CodeTableType, Encoder, SymbolTableType
from prefixcode.errors import ConstructionError, DegenerateTreeWarning, EncodingError
from prefixcode.node import INTERNAL_NODE_VALUE, Node

LENGTH_HEADER_WIDTH: int = 16  # digits holding len(code table section)
FIELD_WIDTH: int = 8  # digits per code-length / symbol field


def ch(x: int) -> str:
    if 32 <= x < 127:
        return chr(x)
    elif x == ord("\n"):
        return "\\n"
    return "<?>"


class HuffmanEncoder(Encoder):
    """Prefix-code encoder producing a textual bit string.

    Output layout. Length and symbol fields are zero-padded decimal digits;
    only the codes and the payload are made of '0' and '1'::

        [16: len(CODE_TABLE)] [CODE_TABLE] [PAYLOAD]
        CODE_TABLE = repeated [8: len(code)] [8: symbol] [code]
        PAYLOAD    = code of each source byte, no separators

    The tree and the code table follow two fixed conventions that any reader
    of this format has to share:

    * the working list is ordered by ascending symbol value, not by weight;
    * code derivation follows a single branch per node (left when present,
      otherwise right), so only one leaf of a merged tree gets a code.
    """

    def __init__(self) -> None:
        pass

    def prepare_frequency_table(self, data: bytes) -> SymbolTableType:
        counts = Counter(data)
        return [(value, counts[value]) for value in sorted(counts)]

    @staticmethod
    def sort_nodes(nodes: list[Node]) -> list[Node]:
        # stable: equal values keep their relative order
        return sorted(nodes, key=lambda node: node.symbol_value)

    @staticmethod
    def check_symbols(symbols: SymbolTableType) -> None:
        if len(symbols) == 0:
            raise ConstructionError("cannot build a tree from an empty symbol table")
        for i, pair in enumerate(symbols):
            try:
                value, count = pair
            except (TypeError, ValueError):
                raise ConstructionError(f"symbol #{i} is not a (value, count) pair: {pair!r}") from None
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ConstructionError(f"symbol #{i} has value {value!r}, expected an int in [0, 255]")
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ConstructionError(f"symbol #{i} ({value}) has count {count!r}, expected a non-negative int")

    @classmethod
    def get_tree(cls, symbols: SymbolTableType) -> Node:
        """Merge the symbols into one tree and return its root.

        The two front nodes of the sorted working list are merged (first ->
        left, second -> right) until a single node is left. A one-symbol
        table returns its leaf unmerged.
        """
        cls.check_symbols(symbols)

        huffman_tree = cls.sort_nodes([Node(value, count) for value, count in symbols])
        while len(huffman_tree) > 1:
            first, second, *rest = huffman_tree
            huffman_tree = cls.sort_nodes([*rest, Node.merge(first, second)])

        root = huffman_tree[0]
        assert root.symbol_count == sum(count for _, count in symbols)
        return root

    @staticmethod
    def get_codes(root: Node) -> CodeTableType:
        """Walk the tree from ``root`` and collect the code of every reached leaf.

        Only one child of each node is followed: the left one ("0") when it
        exists, the right one ("1") otherwise. Right children of nodes that
        also own a left child are never visited and get no code.
        """
        codes: CodeTableType = {}

        if root.is_leaf() and root.symbol_value != INTERNAL_NODE_VALUE:
            warnings.warn(
                f"tree for symbol {root.symbol_value} has no merge step, its code is empty",
                DegenerateTreeWarning,
                stacklevel=2,
            )

        pending: list[tuple[Node, str]] = [(root, "")]
        while pending:
            node, path = pending.pop()
            if node.is_leaf():
                if node.symbol_value != INTERNAL_NODE_VALUE:
                    codes[node.symbol_value] = path
                continue
            if node.left is not None:
                pending.append((node.left, f"{path}0"))
            else:
                pending.append((node.right, f"{path}1"))

        return codes

    @staticmethod
    def convert_to_bits(length: int, value: int) -> str:
        # decimal digits, zero-padded; the field is never widened
        bits = str(value).zfill(length)
        if len(bits) > length:
            raise EncodingError(f"{value} does not fit in a {length}-digit field", value=value)
        return bits

    @classmethod
    def make_symbol_code_pair(cls, symbol: int, code: str) -> str:
        return f"{cls.convert_to_bits(FIELD_WIDTH, len(code))}{cls.convert_to_bits(FIELD_WIDTH, symbol)}{code}"

    @classmethod
    def encode_data(
        cls, codes: CodeTableType, source_data: bytes | Iterable[int], progress: bool = False
    ) -> str:
        """Serialize ``source_data`` as length header + code table + payload."""
        if isinstance(source_data, (bytes, bytearray, memoryview)):
            source_data = bytes(source_data)

        vlc_header = "".join(cls.make_symbol_code_pair(symbol, code) for symbol, code in codes.items())

        payload: list[str] = []
        for position, byte in enumerate(tqdm.tqdm(source_data, desc="Encoding", disable=not progress)):
            code = codes.get(byte)
            if code is None:
                raise EncodingError(
                    f"missing code for byte value {byte!r} at position {position}",
                    value=byte,
                    position=position,
                )
            payload.append(code)

        length_header = cls.convert_to_bits(LENGTH_HEADER_WIDTH, len(vlc_header))
        assert int(length_header) == len(vlc_header)
        return f"{length_header}{vlc_header}{''.join(payload)}"

    def encode(self, data: bytes) -> dict[str, Any]:
        assert isinstance(data, (bytes, bytearray)), f"expected bytes, got {type(data).__name__}"
        if len(data) == 0:
            return {"data": "", "meta": {"length": 0}}

        symbols = self.prepare_frequency_table(data)

        print("Alphabet:", [f"{value}({ch(value)})" for value, _ in symbols])
        print("Frequencies:", [count for _, count in symbols])

        tree = self.get_tree(symbols)
        codes = self.get_codes(tree)

        print("Codes:", codes)

        encoded = self.encode_data(codes, data, progress=True)

        meta = {
            "algorithm": "huffman",
            "length": len(data),
            "symbols": symbols,
            "codes": codes,
        }

        return {"data": encoded, "meta": meta}
