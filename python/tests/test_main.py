from typing import Any

import pytest  # noqa

from prefixcode.abc import Encoder
from prefixcode.errors import EncodingError
from prefixcode.huffman import HuffmanEncoder


_encoders = [
    HuffmanEncoder,
]
# at most one distinct byte: the single-branch code table covers every byte
_encodable_data = [
    b"",
    b"a",
    b"a" * 1000,
    bytearray(b"zz"),
]
# several distinct bytes: only the smallest byte value gets a code
_unencodable_data = [
    b"hello, huffman! hello, huffman!",
    b"ab",
    b"abcde" * 500,
    bytes(range(256)),
]


@pytest.mark.parametrize("encoder_class", _encoders)
@pytest.mark.parametrize("data", _encodable_data)
def test_main(encoder_class: type[Encoder], data: bytes):
    encoded: dict[str, Any] = encoder_class().encode(data)

    assert type(encoded) is dict
    assert "data" in encoded, "has 'data' key"
    assert type(encoded["data"]) is str, "data is str"
    # header and table fields are decimal digits, codes are 0/1
    assert encoded["data"] == "" or encoded["data"].isdigit()
    for code in encoded["meta"].get("codes", {}).values():
        assert set(code) <= {"0", "1"}
    assert "meta" in encoded, "has 'meta' key"
    assert encoded["meta"]["length"] == len(data)


@pytest.mark.parametrize("encoder_class", _encoders)
@pytest.mark.parametrize("data", _unencodable_data)
def test_main_missing_codes(encoder_class: type[Encoder], data: bytes):
    smallest = min(data)
    first_missing = next(i for i, b in enumerate(data) if b != smallest)

    with pytest.raises(EncodingError) as excinfo:
        encoder_class().encode(data)

    assert excinfo.value.position == first_missing
    assert excinfo.value.value == data[first_missing]


def test_encode_single_symbol_layout():
    encoded = HuffmanEncoder().encode(b"AAAA")

    # one table entry with an empty code, and an empty payload
    assert encoded["data"] == "0000000000000016" + "00000000" + "00000065"
    assert encoded["meta"]["codes"] == {65: ""}
    assert encoded["meta"]["symbols"] == [(65, 4)]
    assert encoded["meta"]["algorithm"] == "huffman"


def test_encode_empty():
    assert HuffmanEncoder().encode(b"") == {"data": "", "meta": {"length": 0}}


def test_prepare_frequency_table():
    table = HuffmanEncoder().prepare_frequency_table(b"banana")
    assert table == [(ord("a"), 3), (ord("b"), 1), (ord("n"), 2)]
