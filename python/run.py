import fire  # noqa

from prefixcode.huffman import LENGTH_HEADER_WIDTH, HuffmanEncoder


def main(in_file: str):
    with open(in_file, "rb") as f:
        data = f.read()

    enc = HuffmanEncoder()
    encoded = enc.encode(data)
    bits: str = encoded["data"]

    print("\nEncoding result:")
    print("Alphabet size:", len(encoded["meta"].get("symbols", [])))
    print("Data length: ", len(data), "symbols")
    if bits:
        table_length = int(bits[:LENGTH_HEADER_WIDTH])
        payload_length = len(bits) - LENGTH_HEADER_WIDTH - table_length
        print(f"Header length: {LENGTH_HEADER_WIDTH + table_length} chars")
        print(f"Payload length: {payload_length} bits = {payload_length / 8:.2f} bytes")
    print(f"Encoded length: {len(bits)} chars")  # noqa
    if len(data) > 0 and len(bits) > 0:
        orig_bites = len(data) * 8
        print(f"Compression rate: {orig_bites / len(bits):.2f}x")


if __name__ == "__main__":
    fire.Fire(main)
