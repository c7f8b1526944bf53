"""Base-58 encoding (Bitcoin alphabet), as used for account addresses.

The whole buffer is treated as one big-endian unsigned integer, so a
32-byte key needs arbitrary-precision arithmetic (Python ints are unbounded,
so nothing is truncated). Each leading zero byte becomes one leading "1".
"""

from src.pc_common.errors import Base58Error

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def b58encode(data: bytes) -> str:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise Base58Error(f"expected bytes, got {type(data).__name__}")
    data = bytes(data)

    stripped = data.lstrip(b"\x00")
    leading_zeros = len(data) - len(stripped)

    num = int.from_bytes(stripped, "big")
    digits: list[str] = []
    while num > 0:
        num, rem = divmod(num, 58)
        digits.append(ALPHABET[rem])

    return ALPHABET[0] * leading_zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Inverse of b58encode."""
    num = 0
    for char in text:
        index = ALPHABET.find(char)
        if index < 0:
            raise Base58Error(f"invalid base-58 character: {char!r}")
        num = num * 58 + index

    leading_zeros = len(text) - len(text.lstrip(ALPHABET[0]))
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * leading_zeros + body
