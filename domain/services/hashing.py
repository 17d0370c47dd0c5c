from domain.models.hashing import Sha256Hash

# Bytes 24..31 of the digest; downstream identifiers depend on this exact window.
WINDOW_START = 24
WINDOW_END = 32


def long_hash(hash_value: Sha256Hash | bytes) -> int:
    """Derive a stable signed 64-bit key from the last 8 bytes of a SHA-256 hash.

    Offset 31 is the least significant byte and offset 24 the most significant;
    the composed value is read as two's complement.
    """
    if not isinstance(hash_value, Sha256Hash):
        hash_value = Sha256Hash.wrap(hash_value)
    window = hash_value.value[WINDOW_START:WINDOW_END]
    return int.from_bytes(window, "big", signed=True)
