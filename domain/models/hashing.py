from dataclasses import dataclass

from domain.exceptions.hashing import InvalidHashError

HASH_LENGTH = 32


@dataclass(frozen=True)
class Sha256Hash:
    """Read-only 32-byte SHA-256 digest."""
    value: bytes

    def __post_init__(self):
        if not isinstance(self.value, bytes):
            raise InvalidHashError(f"Hash must be bytes, got {type(self.value).__name__}")
        if len(self.value) != HASH_LENGTH:
            raise InvalidHashError(f"Hash must be {HASH_LENGTH} bytes, got {len(self.value)}")

    @classmethod
    def wrap(cls, data: bytes | bytearray) -> "Sha256Hash":
        return cls(bytes(data))

    @classmethod
    def from_hex(cls, text: str) -> "Sha256Hash":
        try:
            data = bytes.fromhex(text)
        except ValueError as e:
            raise InvalidHashError(f"Invalid hash hex string: {e}") from e
        return cls(data)

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.value.hex()
