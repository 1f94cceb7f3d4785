import re

from rpgmvdec.crypto import HEADER_LENGTH, InvalidKeyFormat

HEX_KEY_PATTERN = re.compile(r"[0-9a-fA-F]{%d}" % (HEADER_LENGTH * 2))


class KeyMaterial(bytes):
    """16-byte key. Used both as the AES-128 key and as the header XOR mask."""

    def __new__(cls, value: bytes):
        if len(value) != HEADER_LENGTH:
            raise InvalidKeyFormat(value)
        return super().__new__(cls, value)

    def __repr__(self):
        return "KeyMaterial(%s)" % self.hex()


def normalize_key(key: str) -> KeyMaterial:
    """Converts a user supplied key string into KeyMaterial.

    Args:
        key (str): 32 hexadecimal characters, or any string that is exactly
        16 bytes long once encoded in UTF-8. Raw 16 byte buffers are accepted as is

    Raises:
        InvalidKeyFormat: for anything else. The key is never guessed or corrected.

    Returns:
        KeyMaterial: the raw key bytes
    """
    if isinstance(key, KeyMaterial):
        return key
    if isinstance(key, (bytes, bytearray)):
        return KeyMaterial(bytes(key))
    if not isinstance(key, str) or not key:
        raise InvalidKeyFormat(key)
    if HEX_KEY_PATTERN.fullmatch(key):
        return KeyMaterial(bytes.fromhex(key))
    encoded = key.encode("utf-8")
    if len(encoded) == HEADER_LENGTH:
        return KeyMaterial(encoded)
    raise InvalidKeyFormat(key)
