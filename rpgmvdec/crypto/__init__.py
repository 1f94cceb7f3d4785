# Length of the synthetic header the engine prepends to every asset.
# Also the number of leading payload bytes covered by the XOR key.
HEADER_LENGTH = 16


class RPGMVDecException(Exception):
    pass


class InvalidKeyFormat(RPGMVDecException, ValueError):
    def __init__(self, key=None):
        self.key = key
        super().__init__(
            "Key must be 32 hex characters (16 bytes) or a 16-byte UTF-8 string"
        )


class MalformedInput(RPGMVDecException):
    pass


class TooSmallInput(MalformedInput):
    needed: int
    current: int

    def __init__(self, needed, current):
        self.needed = needed
        self.current = current
        super().__init__(
            f"Needed at least {needed} bytes, but only {current} bytes available."
        )


class CipherFailure(RPGMVDecException):
    pass


class JSONDecryptFailure(RPGMVDecException):
    pass


from rpgmvdec.crypto.Key import KeyMaterial, normalize_key
from rpgmvdec.crypto.HeaderCodec import derive_key_from_sample, restore_without_key
from rpgmvdec.crypto.AssetDecryptor import decrypt
