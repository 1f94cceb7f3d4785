from logging import getLogger
from typing import Optional

from rpgmvdec.crypto import HEADER_LENGTH, TooSmallInput
from rpgmvdec.crypto.Key import KeyMaterial
from rpgmvdec.fmt.rpgmv import RPGMV_HEADER
from rpgmvdec.fmt.signature import PNG_HEADER

logger = getLogger(__name__)


def xor_bytes(data: bytes, key: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(data, key))


def decrypt_header(raw: bytes, key: KeyMaterial) -> bytes:
    """Reverses the engine's header scrambling.

    The synthetic header is dropped and the first HEADER_LENGTH bytes of what
    remains are XORed with the key. Everything past that is stored as is.

    Raises:
        TooSmallInput: if there is nothing past the synthetic header
    """
    if len(raw) <= HEADER_LENGTH:
        raise TooSmallInput(HEADER_LENGTH + 1, len(raw))
    body = raw[HEADER_LENGTH:]
    return xor_bytes(body[:HEADER_LENGTH], key) + body[HEADER_LENGTH:]


def encrypt_header(plain: bytes, key: KeyMaterial, header: bytes = RPGMV_HEADER) -> bytes:
    """Applies the engine's header scrambling. Inverse of `decrypt_header`."""
    assert len(header) == HEADER_LENGTH, "synthetic header must be %d bytes" % HEADER_LENGTH
    return header + xor_bytes(plain[:HEADER_LENGTH], key) + plain[HEADER_LENGTH:]


class PNGHeaderStrategy:
    """Known-plaintext operations that only hold for PNG assets.

    Every PNG begins with the same 16 bytes (magic and the IHDR chunk prefix),
    which is exactly the span the engine XORs. Audio has no such fixed
    prefix, so none of this applies to Ogg/M4A assets.
    """

    known_header = PNG_HEADER

    def derive_key(self, source: bytes) -> Optional[KeyMaterial]:
        """Recovers the XOR key from a scrambled PNG asset.

        Returns:
            KeyMaterial, or None if the buffer is too small to hold the scrambled header
        """
        if len(source) < HEADER_LENGTH * 2:
            return None
        scrambled = source[HEADER_LENGTH : HEADER_LENGTH * 2]
        key = KeyMaterial(xor_bytes(scrambled, self.known_header))
        logger.debug("Derived key %s", key.hex())
        return key

    def restore_without_key(self, source: bytes) -> bytes:
        """Rebuilds a PNG by discarding both headers and writing a fresh one.

        Nothing is reversed here. The scrambled header is thrown away along
        with the synthetic one and replaced by the canonical PNG header.

        Raises:
            TooSmallInput: if the buffer is shorter than both headers combined
        """
        if len(source) < HEADER_LENGTH * 2:
            raise TooSmallInput(HEADER_LENGTH * 2, len(source))
        return self.known_header + source[HEADER_LENGTH * 2 :]


PNG_STRATEGY = PNGHeaderStrategy()


def derive_key_from_sample(data: bytes) -> Optional[KeyMaterial]:
    return PNG_STRATEGY.derive_key(data)


def restore_without_key(data: bytes) -> bytes:
    return PNG_STRATEGY.restore_without_key(data)
