from logging import getLogger
from typing import Optional, Tuple

from rpgmvdec.crypto import HEADER_LENGTH, TooSmallInput
from rpgmvdec.crypto.AES import PKCS7_strip, decrypt_aes_ecb
from rpgmvdec.crypto.HeaderCodec import decrypt_header, restore_without_key
from rpgmvdec.crypto.Key import KeyMaterial, normalize_key
from rpgmvdec.fmt.rpgmv import resolve_output_name
from rpgmvdec.fmt.signature import DetectedKind, detect_kind, locate_signature

logger = getLogger(__name__)

MODE_AES = "aes"
MODE_XOR = "xor"
MODES = (MODE_AES, MODE_XOR)


def trim_to_signature(data: bytes) -> Tuple[bytes, DetectedKind]:
    """Slices the buffer to start at the first PNG or Ogg signature.

    Buffers with no known signature are returned unchanged with DetectedKind.UNKNOWN.
    Not an error: legitimate assets of other formats exist.
    """
    offset, kind = locate_signature(data)
    if kind == DetectedKind.UNKNOWN:
        logger.debug("No known signature in %d bytes. Passing through", len(data))
        return data, kind
    if offset > 0:
        logger.debug("%s signature at offset %d", kind.name, offset)
        data = data[offset:]
    return data, kind


def decrypt(raw: bytes, key: KeyMaterial) -> Tuple[bytes, DetectedKind]:
    """Restores an AES-128-ECB encrypted asset.

    [HEADER_LENGTH bytes: synthetic header][AES-128-ECB ciphertext, PKCS#7 padded (usually)]

    Args:
        raw (bytes): encrypted asset
        key (KeyMaterial): 16 byte key. Strings are normalized first

    Raises:
        InvalidKeyFormat: if the key cannot be normalized. No decryption is attempted
        TooSmallInput: if there is nothing past the synthetic header
        CipherFailure: if the ciphertext is not a multiple of the block size

    Returns:
        (restored bytes, detected kind)
    """
    key = normalize_key(key)
    if len(raw) <= HEADER_LENGTH:
        raise TooSmallInput(HEADER_LENGTH + 1, len(raw))
    plain = decrypt_aes_ecb(raw[HEADER_LENGTH:], key)
    plain = PKCS7_strip(plain)
    return trim_to_signature(plain)


def restore(
    name: str, raw: bytes, key: Optional[KeyMaterial] = None, mode: str = MODE_AES
) -> Tuple[str, bytes, DetectedKind]:
    """Restores one asset, picking the pipeline from the key and mode.

    - key, MODE_AES: `decrypt`
    - key, MODE_XOR: header scrambling reversed with the key
    - no key: PNG header reconstruction, regardless of mode

    Returns:
        (output name, restored bytes, detected kind)
    """
    if key is not None and mode not in MODES:
        raise ValueError("unknown mode %r, expected one of %s" % (mode, ", ".join(MODES)))
    if key is None:
        data = restore_without_key(raw)
        kind = DetectedKind.PNG
    elif mode == MODE_AES:
        data, kind = decrypt(raw, key)
    else:
        data = decrypt_header(raw, normalize_key(key))
        kind = detect_kind(data)
    return resolve_output_name(name), data, kind
