import json
from base64 import b64decode, b64encode
from binascii import Error as BinasciiError
from hashlib import md5
from typing import Any, Tuple

from Crypto.Random import get_random_bytes

from rpgmvdec.crypto import CipherFailure, JSONDecryptFailure
from rpgmvdec.crypto.AES import PKCS7_pad, decrypt_aes_cbc, encrypt_aes_cbc

# OpenSSL `enc` container, which is also what CryptoJS.AES.encrypt produces
# when handed a passphrase instead of a key:
# [8 bytes: Salted__][8 bytes: salt][AES-256-CBC ciphertext, PKCS#7 padded]
SALTED_MAGIC = b"Salted__"
SALT_SIZE = 8
KEY_SIZE = 32
IV_SIZE = 16


def PKCS7_unpad_strict(data: bytes, bs) -> bytes:
    pad = data[-1] if data else 0
    if not (1 <= pad <= bs) or data[-pad:] != bytes([pad]) * pad:
        raise JSONDecryptFailure("Bad padding. Wrong passphrase?")
    return data[:-pad]


def EVP_BytesToKey(passphrase: bytes, salt: bytes) -> Tuple[bytes, bytes]:
    """OpenSSL's EVP_BytesToKey with MD5 and a single iteration"""
    derived, block = b"", b""
    while len(derived) < KEY_SIZE + IV_SIZE:
        block = md5(block + passphrase + salt).digest()
        derived += block
    return derived[:KEY_SIZE], derived[KEY_SIZE : KEY_SIZE + IV_SIZE]


def encrypt_json(obj: Any, passphrase: str, salt: bytes = None) -> str:
    salt = salt or get_random_bytes(SALT_SIZE)
    assert len(salt) == SALT_SIZE
    key, iv = EVP_BytesToKey(passphrase.encode("utf-8"), salt)
    plain = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    cipher = encrypt_aes_cbc(plain.encode("utf-8"), key, iv, PKCS7_pad)
    return b64encode(SALTED_MAGIC + salt + cipher).decode("ascii")


def decrypt_json(text: str, passphrase: str) -> Any:
    try:
        blob = b64decode(text.strip(), validate=True)
    except (BinasciiError, ValueError) as e:
        raise JSONDecryptFailure("Not Base64 encoded: %s" % e) from e
    if not blob.startswith(SALTED_MAGIC) or len(blob) <= len(SALTED_MAGIC) + SALT_SIZE:
        raise JSONDecryptFailure("Missing OpenSSL salt header")
    salt = blob[len(SALTED_MAGIC) : len(SALTED_MAGIC) + SALT_SIZE]
    key, iv = EVP_BytesToKey(passphrase.encode("utf-8"), salt)
    try:
        plain = decrypt_aes_cbc(
            blob[len(SALTED_MAGIC) + SALT_SIZE :], key, iv, PKCS7_unpad_strict
        )
    except CipherFailure as e:
        raise JSONDecryptFailure(str(e)) from e
    try:
        return json.loads(plain.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise JSONDecryptFailure("Decrypted data is not JSON: %s" % e) from e
