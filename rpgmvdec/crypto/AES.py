from Crypto.Cipher import AES

from rpgmvdec.crypto import CipherFailure


def PKCS7_pad(data: bytes, bs=AES.block_size) -> bytes:
    size = bs - len(data) % bs
    return data + bytes([size] * size)


def PKCS7_strip(data: bytes, bs=AES.block_size) -> bytes:
    """Strips PKCS#7 padding if, and only if, it validates.

    Some assets are stored without padding, or with a tail that merely looks
    like it. Those are returned untouched instead of raising.
    """
    if not data:
        return data
    pad = data[-1]
    if 1 <= pad <= bs and data[-pad:] == bytes([pad]) * pad:
        return data[:-pad]
    return data


def decrypt_aes_ecb(data: bytes, key) -> bytes:
    cipher = AES.new(key, AES.MODE_ECB)
    try:
        plain = cipher.decrypt(data)
    except ValueError as e:
        raise CipherFailure("AES-ECB decryption failed: %s" % e) from e
    return plain


def encrypt_aes_ecb(data: bytes, key, pad=PKCS7_pad) -> bytes:
    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(pad(data, cipher.block_size) if pad else data)


def decrypt_aes_cbc(data: bytes, key, iv, unpad=PKCS7_strip) -> bytes:
    cipher = AES.new(key, AES.MODE_CBC, iv)
    try:
        plain = cipher.decrypt(data)
    except ValueError as e:
        raise CipherFailure("AES-CBC decryption failed: %s" % e) from e
    return unpad(plain, cipher.block_size) if unpad else plain


def encrypt_aes_cbc(data: bytes, key, iv, pad=PKCS7_pad) -> bytes:
    cipher = AES.new(key, AES.MODE_CBC, iv)
    return cipher.encrypt(pad(data, cipher.block_size))
