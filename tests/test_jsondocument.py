from . import *

import pytest

DOCUMENT = {"gold": 1200, "party": [1, 2, 5], "name": "リード", "flags": {"intro": True}}


def test_json_round_trip():
    from rpgmvdec.crypto.JSONDocument import encrypt_json, decrypt_json

    text = encrypt_json(DOCUMENT, "secret")
    assert text.startswith("U2FsdGVkX1")  # Base64 of "Salted__"
    assert decrypt_json(text, "secret") == DOCUMENT


def test_json_salt():
    from rpgmvdec.crypto.JSONDocument import encrypt_json

    assert encrypt_json(DOCUMENT, "secret", salt=b"12345678") == encrypt_json(
        DOCUMENT, "secret", salt=b"12345678"
    )
    assert encrypt_json(DOCUMENT, "secret") != encrypt_json(DOCUMENT, "secret")


def test_EVP_BytesToKey():
    from hashlib import md5
    from rpgmvdec.crypto.JSONDocument import EVP_BytesToKey

    key, iv = EVP_BytesToKey(b"secret", b"12345678")
    d1 = md5(b"secret12345678").digest()
    d2 = md5(d1 + b"secret12345678").digest()
    d3 = md5(d2 + b"secret12345678").digest()
    assert key == d1 + d2
    assert iv == d3


def test_json_wrong_passphrase():
    from rpgmvdec.crypto import JSONDecryptFailure
    from rpgmvdec.crypto.JSONDocument import encrypt_json, decrypt_json

    text = encrypt_json(DOCUMENT, "secret")
    with pytest.raises(JSONDecryptFailure):
        decrypt_json(text, "not the secret")


@pytest.mark.parametrize("bad", ["!!! not base64 !!!", "aGVsbG8gd29ybGQ=", ""])
def test_json_malformed(bad):
    from rpgmvdec.crypto import JSONDecryptFailure
    from rpgmvdec.crypto.JSONDocument import decrypt_json

    with pytest.raises(JSONDecryptFailure):
        decrypt_json(bad, "secret")
