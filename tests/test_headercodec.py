from . import *

import pytest


def test_derive_key():
    from rpgmvdec.crypto import derive_key_from_sample
    from rpgmvdec.crypto.HeaderCodec import xor_bytes
    from rpgmvdec.fmt.signature import PNG_HEADER

    sample = FAKE_HEADER + xor_bytes(PNG_HEADER, SAMPLE_KEY) + b"IDAT..."
    key = derive_key_from_sample(sample)
    assert key == SAMPLE_KEY
    assert key.hex() == SAMPLE_KEY_HEX


def test_derive_key_not_derivable():
    from rpgmvdec.crypto import derive_key_from_sample

    assert derive_key_from_sample(b"") is None
    assert derive_key_from_sample(FAKE_HEADER + b"\x00" * 15) is None


def test_restore_without_key_exact():
    from rpgmvdec.crypto import restore_without_key
    from rpgmvdec.fmt.signature import PNG_HEADER

    restored = restore_without_key(FAKE_HEADER + b"\xaa" * 16)
    assert restored == PNG_HEADER
    assert len(restored) == 16


def test_restore_without_key():
    from rpgmvdec.crypto import restore_without_key
    from rpgmvdec.crypto.HeaderCodec import encrypt_header
    from rpgmvdec.fmt.signature import PNG_HEADER

    png = make_png()
    assert restore_without_key(encrypt_header(png, SAMPLE_KEY)) == png
    # The scrambled header is not looked at, only replaced
    assert restore_without_key(b"\x00" * 32 + b"tail") == PNG_HEADER + b"tail"


def test_restore_without_key_too_small():
    from rpgmvdec.crypto import restore_without_key, TooSmallInput, MalformedInput

    with pytest.raises(TooSmallInput) as e:
        restore_without_key(b"\x00" * 31)
    assert isinstance(e.value, MalformedInput)
    assert e.value.needed == 32 and e.value.current == 31


def test_header_scrambling():
    from rpgmvdec.crypto.HeaderCodec import encrypt_header, decrypt_header
    from rpgmvdec.fmt.rpgmv import RPGMV_HEADER

    ogg = make_ogg()
    scrambled = encrypt_header(ogg, SAMPLE_KEY)
    assert scrambled.startswith(RPGMV_HEADER)
    assert len(scrambled) == len(ogg) + 16
    # Only the first 16 bytes of the payload are touched
    assert scrambled[32:] == ogg[16:]
    assert scrambled[16:32] != ogg[:16]
    assert decrypt_header(scrambled, SAMPLE_KEY) == ogg


def test_header_scrambling_short_payload():
    from rpgmvdec.crypto.HeaderCodec import encrypt_header, decrypt_header

    assert decrypt_header(encrypt_header(b"tiny", SAMPLE_KEY), SAMPLE_KEY) == b"tiny"


def test_decrypt_header_too_small():
    from rpgmvdec.crypto import TooSmallInput
    from rpgmvdec.crypto.HeaderCodec import decrypt_header

    with pytest.raises(TooSmallInput):
        decrypt_header(FAKE_HEADER, SAMPLE_KEY)


def test_derived_key_reverses_scrambling():
    from rpgmvdec.crypto import derive_key_from_sample
    from rpgmvdec.crypto.HeaderCodec import encrypt_header, decrypt_header

    png = make_png()
    scrambled = encrypt_header(png, SAMPLE_KEY)
    key = derive_key_from_sample(scrambled)
    assert key == SAMPLE_KEY
    assert decrypt_header(scrambled, key) == png


if __name__ == "__main__":
    test_derive_key()
    test_restore_without_key()
    test_header_scrambling()
