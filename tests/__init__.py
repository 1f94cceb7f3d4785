import os
from coloredlogs import install
from logging import getLogger, DEBUG

install(level=DEBUG)
logger = getLogger("tests")

import rpgmvdec

logger.info("rpgmvdec Version: %s" % rpgmvdec.__version__)


class NamedDict(dict):
    def __getattribute__(self, name: str):
        try:
            return super().__getattribute__(name)
        except AttributeError:
            return self.get(name, None)


SOURCE_DIR = os.path.dirname(__file__)
sample_file_path = lambda *args: os.path.join(SOURCE_DIR, *args)
TEMP_DIR = sample_file_path(".temp")

SAMPLE_KEY_HEX = "0102030405060708090a0b0c0d0e0f10"
SAMPLE_KEY = bytes(range(1, 17))
FAKE_HEADER = b"\x11" * 16


def make_aes_asset(plain: bytes, key: bytes, header=FAKE_HEADER, pad=True) -> bytes:
    """Builds an AES-128-ECB encrypted asset. Only used to produce fixtures."""
    from rpgmvdec.crypto.AES import PKCS7_pad, encrypt_aes_ecb

    return header + encrypt_aes_ecb(plain, bytes(key), PKCS7_pad if pad else None)


def make_png(size=1024) -> bytes:
    from rpgmvdec.fmt.signature import PNG_HEADER

    return PNG_HEADER + bytes(i % 251 for i in range(size))


def make_ogg(size=1024) -> bytes:
    from rpgmvdec.fmt.signature import OGG_MAGIC

    return OGG_MAGIC + b"\x00\x02" + bytes(i % 241 for i in range(size))
