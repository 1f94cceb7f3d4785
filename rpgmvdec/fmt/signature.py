from enum import Enum
from typing import Tuple

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
# PNG magic followed by the length and type of the IHDR chunk, which is always
# the first chunk. Every PNG starts with these 16 bytes.
PNG_HEADER = PNG_MAGIC + b"\x00\x00\x00\x0dIHDR"
OGG_MAGIC = b"OggS"


class DetectedKind(Enum):
    PNG = "png"
    OGG = "ogg"
    UNKNOWN = "unknown"


SIGNATURES = {
    DetectedKind.PNG: PNG_MAGIC,
    DetectedKind.OGG: OGG_MAGIC,
}

# Scan order matters: a PNG may well contain the bytes 'OggS' somewhere.
SCAN_ORDER = (DetectedKind.PNG, DetectedKind.OGG)


def detect_kind(data: bytes) -> DetectedKind:
    """Checks the leading bytes only. See `locate_signature` for scanning."""
    for kind in SCAN_ORDER:
        if data.startswith(SIGNATURES[kind]):
            return kind
    return DetectedKind.UNKNOWN


def locate_signature(data: bytes) -> Tuple[int, DetectedKind]:
    """Finds the first known media signature in the buffer.

    Returns:
        (offset, kind), or (-1, DetectedKind.UNKNOWN) if nothing was found
    """
    for kind in SCAN_ORDER:
        offset = data.find(SIGNATURES[kind])
        if offset >= 0:
            return offset, kind
    return -1, DetectedKind.UNKNOWN
