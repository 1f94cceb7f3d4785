import json, os
from logging import getLogger
from typing import Optional

from rpgmvdec.crypto import InvalidKeyFormat
from rpgmvdec.crypto.Key import KeyMaterial, normalize_key

logger = getLogger(__name__)

# Relative to the game root. MV ships everything under www/, MZ does not.
SYSTEM_JSON_CANDIDATES = (
    os.path.join("www", "data", "System.json"),
    os.path.join("data", "System.json"),
)
DEFAULT_SEARCH_DEPTH = 8


def read_system_key(path: str) -> Optional[str]:
    """Reads `encryptionKey` from a System.json file. Missing or unreadable files yield None."""
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            system = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None
    if isinstance(system, dict):
        return system.get("encryptionKey", None) or None
    return None


def find_system_key(start: str, max_depth=DEFAULT_SEARCH_DEPTH) -> Optional[str]:
    """Looks for the game's System.json from `start` upwards and returns its `encryptionKey`."""
    directory = os.path.abspath(start)
    if os.path.isfile(directory):
        directory = os.path.dirname(directory)
    for _ in range(max_depth):
        for candidate in SYSTEM_JSON_CANDIDATES:
            path = os.path.join(directory, candidate)
            key = read_system_key(path)
            if key:
                logger.info("Found encryptionKey in %s", path)
                return key
        parent = os.path.dirname(directory)
        if parent == directory:
            break
        directory = parent
    return None


def resolve_key(key: Optional[str], search_from: str) -> Optional[KeyMaterial]:
    """Picks the key to use: an explicit one first, then the game's System.json.

    An explicit key that fails normalization is an error. One read from
    System.json is only warned about, since the assets may still be
    restorable without it.
    """
    if key:
        return normalize_key(key)
    found = find_system_key(search_from)
    if not found:
        return None
    try:
        return normalize_key(found)
    except InvalidKeyFormat:
        logger.warning(
            "encryptionKey in System.json is neither 32 hex characters nor 16 bytes. Ignoring."
        )
        return None
