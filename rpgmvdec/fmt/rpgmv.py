import os

# Appended to the extension of every encrypted asset in MZ (Actor1.png_)
SCRAMBLE_MARKER = "_"

# MV encrypted extensions
ENCRYPTED_EXTENSIONS = {
    ".rpgmvp": ".png",
    ".rpgmvo": ".ogg",
    ".rpgmvm": ".m4a",
}

# The header the engine writes in front of every encrypted asset.
# "RPGMV" signature, padding, version 0.3.1, padding.
RPGMV_HEADER = b"RPGMV\x00\x00\x00\x00\x03\x01\x00\x00\x00\x00\x00"


def is_encrypted_name(name: str) -> bool:
    name = os.path.basename(name)
    if name.endswith(SCRAMBLE_MARKER):
        return True
    return os.path.splitext(name)[1].lower() in ENCRYPTED_EXTENSIONS


def resolve_output_name(name: str) -> str:
    """Maps an encrypted asset's file name to the name of its restored counterpart.

    A single trailing scramble marker is stripped (`Actor1.png_` -> `Actor1.png`),
    MV extensions are mapped to their media extension (`bgm.rpgmvo` -> `bgm.ogg`).
    Other names are returned unchanged.
    """
    if name.endswith(SCRAMBLE_MARKER):
        return name[: -len(SCRAMBLE_MARKER)]
    base, ext = os.path.splitext(name)
    if ext.lower() in ENCRYPTED_EXTENSIONS:
        return base + ENCRYPTED_EXTENSIONS[ext.lower()]
    return name


def output_extension(name: str) -> str:
    return os.path.splitext(resolve_output_name(name))[1].lower()
