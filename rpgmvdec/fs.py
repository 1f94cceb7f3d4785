import os
from pathlib import Path
from logging import getLogger
from typing import Iterator, List, Tuple

from rpgmvdec.fmt.rpgmv import is_encrypted_name

logger = getLogger(__name__)


def collect_encrypted_files(target: str) -> Tuple[Path, List[Path]]:
    """Lists the encrypted assets under `target`.

    Returns:
        (base directory, files). Output paths are made relative to the base directory.
        For a single file, that's its parent and the file is taken regardless of its name.
    """
    target = Path(os.path.abspath(target))
    if target.is_file():
        return target.parent, [target]
    assert target.is_dir(), "%s is neither a file nor a directory" % target
    files = []
    for root, dirs, fnames in os.walk(target):
        dirs.sort()
        for fname in sorted(fnames):
            if is_encrypted_name(fname):
                files.append(Path(root) / fname)
    return target, files


def iter_file_bytes(base: Path, files: List[Path]) -> Iterator[Tuple[str, bytes]]:
    """Yields (path relative to base, contents) pairs"""
    for file in files:
        with open(file, "rb") as f:
            yield file.relative_to(base).as_posix(), f.read()


def write_output(outdir: Path, name: str, data: bytes) -> Path:
    out_path = Path(outdir) / name
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "wb") as f:
        f.write(data)
    return out_path
