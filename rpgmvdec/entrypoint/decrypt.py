import os
from functools import partial
from pathlib import Path
from logging import getLogger

logger = getLogger(__name__)


def restore_files(args, key, mode):
    """Restores every encrypted asset under args.input into args.outdir.

    Returns:
        0 if at least one file was restored (or there was nothing to do), 1 otherwise
    """
    from rpgmvdec.batch import iter_restore_batch, DEFAULT_WORKERS
    from rpgmvdec.crypto.AssetDecryptor import restore
    from rpgmvdec.fs import collect_encrypted_files, iter_file_bytes, write_output

    outdir = Path(os.path.abspath(args.outdir))
    base, files = collect_encrypted_files(args.input)
    assert base != outdir, "Input and output directories must be different"
    if not files:
        logger.warning("No encrypted files (*_, *.rpgmvp, *.rpgmvo, *.rpgmvm) found in %s", base)
        return 0
    logger.info("Restoring %d file(s) from %s to %s", len(files), base, outdir)
    succeeded = failed = 0
    for result in iter_restore_batch(
        iter_file_bytes(base, files),
        partial(restore, key=key, mode=mode),
        workers=args.workers or DEFAULT_WORKERS,
    ):
        if not result.ok:
            failed += 1
            continue
        out_path = write_output(outdir, result.output_name, result.data)
        logger.debug("%s -> %s (%s)", result.name, out_path.as_posix(), result.kind.name)
        succeeded += 1
    logger.info("Done. %d restored, %d failed. Output directory: %s", succeeded, failed, outdir)
    return 1 if failed and not succeeded else 0


def main_decrypt(args):
    from rpgmvdec.config import resolve_key
    from rpgmvdec.crypto.AssetDecryptor import MODE_AES

    key = resolve_key(args.key, args.input)
    assert key, "No encryptionKey found in www/data/System.json. Please provide one with --key"
    logger.info("Using key %s", key.hex())
    return restore_files(args, key, MODE_AES)
