from logging import getLogger

logger = getLogger(__name__)


def find_png_sample(files):
    from rpgmvdec.fmt.rpgmv import output_extension

    return next((f for f in files if output_extension(f.name) == ".png"), None)


def main_deobfuscate(args):
    from rpgmvdec.config import resolve_key
    from rpgmvdec.crypto.AssetDecryptor import MODE_XOR
    from rpgmvdec.crypto.HeaderCodec import derive_key_from_sample
    from rpgmvdec.entrypoint.decrypt import restore_files
    from rpgmvdec.fs import collect_encrypted_files

    key = resolve_key(args.key, args.input)
    if not key:
        _, files = collect_encrypted_files(args.input)
        sample = find_png_sample(files)
        assert sample, "No key given, and no PNG asset to derive one from"
        with open(sample, "rb") as f:
            key = derive_key_from_sample(f.read())
        assert key, "%s is too small to derive a key from" % sample
        logger.info("Derived key from %s", sample.name)
    logger.info("Using key %s", key.hex())
    return restore_files(args, key, MODE_XOR)
