from logging import getLogger

logger = getLogger(__name__)


def main_derivekey(args):
    from rpgmvdec.crypto.HeaderCodec import derive_key_from_sample
    from rpgmvdec.fmt.rpgmv import output_extension

    if output_extension(args.infile) != ".png":
        logger.warning(
            "%s does not look like a PNG asset. The derived key is likely wrong", args.infile
        )
    with open(args.infile, "rb") as f:
        key = derive_key_from_sample(f.read())
    if not key:
        logger.error("%s is too small to derive a key from", args.infile)
        return 1
    print(key.hex())
