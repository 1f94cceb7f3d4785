import argparse, sys, logging, traceback

# region Deferred imports
# This can be done a lot cleaner with importlib. But tools like PyInstaller really
# won't like that.


def main_decrypt(*args, **kwargs):
    from rpgmvdec.entrypoint.decrypt import main_decrypt
    return main_decrypt(*args, **kwargs)

def main_deobfuscate(*args, **kwargs):
    from rpgmvdec.entrypoint.deobfuscate import main_deobfuscate
    return main_deobfuscate(*args, **kwargs)

def main_restore(*args, **kwargs):
    from rpgmvdec.entrypoint.restore import main_restore
    return main_restore(*args, **kwargs)

def main_derivekey(*args, **kwargs):
    from rpgmvdec.entrypoint.derivekey import main_derivekey
    return main_derivekey(*args, **kwargs)

def main_jsonencrypt(*args, **kwargs):
    from rpgmvdec.entrypoint.jsoncrypt import main_jsonencrypt
    return main_jsonencrypt(*args, **kwargs)

def main_jsondecrypt(*args, **kwargs):
    from rpgmvdec.entrypoint.jsoncrypt import main_jsondecrypt
    return main_jsondecrypt(*args, **kwargs)

# endregion

from rpgmvdec.batch import DEFAULT_WORKERS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname).1s | %(name)s %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def create_parser(clazz=argparse.ArgumentParser):
    """
    Create the command line parser for the application.

    Args:
        clazz (type): The parser class to use. Defaults to argparse.ArgumentParser.
        In GUI mode this should be set to GooeyParser otherwise.
    """

    def gooey_only(**kwargs):
        # Silent non-argparse kwargs
        if clazz == argparse.ArgumentParser:
            return {}
        return kwargs

    parser = clazz(
        description="""RPG Maker MV/MZ Asset Restoration Utility""",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="logging level (default: %(default)s)",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    subparsers = parser.add_subparsers(
        title="subcommands", description="valid subcommands", help="additional help"
    )

    def add_batch_arguments(subparser, key_help=None):
        subparser.add_argument(
            "input",
            type=str,
            help="encrypted file, or directory to search for encrypted files (*.png_, *.ogg_, *.rpgmvp...)",
            **gooey_only(widget="DirChooser"),
        )
        subparser.add_argument(
            "outdir",
            type=str,
            help="output directory. the directory layout of the input is kept",
            **gooey_only(widget="DirChooser"),
        )
        if key_help:
            subparser.add_argument("--key", type=str, help=key_help, default=None)
        subparser.add_argument(
            "--workers",
            type=int,
            help="number of worker threads (default: %(default)s)",
            default=DEFAULT_WORKERS,
        )

    # decrypt
    decrypt_parser = subparsers.add_parser(
        "decrypt",
        usage="""Decrypt AES-128-ECB encrypted assets
[16 bytes: fake header][AES-128-ECB ciphertext]""",
    )
    add_batch_arguments(
        decrypt_parser,
        """32 hex characters or a 16 character string.
(default: encryptionKey in www/data/System.json, searched upwards from the input)""",
    )
    decrypt_parser.set_defaults(func=main_decrypt)
    # deobfuscate
    deobfuscate_parser = subparsers.add_parser(
        "deobfuscate",
        usage="""Restore assets whose leading 16 bytes are XORed with the key
[16 bytes: fake header][16 bytes: header XOR key][payload]""",
    )
    add_batch_arguments(
        deobfuscate_parser,
        """32 hex characters or a 16 character string.
(default: encryptionKey in www/data/System.json, or derived from a PNG asset)""",
    )
    deobfuscate_parser.set_defaults(func=main_deobfuscate)
    # restore
    restore_parser = subparsers.add_parser(
        "restore",
        usage="""Restore PNG assets without a key by rewriting their header
*NOTE*: Audio cannot be restored this way.""",
    )
    add_batch_arguments(restore_parser)
    restore_parser.set_defaults(func=main_restore)
    # derivekey
    derivekey_parser = subparsers.add_parser(
        "derivekey",
        usage="""Derive the encryption key from an encrypted PNG asset
*NOTE*: Only the key (in hex) is written to stdout if successful.""",
    )
    derivekey_parser.add_argument(
        "infile", type=str, help="encrypted PNG asset (*.png_, *.rpgmvp)", **gooey_only(widget="FileChooser")
    )
    derivekey_parser.set_defaults(func=main_derivekey)
    # jsonencrypt
    jsonencrypt_parser = subparsers.add_parser(
        "jsonencrypt",
        usage="""Encrypt a JSON document with a passphrase (CryptoJS / OpenSSL compatible)""",
    )
    jsonencrypt_parser.add_argument(
        "infile", type=str, help="input JSON file", **gooey_only(widget="FileChooser")
    )
    jsonencrypt_parser.add_argument(
        "outfile", type=str, help="output file (Base64)", **gooey_only(widget="FileSaver")
    )
    jsonencrypt_parser.add_argument("--key", type=str, help="passphrase", required=True)
    jsonencrypt_parser.set_defaults(func=main_jsonencrypt)
    # jsondecrypt
    jsondecrypt_parser = subparsers.add_parser(
        "jsondecrypt",
        usage="""Decrypt a JSON document encrypted with a passphrase (CryptoJS / OpenSSL compatible)""",
    )
    jsondecrypt_parser.add_argument(
        "infile", type=str, help="input file (Base64)", **gooey_only(widget="FileChooser")
    )
    jsondecrypt_parser.add_argument(
        "outfile", type=str, help="output JSON file", **gooey_only(widget="FileSaver")
    )
    jsondecrypt_parser.add_argument("--key", type=str, help="passphrase", required=True)
    jsondecrypt_parser.set_defaults(func=main_jsondecrypt)
    return parser


def __main__():
    from tqdm.std import tqdm as tqdm_c

    class TqdmMutexStream:
        @staticmethod
        def write(__s):
            with tqdm_c.external_write_mode(file=sys.stderr, nolock=False):
                return sys.stderr.write(__s)

    # parse args
    parser = create_parser(argparse.ArgumentParser)
    args = parser.parse_args()
    # set logging level
    import coloredlogs
    from logging import basicConfig

    coloredlogs.install(
        level=args.log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        isatty=True,
        stream=TqdmMutexStream,
    )
    basicConfig(
        level=args.log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=TqdmMutexStream,
    )
    if "func" in args:
        try:
            return args.func(args)
        except Exception as e:
            logger.exception("Error while running command: %s", e)
            traceback.print_exc()
            return 1
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(__main__() or 0)
