import json
from logging import getLogger

logger = getLogger(__name__)


def main_jsonencrypt(args):
    from rpgmvdec.crypto.JSONDocument import encrypt_json

    with open(args.infile, "r", encoding="utf-8-sig") as fin:
        document = json.load(fin)
    with open(args.outfile, "w", encoding="utf-8") as fout:
        fout.write(encrypt_json(document, args.key))
    logger.info("Encrypted %s -> %s", args.infile, args.outfile)


def main_jsondecrypt(args):
    from rpgmvdec.crypto.JSONDocument import decrypt_json

    with open(args.infile, "r", encoding="utf-8") as fin:
        document = decrypt_json(fin.read(), args.key)
    with open(args.outfile, "w", encoding="utf-8") as fout:
        json.dump(document, fout, indent=4, ensure_ascii=False)
    logger.info("Decrypted %s -> %s", args.infile, args.outfile)
