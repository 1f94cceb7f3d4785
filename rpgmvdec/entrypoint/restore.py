from logging import getLogger

logger = getLogger(__name__)


def main_restore(args):
    from rpgmvdec.entrypoint.decrypt import restore_files

    logger.warning("Restoring without a key. Only PNG images can be recovered this way")
    return restore_files(args, None, None)
