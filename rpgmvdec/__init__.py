__version_tuple__ = (0, 3, 1)
__version__ = ".".join(map(str, __version_tuple__))
