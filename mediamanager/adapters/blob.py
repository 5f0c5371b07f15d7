from .base import Adapter

class BlobAdapter(Adapter):
    """Adapter for flat blob containers, where directories are only name prefixes."""

    MAKE_DIRECTORY = False
    MOVE_DIRECTORY = False
