"""Filesystem helpers"""

import os
import stat

from repovol.cmd import PathLike


def dir_exists(path: PathLike) -> bool:
    """
    Tell whether ``path`` exists and is a directory.

    A missing path or a regular file gives False; other errors (such as
    permission denied on a parent directory) are raised.
    """
    try:
        info = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return stat.S_ISDIR(info.st_mode)
