"""Resolve the working directory relative to the operator's home directory."""

import logging
import os
from pathlib import Path
from typing import Union

from .errors import PathResolutionError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def resolve_relative_path(cwd: PathLike, home: PathLike, allow_outside_home: bool = False) -> str:
    """Express ``cwd`` relative to ``home``.

    The result is used both as the local source suffix and as the remote
    destination, so the directory layout under home is mirrored on the host.
    Symlinks are resolved on both sides, since ``os.getcwd()`` always reports
    the physical path while ``$HOME`` may go through a link.

    Args:
        cwd: Absolute path of the working directory
        home: Absolute path of the home directory
        allow_outside_home: Return a ``..``-containing path instead of failing
            when cwd is not underneath home

    Returns:
        Relative path with no leading separator ("." when cwd is home)

    Raises:
        PathResolutionError: If either path is relative, or cwd is outside home
    """
    cwd_str = os.fspath(cwd)
    home_str = os.fspath(home)

    if not os.path.isabs(cwd_str) or not os.path.isabs(home_str):
        raise PathResolutionError(
            f"Both paths must be absolute (cwd={cwd_str!r}, home={home_str!r})"
        )

    cwd_real = os.path.realpath(cwd_str)
    home_real = os.path.realpath(home_str)
    relative = os.path.relpath(cwd_real, home_real)

    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        if not allow_outside_home:
            raise PathResolutionError(f"{cwd_real} is not inside home directory {home_real}")
        logger.warning(f"{cwd_real} is outside {home_real}; using upward path {relative}")

    return relative
