"""List the files git tracks in a working tree."""

import logging
import os
from pathlib import Path
import subprocess
from typing import List, Optional, Union

from .errors import WatcherSetupError

logger = logging.getLogger(__name__)


class GitTrackedFileLister:
    """Wraps ``git ls-files`` for a repository.

    Paths are returned absolute, in the order git reports them.
    """

    def __init__(self, repo_root: Optional[Union[str, Path]] = None, git_binary: str = "git"):
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.git_binary = git_binary

    def list_files(self) -> List[str]:
        """Return the tracked file set.

        Raises:
            WatcherSetupError: If git is missing or the directory is not a repository
        """
        try:
            result = subprocess.run(
                [self.git_binary, "ls-files", "-z"],
                cwd=self.repo_root,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise WatcherSetupError(f"'{self.git_binary}' not found: {e}") from e

        if result.returncode != 0:
            raise WatcherSetupError(
                f"git ls-files failed in {self.repo_root}: {result.stderr.strip()}"
            )

        files = [
            os.path.join(os.fspath(self.repo_root.absolute()), name)
            for name in result.stdout.split("\0")
            if name
        ]
        logger.debug(f"Found {len(files)} tracked files in {self.repo_root}")
        return files
