import logging
import os
from typing import Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)


def is_executable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def search_path(env: Mapping[str, str]) -> List[str]:
    """Directories listed in PATH, in order, empty entries dropped."""
    return [d for d in env.get("PATH", "").split(os.pathsep) if d]


def _candidates(name: str, env: Mapping[str, str], cwd: str) -> Iterator[str]:
    if not name:
        return
    # a name with a slash is a path and skips the PATH search
    if os.sep in name:
        candidate = os.path.join(cwd, name)
        if is_executable_file(candidate):
            yield name
        return

    for directory in search_path(env):
        candidate = os.path.join(cwd, directory, name)
        if is_executable_file(candidate):
            yield os.path.join(directory, name)


def find_executable(name: str, env: Mapping[str, str], cwd: str) -> Optional[str]:
    """
    Resolves a command name for execution: the first PATH directory holding
    an executable regular file called ``name`` wins.
    """
    path = next(_candidates(name, env, cwd), None)
    logger.debug("resolved %r to %r", name, path)
    return path


def find_all_executables(name: str, env: Mapping[str, str], cwd: str) -> List[str]:
    """
    Every match for ``name`` across PATH, in search order. Used by ``type -a``.
    """
    return list(_candidates(name, env, cwd))
