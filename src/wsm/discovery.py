# -*- coding: utf-8 -*-
import os
import re
from collections import namedtuple
from .errors import NotFound
from .logger import Logger

log = Logger()

MARKER = '.git'

_VARIABLE = re.compile(r'\$(\w+|\{[^}]*\})', re.ASCII)


class Project(namedtuple('Project', ['path'])):
    """
    A directory that directly contains a git marker directory
    """
    __slots__ = ()

    @property
    def name(self):
        return os.path.basename(self.path)


def expand_path(path):
    """
    Expand home shorthand and environment variables in a workspace path

    :param path: Raw path from configuration, e.g. `$PROJECTS_DIR/work`
    :raises NotFound: A referenced environment variable is unset
    :return: Absolute, normalized path
    """
    if not path:
        raise NotFound('Workspace path is empty')
    # Only the raw path is checked, expanded values may hold a literal `$`
    for match in _VARIABLE.finditer(path):
        name = match.group(1).strip('{}')
        if name not in os.environ:
            raise NotFound('Environment variable not set', match.group(0))
    expanded = os.path.expanduser(os.path.expandvars(path))
    return os.path.abspath(expanded)


def discover(workspace_path):
    """
    Walk a workspace and collect every git repository root beneath it

    Nested repositories are reported alongside their parents. Directories
    reachable more than once (symlinks) are only walked once.

    :param workspace_path: Workspace directory, may use `~` and `$VARS`
    :raises NotFound: Workspace directory is missing or unreadable
    :return: List of projects, sorted by path
    """
    root = expand_path(workspace_path)
    if not os.path.isdir(root):
        raise NotFound('Projects directory not found', root)
    try:
        os.listdir(root)
    except OSError as e:
        raise NotFound('Unable to read projects directory',
                       '{} ({})'.format(root, e.strerror))

    def skip(error):
        log.debug('Skipping unreadable directory {}'.format(error.filename))

    found = {}
    visited = set()
    for dirpath, dirnames, _ in os.walk(root, onerror=skip, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in visited:
            dirnames[:] = []
            continue
        visited.add(real)

        if MARKER in dirnames:
            # Never descend into the marker itself
            dirnames.remove(MARKER)
            if os.path.isdir(os.path.join(dirpath, MARKER)):
                found.setdefault(real, Project(os.path.normpath(dirpath)))

    projects = sorted(found.values())
    log.debug('Found {} projects in {}'.format(len(projects), root))
    return projects


def relative_display(project, root):
    """
    Path of a project relative to its workspace root, for display

    :param project: Discovered project
    :param root: Expanded workspace directory
    """
    relative = os.path.relpath(project.path, root)
    return project.path if relative.startswith(os.pardir) else relative
