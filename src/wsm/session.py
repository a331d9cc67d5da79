# -*- coding: utf-8 -*-
"""
Map a selected project to the tmux session action it calls for.

Nothing here touches tmux; actions only describe what the multiplexer
should do and are carried out by `wsm.workspace.delegate`.
"""
import os
from collections import namedtuple
from .errors import EmptySelection, InvalidConfiguration

# Characters tmux treats as target separators
_FORBIDDEN = (':', '.')


class _Sentinel(object):
    def __init__(self, name, display):
        self.name = name
        self.display = display

    def __repr__(self):
        return '<{}>'.format(self.name)


NO_PROJECTS = _Sentinel('NO_PROJECTS', 'No projects found')
NEW_PROJECT = _Sentinel('NEW_PROJECT', '+ Create new project')


class EnsureAndAttach(namedtuple('EnsureAndAttach',
                                 ['session_name', 'working_directory'])):
    __slots__ = ()


class Attach(namedtuple('Attach', ['session_name'])):
    __slots__ = ()


class CreateProject(namedtuple('CreateProject', ['workspace_path'])):
    __slots__ = ()


class NoOp(namedtuple('NoOp', ['error'])):
    """
    Nothing to delegate, `error` explains why
    """
    __slots__ = ()


def default_naming(project_name, workspace_name):
    """
    Session name is the upper-cased project name, workspace is ignored
    """
    return project_name.upper()


def session_name(naming, project_name, workspace_name):
    """
    Run a naming function and make sure tmux can use its result.
    Target separators are replaced with underscores, like tmux does.

    :raises InvalidConfiguration: Naming returned an empty or non-string name
    """
    name = naming(project_name, workspace_name)
    if not name or not isinstance(name, str):
        raise InvalidConfiguration(
            'Session naming returned an empty name',
            '{!r} for project {}'.format(name, project_name))
    for char in _FORBIDDEN:
        name = name.replace(char, '_')
    return name


def resolve(selected, workspace, naming=default_naming):
    """
    Decide what tmux should do for a picker selection

    :param selected: A `Project`, `NEW_PROJECT`, or `NO_PROJECTS`/None
    :param workspace: The workspace the selection was made in
    :param naming: Function of (project_name, workspace_name)
    :return: EnsureAndAttach, CreateProject or NoOp
    """
    if selected is None or selected is NO_PROJECTS:
        return NoOp(EmptySelection(
            'No projects found in workspace', workspace.name))
    if selected is NEW_PROJECT:
        return CreateProject(workspace.path)

    path = selected.path
    name = session_name(
        naming, os.path.basename(path.rstrip(os.sep)), workspace.name)
    return EnsureAndAttach(name, path)


def attach_action(name):
    """
    Action for switching to an already running session
    """
    return Attach(name)
