# -*- coding: utf-8 -*-
import os
import string
import yaml
from collections import namedtuple
from .errors import InvalidConfiguration
from .session import default_naming

PICKERS = ['auto', 'fzf', 'prompt']
TEMPLATE_FIELDS = ('project', 'workspace')

EXAMPLE = """\
workspaces:
  - name: Workspace1
    path: ~/path/to/workspace1
    keymap: ["<leader>w"]
  - name: Workspace2
    path: ~/path/to/workspace2
    keymap: ["<leader>x"]
session_name: upper
picker: auto
preview: auto"""

NAMING_STRATEGIES = {
    'upper': default_naming,
    'lower': lambda project, workspace: project.lower(),
    'project': lambda project, workspace: project,
    'workspace': lambda project, workspace: '{}_{}'.format(
        workspace, project).upper(),
}


class Workspace(namedtuple('Workspace', ['name', 'path', 'keymap', 'desc'])):
    """
    A named directory of projects, bound to one or more keymaps
    """
    __slots__ = ()

    def __new__(cls, name, path, keymap, desc=None):
        return super(Workspace, cls).__new__(
            cls, name, path, tuple(keymap),
            desc or 'Open workspace {}'.format(name))


Options = namedtuple('Options',
                     ['workspaces', 'naming', 'picker', 'preview'])


def default_path():
    """
    Configuration file location, honoring XDG_CONFIG_HOME
    """
    config_dir = os.environ.get(
        'XDG_CONFIG_HOME', os.path.join(os.path.expanduser('~'), '.config'))
    return os.path.join(config_dir, 'wsm', 'config.yml')


def load(path):
    """
    Read and validate a YAML configuration file

    :param path: Path to configuration file
    :raises InvalidConfiguration: Unreadable, unparsable or invalid file
    :return: Options
    """
    try:
        with open(path, 'r') as stream:
            config = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise InvalidConfiguration('Unable to parse {}'.format(path), str(e))
    except (IOError, OSError) as e:
        raise InvalidConfiguration('Unable to read {}'.format(path),
                                   e.strerror)
    return parse(config)


def naming_function(value):
    """
    Turn a `session_name` setting into a naming function

    Accepts a callable, one of NAMING_STRATEGIES, or a format template
    using `{project}` and `{workspace}`.
    """
    if value is None:
        return default_naming
    if callable(value):
        return value
    if not isinstance(value, str):
        raise _invalid('session_name must be a string', repr(value))
    if value in NAMING_STRATEGIES:
        return NAMING_STRATEGIES[value]
    if '{' not in value:
        raise _invalid(
            'Unknown session_name strategy',
            '{} (choose from {} or a "{{workspace}}-{{project}}" template)'
            .format(value, ', '.join(sorted(NAMING_STRATEGIES))))
    try:
        fields = list(string.Formatter().parse(value))
    except ValueError as e:
        raise _invalid('Invalid session_name template', '{} ({})'.format(
            value, e))
    for _, field, spec, conversion in fields:
        if field is None:
            continue
        if field not in TEMPLATE_FIELDS or spec or conversion:
            raise _invalid(
                'Invalid session_name template',
                '{} (only plain {{project}} and {{workspace}} fields are '
                'allowed)'.format(value))
    return lambda project, workspace: value.format(
        project=project, workspace=workspace)


def preview_command(value):
    """
    Normalize the `preview` setting: 'auto' (onefetch when installed),
    a command receiving the project path, or None when disabled
    """
    if value is None or value is True:
        return 'auto'
    if value is False or value == '':
        return None
    if not isinstance(value, str):
        raise _invalid('preview must be a command or false', repr(value))
    return value


def parse(config):
    """
    Validate raw configuration and build Options, all or nothing

    :param config: Dictionary loaded from YAML (or built in code)
    :raises InvalidConfiguration: Includes an example of a valid shape
    :return: Options
    """
    if not isinstance(config, dict):
        raise _invalid('Configuration must be a mapping')

    entries = config.get('workspaces')
    if not entries or not isinstance(entries, list):
        raise _invalid('At least one workspace is required')

    workspaces = []
    names = set()
    for index, entry in enumerate(entries):
        workspace = _parse_workspace(index, entry)
        if workspace.name in names:
            raise _invalid('Duplicate workspace name', workspace.name)
        names.add(workspace.name)
        workspaces.append(workspace)

    picker = config.get('picker') or 'auto'
    if picker not in PICKERS:
        raise _invalid('Unknown picker', '{} (choose from {})'.format(
            picker, ', '.join(PICKERS)))

    naming = naming_function(config.get('session_name'))
    preview = preview_command(config.get('preview'))
    return Options(tuple(workspaces), naming, picker, preview)


def _parse_workspace(index, entry):
    if not isinstance(entry, dict):
        raise _invalid('Workspace #{} must be a mapping'.format(index + 1))

    missing = [key for key in ('name', 'path', 'keymap') if not entry.get(key)]
    if missing:
        raise _invalid('Workspace #{} is missing {}'.format(
            index + 1, ', '.join(missing)))

    name = entry['name']
    if not isinstance(name, str) or not isinstance(entry['path'], str):
        raise _invalid('Workspace #{} name and path must be strings'.format(
            index + 1))

    # Allow a single keymap string as shorthand for a list of one
    keymap = entry['keymap']
    if isinstance(keymap, str):
        keymap = [keymap]
    if not isinstance(keymap, list) or \
            not all(isinstance(key, str) and key for key in keymap):
        raise _invalid('Workspace "{}" keymap must be a list of keys'
                       .format(name))

    return Workspace(name, entry['path'], keymap, entry.get('desc'))


def _invalid(message, errors=''):
    error = InvalidConfiguration(message, errors)
    error.example = EXAMPLE
    return error
