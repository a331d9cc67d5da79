# -*- coding: utf-8 -*-
from collections import namedtuple
from . import config as wsm_config
from . import discovery
from .errors import (
    WorkspaceException, InvalidConfiguration, NotRunning, DelegationFailure)
from .logger import Logger
from .picker import get_picker, project_entries, session_entries
from .session import (
    EnsureAndAttach, Attach, CreateProject, NoOp, resolve, attach_action)
from .tmux import Tmux

log = Logger()

IDLE = 'Idle'
CHECKING_MULTIPLEXER = 'CheckingMultiplexer'
DISCOVERING = 'Discovering'
AWAITING_SELECTION = 'AwaitingSelection'
RESOLVING = 'Resolving'
DELEGATING = 'Delegating'
TERMINAL = 'Terminal'
ABORTED = 'Aborted'

Binding = namedtuple('Binding', ['mode', 'lhs', 'callback', 'desc',
                                 'workspace'])


class Invocation(object):
    """
    Track a single run of a flow, from Idle to Terminal or Aborted
    """
    def __init__(self):
        self.state = IDLE
        self.history = [IDLE]
        self.error = None
        self.action = None

    def advance(self, state):
        self.state = state
        self.history.append(state)

    def abort(self, error):
        self.error = error
        self.advance(ABORTED)
        return self

    @property
    def aborted(self):
        return self.state == ABORTED


def delegate(action, tmux):
    """
    Carry out a session action with the multiplexer

    :param action: Result of `wsm.session.resolve` or `attach_action`
    :param tmux: Tmux collaborator
    :raises WorkspaceException: NoOp's error, or a failing Tmux command
    """
    if isinstance(action, NoOp):
        raise action.error
    if isinstance(action, EnsureAndAttach):
        return tmux.ensure_and_attach(action.session_name,
                                      action.working_directory)
    if isinstance(action, Attach):
        return tmux.attach(action.session_name)
    if isinstance(action, CreateProject):
        raise DelegationFailure('Creating projects is not supported',
                                action.workspace_path)
    raise DelegationFailure('Unknown session action', repr(action))


def open_workspace(workspace, options, tmux=None, picker=None):
    """
    Pick a project from a workspace and open its Tmux session

    :param workspace: Workspace record from configuration
    :param options: Options, provides the naming function and picker kind
    :param tmux: Tmux collaborator
    :param picker: Picker collaborator
    :return: Invocation, in its Terminal or Aborted state
    """
    tmux = tmux or Tmux()
    invocation = Invocation()
    try:
        _check_multiplexer(invocation, tmux)

        invocation.advance(DISCOVERING)
        projects = discovery.discover(workspace.path)
        root = discovery.expand_path(workspace.path)
        if not projects:
            log.echo('No Git repositories found in [white]{}'.format(
                log.escape(root)))

        invocation.advance(AWAITING_SELECTION)
        picker = picker or get_picker(options.picker, options.preview)
        entry = picker.pick(project_entries(projects, root),
                            'Select Git Repository', preview=True)
        if entry is None:
            return invocation.abort(None)

        invocation.advance(RESOLVING)
        invocation.action = resolve(entry.value, workspace, options.naming)
        if isinstance(invocation.action, NoOp):
            raise invocation.action.error

        invocation.advance(DELEGATING)
        delegate(invocation.action, tmux)
        invocation.advance(TERMINAL)
    except WorkspaceException as e:
        _report(e)
        invocation.abort(e)
    return invocation


def tmux_sessions(tmux=None, picker=None, options=None):
    """
    List running Tmux sessions and attach to the selected one

    :return: Invocation, in its Terminal or Aborted state
    """
    tmux = tmux or Tmux()
    invocation = Invocation()
    try:
        _check_multiplexer(invocation, tmux)

        invocation.advance(AWAITING_SELECTION)
        picker = picker or get_picker(options.picker if options else 'auto')
        entry = picker.pick(session_entries(tmux.list_sessions()),
                            'Select a Tmux session')
        if entry is None:
            return invocation.abort(None)

        invocation.advance(RESOLVING)
        invocation.action = attach_action(entry.value)

        invocation.advance(DELEGATING)
        delegate(invocation.action, tmux)
        invocation.advance(TERMINAL)
    except WorkspaceException as e:
        _report(e)
        invocation.abort(e)
    return invocation


def setup(user_options, tmux=None, picker=None):
    """
    Validate configuration and build the key binding registration table.
    The host activates the bindings, nothing is registered globally here.

    :param user_options: Raw configuration dictionary, or parsed Options
    :return: List of Binding, empty when configuration is invalid
    """
    try:
        if isinstance(user_options, wsm_config.Options):
            options = user_options
        else:
            options = wsm_config.parse(user_options)
    except InvalidConfiguration as e:
        log.error('Invalid setup options, {}'.format(log.escape(e)),
                  'Provide options like this:',
                  e.example or wsm_config.EXAMPLE)
        return []

    bindings = []
    for workspace in options.workspaces:
        bindings.append(Binding(
            'n', workspace.keymap[0],
            _opener(workspace, options, tmux, picker),
            workspace.desc, workspace))
    return bindings


def find_binding(bindings, key):
    """
    Look up a binding by keymap or by workspace name
    """
    for binding in bindings:
        if key in (binding.lhs, binding.workspace.name) or \
                key in binding.workspace.keymap:
            return binding
    return None


def _opener(workspace, options, tmux, picker):
    def callback():
        return open_workspace(workspace, options, tmux, picker)
    return callback


def _check_multiplexer(invocation, tmux):
    invocation.advance(CHECKING_MULTIPLEXER)
    if not tmux.is_running():
        raise NotRunning()


def _report(error):
    log.error(log.escape(error))
    if isinstance(error, InvalidConfiguration) and error.example:
        log.error(error.example)
