# -*- coding: utf-8 -*-
import os
import pytest
from wsm import workspace as workspace_module
from wsm.config import Workspace, parse
from wsm.errors import (
    NotRunning, NotFound, EmptySelection, DelegationFailure)
from wsm.session import (
    EnsureAndAttach, Attach, CreateProject, NoOp, NO_PROJECTS)
from wsm.workspace import (
    ABORTED, AWAITING_SELECTION, CHECKING_MULTIPLEXER, DELEGATING,
    DISCOVERING, IDLE, RESOLVING, TERMINAL,
    delegate, find_binding, open_workspace, setup, tmux_sessions)


class FakeTmux(object):
    def __init__(self, running=True, sessions=None, fail=None):
        self.running = running
        self.sessions = sessions or []
        self.fail = fail
        self.calls = []

    def is_running(self):
        self.calls.append(('is_running',))
        return self.running

    def list_sessions(self):
        self.calls.append(('list_sessions',))
        return list(self.sessions)

    def attach(self, session_name):
        self.calls.append(('attach', session_name))
        if self.fail:
            raise self.fail

    def ensure_and_attach(self, session_name, working_directory):
        self.calls.append(('ensure_and_attach', session_name,
                           working_directory))
        if self.fail:
            raise self.fail


class FakePicker(object):
    """
    Chooses the entry whose display matches, or cancels with None
    """
    def __init__(self, display=None):
        self.display = display
        self.offered = None
        self.preview = None

    def pick(self, entries, title, preview=False):
        self.offered = entries
        self.preview = preview
        for entry in entries:
            if entry.display == self.display:
                return entry
        return None


@pytest.fixture
def ws(tmp_path):
    root = tmp_path / 'ws'
    (root / 'a' / '.git').mkdir(parents=True)
    (root / 'b' / 'c' / '.git').mkdir(parents=True)
    return root


@pytest.fixture
def options(ws):
    return parse({'workspaces': [
        {'name': 'Work', 'path': str(ws), 'keymap': ['<leader>w']}]})


def test_open_workspace_end_to_end(ws, options):
    tmux = FakeTmux()
    picker = FakePicker(os.path.join('b', 'c'))

    invocation = open_workspace(options.workspaces[0], options, tmux, picker)

    assert invocation.state == TERMINAL
    assert invocation.history == [
        IDLE, CHECKING_MULTIPLEXER, DISCOVERING, AWAITING_SELECTION,
        RESOLVING, DELEGATING, TERMINAL]
    assert invocation.action == EnsureAndAttach('C', str(ws / 'b' / 'c'))
    assert tmux.calls[-1] == ('ensure_and_attach', 'C', str(ws / 'b' / 'c'))
    assert [e.display for e in picker.offered] == \
        ['a', os.path.join('b', 'c'), '+ Create new project']
    assert picker.preview is True


def test_open_workspace_not_running(ws, options, monkeypatch):
    def discover(path):
        raise AssertionError('discovery must not run')

    monkeypatch.setattr(workspace_module.discovery, 'discover', discover)
    tmux = FakeTmux(running=False)
    picker = FakePicker('a')

    invocation = open_workspace(options.workspaces[0], options, tmux, picker)

    assert invocation.state == ABORTED
    assert isinstance(invocation.error, NotRunning)
    assert invocation.history[-2] == CHECKING_MULTIPLEXER
    assert picker.offered is None
    assert tmux.calls == [('is_running',)]


def single(workspace):
    return parse({'workspaces': [{
        'name': workspace.name, 'path': workspace.path,
        'keymap': list(workspace.keymap)}]})


def test_open_workspace_missing_directory(tmp_path):
    workspace = Workspace('Gone', str(tmp_path / 'gone'), ['<leader>g'])
    options = single(workspace)
    tmux = FakeTmux()

    invocation = open_workspace(workspace, options, tmux, FakePicker('a'))

    assert isinstance(invocation.error, NotFound)
    assert invocation.history[-2] == DISCOVERING
    assert tmux.calls == [('is_running',)]


def test_open_workspace_empty_selection(tmp_path):
    workspace = Workspace('Empty', str(tmp_path), ['<leader>e'])
    options = single(workspace)
    tmux = FakeTmux()
    picker = FakePicker(NO_PROJECTS.display)

    invocation = open_workspace(workspace, options, tmux, picker)

    assert isinstance(invocation.error, EmptySelection)
    assert invocation.history[-2] == RESOLVING
    assert isinstance(invocation.action, NoOp)
    assert tmux.calls == [('is_running',)]


def test_open_workspace_cancelled(options):
    tmux = FakeTmux()

    invocation = open_workspace(options.workspaces[0], options, tmux,
                                FakePicker(None))

    assert invocation.aborted
    assert invocation.error is None
    assert tmux.calls == [('is_running',)]


def test_open_workspace_new_project(options):
    picker = FakePicker('+ Create new project')

    invocation = open_workspace(options.workspaces[0], options, FakeTmux(),
                                picker)

    assert isinstance(invocation.action, CreateProject)
    assert isinstance(invocation.error, DelegationFailure)


def test_open_workspace_delegation_failure(options):
    tmux = FakeTmux(fail=DelegationFailure('Tmux command failed',
                                           'duplicate session: A'))

    invocation = open_workspace(options.workspaces[0], options, tmux,
                                FakePicker('a'))

    assert invocation.error.errors == 'duplicate session: A'
    assert invocation.history[-2] == DELEGATING


def test_open_workspace_custom_naming(ws):
    options = parse({
        'workspaces': [
            {'name': 'Work', 'path': str(ws), 'keymap': ['<leader>w']}],
        'session_name': '{workspace}-{project}',
    })

    invocation = open_workspace(options.workspaces[0], options, FakeTmux(),
                                FakePicker(os.path.join('b', 'c')))

    assert invocation.action.session_name == 'Work-c'


def test_tmux_sessions():
    tmux = FakeTmux(sessions=['WORK', 'DOTFILES'])

    invocation = tmux_sessions(tmux, FakePicker('DOTFILES'))

    assert invocation.state == TERMINAL
    assert invocation.action == Attach('DOTFILES')
    assert tmux.calls[-1] == ('attach', 'DOTFILES')


def test_tmux_sessions_not_running():
    tmux = FakeTmux(running=False, sessions=['WORK'])

    invocation = tmux_sessions(tmux, FakePicker('WORK'))

    assert isinstance(invocation.error, NotRunning)
    assert tmux.calls == [('is_running',)]


def test_delegate_no_op_never_contacts_tmux():
    tmux = FakeTmux()
    with pytest.raises(EmptySelection):
        delegate(NoOp(EmptySelection()), tmux)
    assert tmux.calls == []


def test_setup_returns_registration_table(options, ws):
    tmux = FakeTmux()
    bindings = setup(options, tmux, FakePicker('a'))

    assert len(bindings) == 1
    binding = bindings[0]
    assert (binding.mode, binding.lhs, binding.desc) == \
        ('n', '<leader>w', 'Open workspace Work')

    invocation = binding.callback()
    assert invocation.action == EnsureAndAttach('A', str(ws / 'a'))


def test_setup_accepts_raw_configuration(ws):
    bindings = setup({'workspaces': [
        {'name': 'Work', 'path': str(ws), 'keymap': ['<leader>w', 'gw']}]})
    assert find_binding(bindings, 'Work') is bindings[0]
    assert find_binding(bindings, 'gw') is bindings[0]
    assert find_binding(bindings, 'Home') is None


@pytest.mark.parametrize('raw', [{'workspaces': []}, None, {
    'workspaces': [{'name': 'Work', 'path': '/tmp/ws'}]}])
def test_setup_rejects_invalid_configuration(raw, capsys):
    assert setup(raw) == []
    err = capsys.readouterr().err
    assert 'Invalid setup options' in err
    assert 'workspaces:' in err


def test_no_projects_message_shows_expanded_root(tmp_path, monkeypatch,
                                                 capsys):
    monkeypatch.setenv('PROJECTS_DIR', str(tmp_path))
    workspace = Workspace('Env', '$PROJECTS_DIR', ['<leader>e'])

    open_workspace(workspace, single(workspace), FakeTmux(), FakePicker(None))

    out = capsys.readouterr().out
    assert 'No Git repositories found in {}'.format(tmp_path) in out
    assert '$PROJECTS_DIR' not in out


def test_delegation_failure_is_reported_verbatim(options, capsys):
    tmux = FakeTmux(fail=DelegationFailure('Tmux command failed',
                                           "can't find session: [red]x"))

    open_workspace(options.workspaces[0], options, tmux, FakePicker('a'))

    assert "can't find session: [red]x" in capsys.readouterr().err
