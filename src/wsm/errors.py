# -*- coding: utf-8 -*-
"""Error taxonomy shared by the discovery, session and tmux layers."""


class WorkspaceException(Exception):
    def __init__(self, message, errors=''):
        super(WorkspaceException, self).__init__(message)
        self.errors = errors
        self.message = message

    def __str__(self):
        if self.errors:
            return '{}: {}'.format(self.message, self.errors)
        return self.message


class InvalidConfiguration(WorkspaceException):
    """Configuration is malformed, nothing from it was applied"""
    # A valid configuration shape to show alongside the error
    example = None


class NotRunning(WorkspaceException):
    """Tmux server is unavailable"""

    def __init__(self, message='Tmux is not running or not in a tmux session',
                 errors=''):
        super(NotRunning, self).__init__(message, errors)


class NotFound(WorkspaceException):
    """Workspace directory is missing or unreadable"""


class EmptySelection(WorkspaceException):
    """The "no projects" entry was selected"""

    def __init__(self, message='No projects to open', errors=''):
        super(EmptySelection, self).__init__(message, errors)


class DelegationFailure(WorkspaceException):
    """A tmux command failed, errors holds tmux's own output"""
