# -*- coding: utf-8 -*-
import os
import shutil
import subprocess
from .errors import DelegationFailure
from .logger import Logger

log = Logger()


class Tmux(object):
    """
    Tmux controller
    """
    def __init__(self, binary='tmux'):
        self._binary = binary

    def command(self, cmd, formats=None):
        """
        Send custom Tmux command and return its output lines

        :param cmd: Tmux sub-command and its arguments
        :param formats: Format variables to print, tab separated, per line
        :return: (returncode, lines, stderr)
        """
        cmd = [self._binary] + list(cmd)
        if formats:
            cmd.append('-F')
            cmd.append('\t'.join('#{' + key + '}' for key in formats))

        log.debug('Running {}'.format(' '.join(cmd)))
        try:
            process = subprocess.Popen(
                cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
            stdout, stderr = process.communicate()
        except OSError as e:
            raise DelegationFailure('Unable to execute Tmux, aborting.',
                                    e.strerror or str(e))

        lines = [line for line in stdout.decode('utf_8').split('\n') if line]
        return process.returncode, lines, stderr.decode('utf_8').strip()

    def check(self, cmd, formats=None):
        """
        Run a command and raise when Tmux reports failure

        :raises DelegationFailure: Holds Tmux's stderr verbatim
        :return: Output lines
        """
        code, lines, errors = self.command(cmd, formats)
        if code != 0:
            raise DelegationFailure(
                'Tmux command failed: {}'.format(cmd[0]),
                errors or 'exit status {}'.format(code))
        return lines

    def within_session(self):
        """
        Returns true if current within a Tmux session
        """
        return bool(os.environ.get('TMUX'))

    def is_running(self):
        """
        Returns true if Tmux is installed and its server answers
        """
        if not shutil.which(self._binary):
            return False
        try:
            code, _, _ = self.command(['list-sessions'], ['session_name'])
        except DelegationFailure:
            return False
        return code == 0

    def list_sessions(self):
        """
        Names of all running sessions
        """
        return self.check(['list-sessions'], ['session_name'])

    def has_session(self, session_name):
        """
        Returns true if specified session currently exists

        :param session_name: The session name to match
        """
        code, _, _ = self.command(
            ['has-session', '-t', '={}'.format(session_name)])
        return code == 0

    def session_path(self, session_name):
        """
        Start directory of an existing session

        :param session_name: Target session name
        """
        lines = self.check(['display-message', '-p', '-t',
                            '={}'.format(session_name), '#{session_path}'])
        return lines[0] if lines else ''

    def new_session(self, session_name, working_directory):
        """
        Create a new detached Tmux session

        :param session_name: New session's name
        :param working_directory: Start directory of the session
        """
        return self.check(['new-session', '-d', '-s', session_name,
                           '-c', working_directory])

    def attach(self, session_name):
        """
        Attach to an existing Tmux session, or switch to it from within

        :param session_name: Target session name
        :raises DelegationFailure: Tmux exited with an error
        """
        if not session_name:
            raise DelegationFailure('No session name to attach to')
        cmd = 'switch-client' if self.within_session() \
            else 'attach-session'
        # The terminal is handed over to Tmux, nothing is captured
        code = subprocess.call(
            [self._binary, cmd, '-t', '={}'.format(session_name)])
        if code != 0:
            raise DelegationFailure(
                'Unable to attach to session {}'.format(session_name),
                'exit status {}'.format(code))
        return code

    def ensure_and_attach(self, session_name, working_directory):
        """
        Create a session rooted at a directory, unless present, then attach

        An existing session with the same name rooted elsewhere belongs to
        another project, attaching to it would be wrong.

        :param session_name: Target session name
        :param working_directory: Directory the session should start in
        :raises DelegationFailure: Name collision or Tmux failure
        """
        if self.has_session(session_name):
            current = self.session_path(session_name)
            if current and os.path.realpath(current) != \
                    os.path.realpath(working_directory):
                raise DelegationFailure(
                    'Session {} already exists for another directory'
                    .format(session_name),
                    '{} (use a workspace-qualified session_name, e.g. '
                    '"{{workspace}}-{{project}}")'.format(current))
        else:
            log.debug('Creating session {} at {}'.format(
                session_name, working_directory))
            self.new_session(session_name, working_directory)
        return self.attach(session_name)
