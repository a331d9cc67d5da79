# -*- coding: utf-8 -*-
"""
Picker collaborators: build selectable entries and hand them to `fzf`,
or to a plain numbered prompt when `fzf` isn't installed.
"""
import shutil
import subprocess
import sys
from collections import namedtuple
from .discovery import relative_display
from .errors import DelegationFailure
from .session import NO_PROJECTS, NEW_PROJECT

Entry = namedtuple('Entry', ['value', 'display', 'ordinal'])


def project_entries(projects, root, allow_create=True):
    """
    Picker entries for discovered projects, displayed relative to root.
    An empty list yields the "no projects" entry instead.

    :param projects: Discovered projects
    :param root: Expanded workspace directory
    :param allow_create: Append a "create new project" entry
    """
    if projects:
        entries = [Entry(project, relative_display(project, root),
                         project.path)
                   for project in projects]
    else:
        entries = [Entry(NO_PROJECTS, NO_PROJECTS.display, '')]
    if allow_create:
        entries.append(Entry(NEW_PROJECT, NEW_PROJECT.display, '~'))
    return entries


def session_entries(sessions):
    return [Entry(name, name, name) for name in sessions]


class FzfPicker(object):
    """
    Fuzzy picker backed by the `fzf` binary
    """
    def __init__(self, binary='fzf', preview=None):
        """
        :param binary: fzf executable
        :param preview: Command previewing a project, given its path
        """
        self._binary = binary
        self._preview = preview

    def command(self, title, preview=False):
        """
        Build the fzf command line. Each input line is
        `index<TAB>path<TAB>display`, only the display is searchable.

        :param title: Prompt title
        :param preview: Preview the project path of the current line
        """
        cmd = [self._binary, '--with-nth=3..', '--delimiter=\t',
               '--no-multi', '--prompt={}> '.format(title)]
        if preview and self._preview:
            # Sentinel entries carry no path
            cmd.append('--preview=[ -n {{2}} ] && {} {{2}}'.format(
                self._preview))
        return cmd

    def pick(self, entries, title, preview=False):
        """
        :param entries: Ordered picker entries
        :param title: Prompt title
        :param preview: Show the preview command's output for projects
        :return: Selected entry, or None when cancelled
        """
        if not entries:
            return None
        lines = '\n'.join(
            '{}\t{}\t{}'.format(
                index, getattr(entry.value, 'path', ''), entry.display)
            for index, entry in enumerate(entries))
        cmd = self.command(title, preview)
        try:
            process = subprocess.Popen(
                cmd, stdin=subprocess.PIPE, stdout=subprocess.PIPE)
            stdout, _ = process.communicate(lines.encode('utf_8'))
        except OSError as e:
            raise DelegationFailure('Unable to execute fzf',
                                    e.strerror or str(e))

        # 1: no match, 130: interrupted
        if process.returncode in (1, 130):
            return None
        if process.returncode != 0:
            raise DelegationFailure(
                'fzf failed', 'exit status {}'.format(process.returncode))
        selected = stdout.decode('utf_8').strip()
        return entries[int(selected.split('\t', 1)[0])] if selected else None


class PromptPicker(object):
    """
    Numbered list on the terminal, choose by typing an index
    """
    def __init__(self, stdin=None, stdout=None):
        self._stdin = stdin
        self._stdout = stdout

    def pick(self, entries, title, preview=False):
        stdin = self._stdin or sys.stdin
        stdout = self._stdout or sys.stdout
        if not entries:
            return None

        stdout.write('{}\n'.format(title))
        for index, entry in enumerate(entries, start=1):
            stdout.write('{:>3}) {}\n'.format(index, entry.display))
        stdout.write('> ')
        stdout.flush()

        answer = stdin.readline().strip()
        if not answer.isdigit():
            return None
        index = int(answer)
        if not 1 <= index <= len(entries):
            return None
        return entries[index - 1]


def get_picker(kind='auto', preview='auto'):
    """
    :param kind: One of 'auto', 'fzf', 'prompt'
    :param preview: Project preview command, 'auto' for onefetch if present
    """
    if preview == 'auto':
        preview = 'onefetch' if shutil.which('onefetch') else None
    if kind == 'fzf' or (kind == 'auto' and shutil.which('fzf')):
        return FzfPicker(preview=preview)
    return PromptPicker()
