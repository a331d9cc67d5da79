# -*- coding: utf-8 -*-
import argparse
import os
import sys
from . import __version__
from . import config as wsm_config
from . import discovery
from .errors import InvalidConfiguration, WorkspaceException
from .logger import Logger
from .workspace import setup, find_binding, tmux_sessions

ACTIONS = ['open', 'sessions', 'ls', 'keys']


def main(argv=None):
    """
    Start main program: Parse user arguments and take action
    """
    parser = argparse.ArgumentParser(
        prog='wsm',
        description='wsm: Pick a git project and open its tmux session')

    parser.add_argument('action', type=str, nargs='?', default='open',
                        choices=ACTIONS,
                        help='an action for %(prog)s (default: %(default)s)')
    parser.add_argument('workspace', type=str, nargs='?',
                        help='workspace name or keymap'
                             ' (default: first configured workspace)')
    parser.add_argument('-c', '--config', type=str,
                        default=wsm_config.default_path(),
                        help='workspaces yml config file'
                             ' (default: %(default)s)')
    parser.add_argument('-v', action='version',
                        version='%(prog)s {}'.format(__version__))

    args = parser.parse_args(argv)

    log = Logger()
    cfg_path = os.path.expanduser(args.config)
    if not os.path.isfile(cfg_path):
        log.error('Unable to find [white]{}'.format(log.escape(cfg_path)),
                  'Create it like this:', wsm_config.EXAMPLE)
        return 2

    try:
        options = wsm_config.load(cfg_path)
    except InvalidConfiguration as e:
        log.error('Invalid configuration in {}: {}'.format(
                      log.escape(cfg_path), log.escape(e)),
                  'Provide options like this:',
                  e.example or wsm_config.EXAMPLE)
        return 2

    return run(options, args.action, args.workspace, log)


def run(options, action, target=None, log=None):
    """
    Execute a workspace action against loaded Options

    :return: Process exit code
    """
    log = log or Logger()
    if action == 'sessions':
        invocation = tmux_sessions(options=options)
        return 3 if invocation.error else 0

    bindings = setup(options)
    if action == 'keys':
        for binding in bindings:
            log.echo('[boldblue]{}[reset] {} [boldblack]({})'.format(
                log.escape('{:<12}'.format(binding.lhs)),
                log.escape(binding.desc),
                log.escape(binding.workspace.path)))
        return 0

    binding = find_binding(bindings, target) if target else bindings[0]
    if binding is None:
        log.error('Unknown workspace [white]{}'.format(log.escape(target)))
        return 3

    if action == 'ls':
        try:
            projects = discovery.discover(binding.workspace.path)
        except WorkspaceException as e:
            log.error(log.escape(e))
            return 3
        root = discovery.expand_path(binding.workspace.path)
        if not projects:
            log.echo('No Git repositories found in [white]{}'.format(
                log.escape(root)))
        for project in projects:
            log.echo(log.escape(discovery.relative_display(project, root)))
        return 0

    invocation = binding.callback()
    return 3 if invocation.error else 0


if __name__ == '__main__':
    sys.exit(main())
