# -*- coding: utf-8 -*-
import os
import sys
import re


class Logger(object):
    """
    Terminal logger with color-support, also used as the error channel
    """
    _colors = {'reset': 0, 'black': 30, 'white': 37,
               'cyan': 36, 'magenta': 35, 'blue': 34,
               'yellow': 33, 'green': 32, 'red': 31}

    def __init__(self, stream=None, err_stream=None):
        self._stream = stream
        self._err_stream = err_stream

    @property
    def stream(self):
        return self._stream or sys.stdout

    @property
    def err_stream(self):
        return self._err_stream or sys.stderr

    def echo(self, *args):
        """
        Prints text to terminal with color codes
        Example:
          log.echo('[green]hey [boldred]there!')

        :param args: Multiple string messages
        """
        self._write(self.stream, args)

    def error(self, *args):
        """
        Prints error messages to stderr, the first one with a red prefix

        :param args: Multiple string messages
        """
        if not args:
            return
        first = '[red]ERROR: [reset]{}'.format(args[0])
        self._write(self.err_stream, (first,) + tuple(args[1:]))

    def debug(self, *args):
        """
        Prints messages only when WSM_DEBUG is set in the environment
        """
        if os.environ.get('WSM_DEBUG'):
            self._write(self.err_stream,
                        ['[boldblack]{}'.format(self.escape(arg))
                         for arg in args])

    @staticmethod
    def escape(text):
        """
        Protect text from color markup, for paths and command output
        Example:
          log.echo('Found [white]{}'.format(log.escape(path)))
        """
        return str(text).replace('[', '[[')

    def _write(self, stream, args):
        is_tty = hasattr(stream, 'isatty') and stream.isatty()
        for arg in args:
            msg = re.sub(r'\[\[|\[(bold)?([a-z]+)\]',
                         lambda match: self._colorize(match, is_tty), arg)
            stream.write(''.join([msg, '\x1b[0m' if is_tty else '', '\n']))

    def _colorize(self, match, is_tty):
        if match.group(0) == '[[':
            return '['
        if match.group(2) not in self._colors:
            return match.group(0)
        if not is_tty:
            return ''
        attr = ['1' if match.group(1) == 'bold' else '0']
        attr.append(str(self._colors[match.group(2)]))
        return '\x1b[{}m'.format(';'.join(attr))
