# -*- coding: utf-8 -*-
import io
from wsm.logger import Logger


class Terminal(io.StringIO):
    def isatty(self):
        return True


def test_echo_strips_colors_when_piped():
    out = io.StringIO()
    Logger(out).echo('[green]hey [boldred]there!', 'keys: ["<leader>w"]')
    assert out.getvalue() == 'hey there!\nkeys: ["<leader>w"]\n'


def test_echo_colors_on_terminal():
    out = Terminal()
    Logger(out).echo('[boldred]x')
    assert out.getvalue() == '\x1b[1;31mx\x1b[0m\n'


def test_error_prefix():
    err = io.StringIO()
    Logger(err_stream=err).error('Boom', 'details')
    assert err.getvalue() == 'ERROR: Boom\ndetails\n'


def test_debug_needs_environment(monkeypatch):
    err = io.StringIO()
    log = Logger(err_stream=err)

    monkeypatch.delenv('WSM_DEBUG', raising=False)
    log.debug('hidden')
    monkeypatch.setenv('WSM_DEBUG', '1')
    log.debug('shown')

    assert err.getvalue() == 'shown\n'


def test_escaped_text_is_printed_verbatim():
    out = io.StringIO()
    log = Logger(out)
    log.echo('[white]{}'.format(log.escape('[red]app')),
             log.escape('a[[b [boldgreen]'))
    assert out.getvalue() == '[red]app\na[[b [boldgreen]\n'


def test_escaped_text_next_to_markup_on_terminal():
    out = Terminal()
    log = Logger(out)
    log.echo('{}[red]x'.format(log.escape('[')))
    assert out.getvalue() == '[\x1b[0;31mx\x1b[0m\n'


def test_error_keeps_escaped_details():
    err = io.StringIO()
    log = Logger(err_stream=err)
    log.error(log.escape("can't find session: [green]WORK"))
    assert err.getvalue() == "ERROR: can't find session: [green]WORK\n"
