"""Tests for the bodyview command line."""

from bodyview.__main__ import main, parse_args
from bodyview.core.message import MessageKind


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_bytes(data)
    return str(path)


def test_parse_args_defaults():
    args = parse_args(['body.bin'])

    assert args.files == ['body.bin']
    assert args.kind is MessageKind.REQUEST
    assert args.search is None
    assert args.log_level is None


def test_parse_args_response_and_level():
    args = parse_args(['--response', '--log-level', 'debug', 'a', 'b'])

    assert args.kind is MessageKind.RESPONSE
    assert args.log_level == 'DEBUG'
    assert args.files == ['a', 'b']


def test_prints_formatted_json(tmp_path, capsys):
    path = _write(tmp_path, 'body.json', b'{"a":"b"}')

    assert main([path]) == 0

    captured = capsys.readouterr()
    assert captured.out == '{\n  "a": "b"\n}\n'
    assert 'json' in captured.err


def test_search_lists_matches(tmp_path, capsys):
    path = _write(tmp_path, 'form.txt', b'x=1&y=2&x=3')

    assert main([path, '--search', 'X=']) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == ['x=1', '&y=2', '&x=3']
    assert lines[3:] == ['2 matches', '  1/2  0-2', '  2/2  10-12']


def test_response_mode_unescapes(tmp_path, capsys):
    path = _write(tmp_path, 'resp.txt', b'caf\\u00e9 ok')

    assert main(['--response', path]) == 0
    assert capsys.readouterr().out == 'café ok\n'

    assert main(['--response', '--no-unescape', path]) == 0
    assert capsys.readouterr().out == 'caf\\u00e9 ok\n'


def test_indent_flag(tmp_path, capsys):
    path = _write(tmp_path, 'body.json', b'{"a":1}')

    assert main(['--indent', '4', path]) == 0
    assert capsys.readouterr().out == '{\n    "a": 1\n}\n'


def test_color_output(tmp_path, capsys):
    path = _write(tmp_path, 'body.json', b'{"a":1}')

    assert main(['--color', 'light', path]) == 0
    assert '\x1b[' in capsys.readouterr().out


def test_empty_file_is_skipped(tmp_path, capsys):
    path = _write(tmp_path, 'empty.txt', b'')

    assert main([path]) == 0

    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'empty body' in captured.err


def test_missing_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.txt')]) == 1
    assert 'Error loading' in capsys.readouterr().err
