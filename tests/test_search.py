"""Unit tests for bodyview.utils.search."""

import threading

import pytest

from bodyview.utils.search import Debouncer, MatchSpan, SearchIndex, find_matches


def _index(text, timers=None):
    holder = {'text': text}
    index = SearchIndex(lambda: holder['text'], debounce=0.3, timer_factory=timers)
    return holder, index


# ─── Matching ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("text, query, expected", [
    pytest.param('aaa', 'a', [(0, 1), (1, 2), (2, 3)], id="single_char_runs"),
    pytest.param('aaa', 'aa', [(0, 2)], id="no_overlap"),
    pytest.param('aaaa', 'aa', [(0, 2), (2, 4)], id="resume_after_match_end"),
    pytest.param('Foo foo FOO', 'foo', [(0, 3), (4, 7), (8, 11)], id="case_insensitive"),
    pytest.param('a.b axb', 'a.b', [(0, 3)], id="dot_is_literal"),
    pytest.param('f(x) [y] *z*', '(x)', [(1, 4)], id="parens_are_literal"),
    pytest.param('price $5 ^up', '[', [], id="unbalanced_bracket"),
    pytest.param('abc', 'zzz', [], id="no_match"),
])
def test_find_matches(text, query, expected):
    assert find_matches(text, query) == [MatchSpan(*span) for span in expected]


@pytest.mark.parametrize("query", ['', '   ', '\n\t', None])
def test_blank_query_clears_everything(query):
    _holder, index = _index('some text')
    index.set_query('text')

    assert index.set_query(query) == []
    assert index.matches == []
    assert index.cursor == -1
    assert index.status() == "0 matches"


def test_status_after_rebuild_reports_count():
    _holder, index = _index('aaa')

    index.set_query('a')

    assert index.cursor == -1
    assert index.status() == "3 matches"
    assert index.current() is None


# ─── Navigation ──────────────────────────────────────────────────────────────


def test_next_wraps_back_to_first_match():
    _holder, index = _index('ab ab ab')
    index.set_query('ab')
    first = index.matches[0]

    results = [index.next() for _ in range(len(index.matches) + 1)]

    assert results[0] == first
    assert results[-1] == first
    assert index.status() == "1/3"


def test_next_and_previous_from_no_selection():
    _holder, index = _index('ab ab ab')
    index.set_query('ab')

    assert index.previous() == MatchSpan(6, 8)
    assert index.status() == "3/3"

    index.set_query('ab')
    assert index.next() == MatchSpan(0, 2)
    assert index.status() == "1/3"


def test_previous_wraps_from_first_to_last():
    _holder, index = _index('x1 x2 x3')
    index.set_query('x')

    index.next()
    assert index.previous() == MatchSpan(6, 7)
    assert index.previous() == MatchSpan(3, 4)
    assert index.status() == "2/3"


def test_navigation_is_noop_without_matches():
    _holder, index = _index('abc')
    index.set_query('zzz')

    assert index.next() is None
    assert index.previous() is None
    assert index.cursor == -1
    assert index.status() == "0 matches"


def test_navigation_notifies_listeners():
    _holder, index = _index('ab ab')
    seen = []
    index.add_navigate_listener(seen.append)
    index.set_query('ab')

    index.next()
    index.next()
    index.next()

    assert seen == [MatchSpan(0, 2), MatchSpan(3, 5), MatchSpan(0, 2)]


def test_rebuild_uses_current_text():
    holder, index = _index('one')
    index.set_query('o')
    assert len(index.matches) == 1

    holder['text'] = 'one two four'
    index.rebuild()

    assert len(index.matches) == 3
    assert index.cursor == -1


def test_reset_clears_query():
    _holder, index = _index('aaa')
    rebuilt = []
    index.add_rebuild_listener(rebuilt.append)
    index.set_query('a')
    index.next()

    index.reset()

    assert index.query == ''
    assert index.matches == []
    assert index.cursor == -1
    assert index.status() == "0 matches"
    assert rebuilt == [index, index]


# ─── Debouncing ──────────────────────────────────────────────────────────────


def test_schedule_query_waits_for_quiet_period(timers):
    _holder, index = _index('needle haystack needle', timers)

    index.schedule_query('n')
    index.schedule_query('ne')
    index.schedule_query('needle')

    assert index.matches == []
    assert len(timers.timers) == 3
    assert all(t.cancelled for t in timers.timers[:-1])
    assert timers.last.delay == 0.3

    timers.last.fire()

    assert index.query == 'needle'
    assert index.status() == "2 matches"


def test_reset_cancels_pending_query(timers):
    _holder, index = _index('abc', timers)

    index.schedule_query('a')
    index.reset()

    assert timers.last.cancelled
    assert index.query == ''


def test_debouncer_pending_state(timers):
    calls = []
    debouncer = Debouncer(0.1, lambda: calls.append(1), timers)

    assert not debouncer.pending
    debouncer.trigger()
    assert debouncer.pending

    timers.last.fire()

    assert calls == [1]
    assert not debouncer.pending


def test_debouncer_without_factory_runs_on_calling_thread():
    threads = []
    debouncer = Debouncer(0.3, lambda: threads.append(threading.current_thread()))

    debouncer.trigger()

    assert threads == [threading.current_thread()]
    assert not debouncer.pending


def test_schedule_query_without_factory_applies_immediately():
    holder = {'text': 'abc abc'}
    index = SearchIndex(lambda: holder['text'])

    index.schedule_query('abc')

    assert index.status() == "2 matches"
