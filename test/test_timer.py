import io

from sparselab.utils import timer, elapsed, format_elapsed


def test_timer_summary():
    sink = io.StringIO()
    t = timer(sink=sink)
    next(t)
    t.send('fill')
    t.send('multiply')
    t.send(None)

    text = sink.getvalue()
    assert text.startswith("Timer received None and paused.")
    assert "fill" in text
    assert "multiply" in text
    assert text.count("=================================================") == 2


def test_timer_restarts():
    sink = io.StringIO()
    t = timer(sink=sink)
    next(t)
    t.send('first')
    t.send(None)
    t.send('second')
    t.send(None)

    text = sink.getvalue()
    assert text.count("Timer received None and paused.") == 2
    assert text.index('first') < text.index('second')


def test_elapsed():
    result = [(None, 1.0), ('a', 1.5), ('b', 4.0)]
    assert elapsed(result) == [('a', 0.5), ('b', 2.5)]


def test_format_elapsed():
    assert format_elapsed(2.0).strip() == "2.000 [s]"
    assert format_elapsed(0.25).strip() == "250.000 [ms]"
    assert format_elapsed(5e-6).strip() == "5.000 [us]"
