from typing import List, Generator, Tuple, Optional, TextIO
from time import perf_counter
import sys


def _timer_core() -> Generator[None, str, List[Tuple[str, float]]]:
    tag_list: List[str] = [None, ]
    time_list: List[float] = [perf_counter(), ]

    while True:
        tag = yield
        if tag is None:
            break
        tag_list.append(tag)
        time_list.append(perf_counter())

    return list(zip(tag_list, time_list))


def format_elapsed(delta: float) -> str:
    """Format a duration in seconds with the most readable unit."""
    if delta > 1.0:
        return f"{delta:.3f}".rjust(7) + " [s] "
    elif delta > 0.001:
        return f"{delta*1e3:.3f}".rjust(7) + " [ms]"
    else:
        return f"{delta*1e6:.3f}".rjust(7) + " [us]"


def elapsed(result: List[Tuple[str, float]]) -> List[Tuple[str, float]]:
    """Turn the (label, timestamp) pairs collected by a timer into
    (label, seconds since the previous event) pairs."""
    out = []
    for i in range(1, len(result)):
        out.append((result[i][0], result[i][1] - result[i-1][1]))
    return out


def timer(sink: Optional[TextIO]=None) -> Generator[None, str, None]:
    """A generator that measures the elapsed time between labelled events.

    Usage:

    - Call `next()` on the generator to start it.

    - Send strings (labels) with `send()` to mark the end of an event.

    - Sending `None` pauses the timer and writes a summary of the elapsed
      times between events, with their share of the total, to `sink`
      (stdout by default). The timer then starts over.

    Example:

        >>> t = timer()
        >>> next(t)
        >>> fill_stencil(m, 1000)
        >>> t.send('mtx_fill')
        >>> y = m.multiply(x)
        >>> t.send('vmult')
        >>> t.send(None)
    """
    while True:
        result = yield from _timer_core()
        out = sys.stdout if sink is None else sink
        out.write("Timer received None and paused.\n")
        out.write(
"=================================================\n"
"   ID       Time        Proportion(%)    Label\n"
"-------------------------------------------------\n"
        )
        total_time = result[-1][1] - result[0][1]

        for i, (label, delta) in enumerate(elapsed(result), start=1):
            i_text = f"{i}".rjust(3)
            p = delta / total_time * 100 if total_time > 0 else 0.0
            p_text = f"{p:.3f}".rjust(12)
            out.write("  " + "    ".join([i_text, format_elapsed(delta), p_text, label]) + "\n")

        out.write("=================================================\n")
