from .timer import timer, elapsed, format_elapsed
