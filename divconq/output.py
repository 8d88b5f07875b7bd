"""
Console output for the runner and the command line.

Debug messages and timers only print after `set_debug(True)`; messages
and errors always print.  Nested timers indent whatever is printed inside
them.
"""

import sys
import textwrap
import threading
import time
import traceback

import termcolor


show_debug = False


def set_debug(value):
    global show_debug
    show_debug = value


class Output(threading.local):
    def __init__(self, file=None):
        self.pending = None
        self.contexts = []
        # None means whatever sys.stdout is at the time of writing
        self.file = file
        self.lock = threading.RLock()

    @property
    def stream(self):
        return self.file if self.file is not None else sys.stdout

    def timing_context(self, key):
        return self.TimingContext(self, key, color="cyan", start="[", end="]")

    class TimingContext:
        def __init__(self, outer, label, color="cyan", start="", end=""):
            self.outer = outer
            self.label = termcolor.colored(label + "...", color)
            self.color = color
            self.start = termcolor.colored(start, color)
            self.end = termcolor.colored(end, color)

        def __enter__(self):
            with self.outer.lock:
                self.outer.print_enter(self.label, start=self.start, end=self.end)
                self.outer.contexts.append(self)
                self.start_ns = time.perf_counter_ns()

        def __exit__(self, exc_type, exc_value, traceback):
            with self.outer.lock:
                duration_ms = (time.perf_counter_ns() - self.start_ns) // 1_000_000
                self.outer.contexts.pop()
                elapsed = termcolor.colored(f"{duration_ms} ms", self.color)
                self.outer.print_exit(elapsed, start=self.start, end=self.end)

    def write(self, text):
        self.stream.write(text)
        self.stream.flush()

    def flush(self):
        if self.pending is not None:
            self.write(f"{self.pending}\n")
            self.pending = None

    def pad(self):
        return " " * (len(self.contexts) * 2)

    def print_enter(self, text, start="", end=""):
        self.flush()
        self.write(textwrap.indent(f"{start}{text}", self.pad()))
        self.pending = end

    # text is a single line
    def print_exit(self, text, start="", end=""):
        if self.pending is not None:
            self.write(f" {text}{self.pending}\n")
        else:
            self.write(f"{self.pad()}{start}{text}{end}\n")
        self.pending = None

    def _format_exception(self, e):
        return "\nException:\n" + "".join(
            traceback.format_exception(type(e), e, e.__traceback__)
        )

    def _print(self, color, args, start="", end=""):
        self.flush()
        pad = self.pad()
        text = " ".join(
            self._format_exception(a) if isinstance(a, Exception) else str(a)
            for a in args
        ).rstrip()

        lines = f"{start}{text}{end}".split("\n")
        self.write(f"{pad}{termcolor.colored(lines[0], color)}\n")
        for line in lines[1:]:
            self.write(f"{pad}{' ' * len(start)}{termcolor.colored(line, color)}\n")

    def log(self, *args):
        with self.lock:
            self._print("cyan", args, start="[", end="]")

    def message(self, *args):
        with self.lock:
            self._print("green", args)

    def error(self, *args):
        with self.lock:
            self._print("red", args, start="Error: ")


output = Output()


def log(*args):
    if show_debug:
        output.log(*args)


def message(*args):
    output.message(*args)


def error(*args):
    output.error(*args)


class EmptyContextManager:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc_value, traceback):
        pass


def timer(key):
    if show_debug:
        return output.timing_context(key)
    else:
        return EmptyContextManager()
