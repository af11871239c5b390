# cdsmodel

Pieces of a model checker for concurrent programs, as a plain Python library
with no dependencies outside the standard library.

## Modules

- `cdsmodel.printf`: a small printf engine. `sprintf(fmt, *args)` returns the
  formatted text, `snprintf(count, fmt, *args)` returns a `(text, length)` pair
  where `text` holds at most `count - 1` characters and `length` is the length
  of the full output, and `fctprintf(out, fmt, *args)` passes each character to
  `out` and returns how many were produced. It supports the flags `0 - + space #`,
  `*` for width and precision, the length modifiers `hh h l ll t j z`, and the
  specifiers `d i u x X o b f F e E g G c s p %`. Integer arguments are wrapped
  to the size that their length modifier selects, so `%x` of `-1` gives `ffffffff`.
- `cdsmodel.numfmt`: the number conversions behind it: `format_integer`,
  `format_fixed`, `format_exponential` and the `Flags` enum.
- `cdsmodel.hashset`: `LinkedHashSet`, a set that keeps insertion order. It has
  `add`, `remove`, `contains`, `get`, `first`, `copy` and `reset`, and an optional
  `key` function that decides which members count as equal.
- `cdsmodel.thread_model`: `Thread`, `ThreadState`, `MutexState` and `MutexType`.
  `Thread.waiting_on()` and `Thread.is_waiting_on(t)` follow chains of joins and
  held locks. A thread that relocks a recursive mutex it already holds does not
  count as waiting on itself.
- `cdsmodel.schedule`: `Scheduler`, `EnabledType` and `enabled_type_to_string`.
  The scheduler tracks which threads are enabled, disabled or sleeping, and asks
  a registered fuzzer object which thread runs next.
- `cdsmodel.waitobj`: `WaitObj`, which records the threads a thread waits for
  (with target nodes and distances), the threads that wait for it, and per-thread
  action counters.
- `cdsmodel.bugmessage`: `BugMessage`, a formatted bug report line.

## Install

```
pip install .
pip install ".[test]"   # with the test tools
```

## Examples

```python
from cdsmodel.printf import sprintf, snprintf, fctprintf

sprintf("%5d|%-5s|%#x", 42, "ab", 255)   # '   42|ab   |0xff'
sprintf("%.3f", 3.14159)                 # '3.142'
snprintf(4, "%s", "hello")               # ('hel', 5)

collected = []
fctprintf(collected.append, "%03d", 7)   # 3; collected == ['0', '0', '7']
```

```python
from cdsmodel.hashset import LinkedHashSet

s = LinkedHashSet()
s.add(3)       # True
s.add(1)       # True
s.add(3)       # False
list(s)        # [3, 1]
s.first()      # 3
```

```python
from cdsmodel.schedule import EnabledType, Scheduler, enabled_type_to_string
from cdsmodel.thread_model import Thread

enabled_type_to_string(EnabledType.SLEEP_SET)   # 'sleep'


class FirstFuzzer:
    def __init__(self, threads):
        self.threads = threads

    def has_paused_threads(self):
        return False

    def select_thread(self, threadlist):
        return self.threads[threadlist[0]]


worker = Thread(1, start_routine=print, arg="hi")
scheduler = Scheduler()
scheduler.register_engine(FirstFuzzer({1: worker}))
scheduler.add_thread(worker)
scheduler.select_next_thread() is worker   # True
scheduler.format()                         # 'Scheduler: [0: disabled][1: enabled]\n'
```

```python
from cdsmodel.waitobj import WaitObj

record = WaitObj(0)
node = object()
record.add_waiting_for(2, node, 3)
record.lookup_dist(2, node)      # 3
record.format_waiting_for()      # 'thread 0 is waiting for: 2 \n'
```

```python
from cdsmodel.bugmessage import BugMessage

BugMessage("data race").print()  # writes '  [BUG] data race\n' to standard output
```

## What this package does not do

It does not run, instrument or check real programs. There is no command-line
tool and no execution engine: nothing creates threads or actions on its own,
and the scheduler picks threads only through a fuzzer object that you supply.
It has no predicate trees, no write-selecting fuzzer and no registry of trace
analyses.

## Tests

```
pytest
```