# codexion

A threaded simulation of coders sitting around a table and sharing USB dongles.
There are as many dongles as coders, and each coder needs the two dongles
beside them to compile. After compiling a coder debugs, then refactors, then
queues up to compile again. A coder who goes longer than the burnout time
without starting a compile burns out, and the simulation stops.

Requests for dongles go through one shared priority queue, ordered either
first-in-first-out (`fifo`) or earliest-deadline-first (`edf`), where a
request's deadline is the coder's last compile time plus the burnout time.
Ties are broken by the lower coder number. A released dongle stays unusable
for a cooldown period.

## Installation

```
pip install .
```

## Usage

```
codexion n_coders t_burnout t_compile t_debug t_refactor n_compiles cooldown scheduler
```

All times are in milliseconds.

| Argument     | Meaning                                                    |
|--------------|------------------------------------------------------------|
| `n_coders`   | number of coders, which is also the number of dongles      |
| `t_burnout`  | the longest a coder may go without compiling               |
| `t_compile`  | time spent compiling (while holding both dongles)          |
| `t_debug`    | time spent debugging                                       |
| `t_refactor` | time spent refactoring                                     |
| `n_compiles` | compiles each coder must finish before the run ends        |
| `cooldown`   | time a dongle stays unusable after it is released          |
| `scheduler`  | `fifo`, `FIFO`, `edf` or `EDF`                             |

Numbers are whole decimal numbers, optionally preceded by white space and a
`+`, with at most ten digits and no larger than 2147483647. Negative numbers
are refused. `n_coders`, every time value except the cooldown, and
`n_compiles` must be greater than zero; the cooldown may be zero.

If the number of arguments is not eight, a usage message is printed and the
exit status is 0. If an argument is invalid, the reason is printed and the
exit status is 1.

Example:

```
codexion 4 800 200 100 100 3 50 edf
```

Each line of output gives the milliseconds since the start (right-aligned in
six columns), the coder's number (three columns) and what happened, one of
`has taken a dongle`, `is compiling`, `is debugging`, `is refactoring` or
`burned out`:

```
     0   1 has taken a dongle
     0   1 has taken a dongle
     0   1 is compiling
   200   1 is debugging
```

The run ends when every coder has finished `n_compiles` compiles, or as soon as
one coder burns out. Once the run has ended only the `burned out` line is still
written. With a single coder there is only one dongle: the coder takes it and
waits until it burns out.

## Library use

- `codexion.parsing.parse_args(args)` turns the seven numbers and the scheduler
  name into a frozen `Config`, raising `InputError` on bad input.
  `parse_number`, `parse_scheduler` and `Config.validate()` are available on
  their own.
- `codexion.simulation.Simulation(config, out)` sets up the coders and dongles;
  `run()` runs the simulation once and writes the event lines to `out`
  (standard output by default). Afterwards `burned_out` holds the number of the
  coder who burned out, or `None`. `format_event(event, elapsed, coder_id)`
  renders a single line.
- `codexion.heap.RequestHeap(capacity, scheduler)` is the bounded priority queue
  of `Request` objects, ordered by `Scheduler.FIFO` or `Scheduler.EDF`;
  `push` raises `HeapFullError` when it is full.
- `codexion.arbiter.Arbiter` decides which coder may take its pair of
  `Dongle`s next; `take_both_if_ready` and `lock_pair` work on a pair of
  dongles directly.
- `codexion.timing` offers `now_ms()`, `now_us()` and `precise_sleep`, a sleep
  that stops early when a callback returns true.

## Running the tests

```
pip install ".[test]"
pytest
```