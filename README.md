# philo

A simulation of the dining philosophers problem. Philosophers sit around a
table with one fork between each pair of neighbours. Each one runs in its own
thread and repeats the same cycle: take two forks, eat, sleep, think. A
watcher thread reports the first philosopher who goes longer than
`time_to_die` milliseconds without starting a meal. If a meal quota is given,
a second watcher stops the simulation once every philosopher has eaten at
least that many times.

## Installation

```
pip install .
```

## Usage

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [number_of_times_each_philosopher_must_eat]
```

`python -m philo.cli` with the same arguments does the same thing.

All times are in milliseconds. The arguments must follow these rules:

- each argument is a positive whole number written only with the digits 0-9,
  at most 10 characters long and no greater than 2147483647;
- there can be at most 200 philosophers;
- `time_to_die`, `time_to_eat` and `time_to_sleep` must each be at least 60.

If the arguments break these rules, or there are not four or five of them,
`philo` prints the expected format on standard output and exits without
running anything. The exit status is 0 in every case.

Each event is printed on standard output as one line of the form
`<milliseconds since start> <philosopher number> <action>`, for instance
`200 3 is eating`. Philosophers are numbered from 1. The actions are
`has taken a fork`, `is eating`, `is sleeping`, `is thinking` and `died`.
Nothing more is printed after a philosopher has died or after every
philosopher has eaten the required number of times. A single philosopher
takes the only fork and waits until it starves.

## Library use

```python
import io

from philo.args import parse_settings
from philo.simulation import run_simulation

settings = parse_settings(["4", "410", "200", "200", "3"])
out = io.StringIO()
table = run_simulation(settings, out)
print(out.getvalue())
print(table.died, table.all_ate)
print([p.eat_count for p in table.philosophers])
```

- `philo.args.parse_settings(args)` takes the four or five argument strings
  and returns a frozen `Settings` dataclass (`philosophers`, `time_to_die`,
  `time_to_eat`, `time_to_sleep`, `must_eat`, the last being `None` when no
  quota is given). It raises `ArgumentError`, a subclass of `ValueError`,
  when the arguments are invalid. `parse_number` and `is_digits` are the
  helpers it uses.
- `philo.simulation.run_simulation(settings, out)` builds a `Table`, runs it
  to the end, writing the event log to the text stream `out`, and returns the
  table.
- `Table` holds the forks, the `Philosopher` objects and the `died` and
  `all_ate` flags; `Table.run()` starts the philosopher and watcher threads
  and waits for them all. Each `Philosopher` records its `last_meal` time and
  its `eat_count`.
- `philo.clock` provides `now_ms()` and `precise_sleep(ms)`, the millisecond
  clock and sleep the simulation uses.

## Running the tests

```
pip install .[test]
pytest
```