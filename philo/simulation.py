"""Threaded dining philosophers simulation."""

from __future__ import annotations

import threading
import time
from typing import TextIO

from philo.args import Settings
from philo.clock import now_ms, precise_sleep

TAKEN_FORK = "has taken a fork"
EATING = "is eating"
SLEEPING = "is sleeping"
THINKING = "is thinking"
DIED = "died"

# Monitors poll continuously; a tiny pause keeps them from starving the
# philosopher threads of the interpreter lock.
_MONITOR_PAUSE = 0.0001


class Philosopher:
    """One diner seated at a table, sharing a fork with each neighbour."""

    def __init__(self, table: Table, index: int) -> None:
        count = table.settings.philosophers
        self.table = table
        self.index = index
        self.left_fork = table.forks[index]
        self.right_fork = table.forks[(index + 1) % count]
        self.start_time = now_ms()
        self.last_meal = self.start_time
        self.eat_count = 0
        self.thread: threading.Thread | None = None

    @property
    def number(self) -> int:
        """The one-based seat number used in output."""
        return self.index + 1

    def run(self) -> None:
        """Alternate eating, sleeping and thinking until the table stops."""
        settings = self.table.settings
        count = settings.philosophers
        if self.index % 2 == 0:
            self.table.announce(self, THINKING)
            if self.index == 0 and count % 2 == 1 and count >= 3:
                precise_sleep(2 * settings.time_to_eat)
        while self.table.is_running():
            self.eat()
            precise_sleep(settings.time_to_sleep)
            self.table.announce(self, THINKING)
            if count % 2 == 1:
                precise_sleep(max(0, 2 * settings.time_to_eat - settings.time_to_sleep))

    def run_alone(self) -> None:
        """Behaviour of a lone diner: take the only fork and wait to starve."""
        with self.left_fork:
            self.table.announce(self, TAKEN_FORK)
            precise_sleep(self.table.settings.time_to_die)

    def eat(self) -> None:
        """Take both forks, eat one meal, put the forks down and start sleeping."""
        table = self.table
        if self.index % 2 == 0:
            first, second = self.right_fork, self.left_fork
        else:
            first, second = self.left_fork, self.right_fork
        with first:
            table.announce(self, TAKEN_FORK)
            with second:
                table.announce(self, TAKEN_FORK)
                with table.last_meal_lock:
                    self.last_meal = now_ms()
                table.announce(self, EATING)
                precise_sleep(table.settings.time_to_eat)
                with table.eat_count_lock:
                    self.eat_count += 1
        table.announce(self, SLEEPING)


class Table:
    """The shared state of one simulation: forks, diners and stop flags."""

    def __init__(self, settings: Settings, out: TextIO) -> None:
        self.settings = settings
        self.out = out
        self.died = False
        self.all_ate = False
        self.print_lock = threading.Lock()
        self.eat_count_lock = threading.Lock()
        self.last_meal_lock = threading.Lock()
        self.forks = [threading.Lock() for _ in range(settings.philosophers)]
        self.philosophers = [Philosopher(self, index) for index in range(settings.philosophers)]

    def announce(self, philosopher: Philosopher, message: str) -> None:
        """Print a timestamped status line unless the simulation has stopped."""
        with self.print_lock:
            if self.died or self.all_ate:
                return
            timestamp = now_ms() - philosopher.start_time
            self.out.write(f"{timestamp} {philosopher.number} {message}\n")

    def is_running(self) -> bool:
        """Return True while nobody has died and not everyone has eaten enough."""
        with self.print_lock:
            return not self.died and not self.all_ate

    def watch_deaths(self) -> None:
        """Poll every diner and report the first one who starved."""
        limit = self.settings.time_to_die
        while self.is_running():
            for philosopher in self.philosophers:
                with self.last_meal_lock:
                    if now_ms() - philosopher.last_meal > limit:
                        with self.print_lock:
                            self.died = True
                            timestamp = now_ms() - philosopher.start_time
                            self.out.write(f"{timestamp} {philosopher.number} {DIED}\n")
                        return
            time.sleep(_MONITOR_PAUSE)

    def _everyone_fed(self) -> bool:
        must_eat = self.settings.must_eat
        if must_eat is None:
            return False
        for philosopher in self.philosophers:
            with self.eat_count_lock:
                if philosopher.eat_count < must_eat:
                    return False
        return True

    def watch_meals(self) -> None:
        """Stop the simulation once every diner has eaten the required meals."""
        while True:
            with self.print_lock:
                if self.died:
                    return
            if self._everyone_fed():
                with self.print_lock:
                    self.all_ate = True
                return
            time.sleep(_MONITOR_PAUSE)

    def _start_order(self) -> list[Philosopher]:
        diners = self.philosophers
        count = len(diners)
        order = diners[1::2] + diners[0 : count - 1 : 2]
        if count % 2 == 1:
            order.append(diners[-1])
        return order

    def run(self) -> None:
        """Start all threads and wait until the simulation has ended."""
        threads: list[threading.Thread] = []
        if len(self.philosophers) == 1:
            lone = self.philosophers[0]
            lone.thread = threading.Thread(target=lone.run_alone, name="philosopher-1")
            lone.thread.start()
            threads.append(lone.thread)
        else:
            for philosopher in self._start_order():
                philosopher.thread = threading.Thread(
                    target=philosopher.run, name=f"philosopher-{philosopher.number}"
                )
                philosopher.thread.start()
                threads.append(philosopher.thread)
        monitors = [threading.Thread(target=self.watch_deaths, name="death-watch")]
        if self.settings.must_eat is not None:
            monitors.append(threading.Thread(target=self.watch_meals, name="meal-watch"))
        for monitor in monitors:
            monitor.start()
        for thread in threads + monitors:
            thread.join()


def run_simulation(settings: Settings, out: TextIO) -> Table:
    """Run a complete simulation, writing its log to ``out``; return the table."""
    table = Table(settings, out)
    table.run()
    return table