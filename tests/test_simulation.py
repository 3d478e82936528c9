import io

from philo.args import Settings
from philo.clock import now_ms
from philo.simulation import Table, run_simulation


def _lines(out):
    return [line.split(" ", 2) for line in out.getvalue().splitlines()]


def test_announce_formats_timestamp_number_and_message():
    out = io.StringIO()
    table = Table(Settings(3, 800, 100, 100), out)
    table.announce(table.philosophers[2], "is thinking")
    timestamp, number, message = out.getvalue().rstrip("\n").split(" ", 2)
    assert number == "3"
    assert message == "is thinking"
    assert int(timestamp) >= 0


def test_announce_is_silent_after_stop():
    out = io.StringIO()
    table = Table(Settings(2, 800, 100, 100), out)
    table.died = True
    table.announce(table.philosophers[0], "is thinking")
    assert out.getvalue() == ""
    assert table.is_running() is False


def test_fresh_table_is_running_and_forks_are_shared():
    table = Table(Settings(4, 800, 100, 100), io.StringIO())
    assert table.is_running() is True
    diners = table.philosophers
    assert [p.number for p in diners] == [1, 2, 3, 4]
    for index, philosopher in enumerate(diners):
        assert philosopher.right_fork is diners[(index + 1) % 4].left_fork
        assert philosopher.eat_count == 0
        assert philosopher.last_meal == philosopher.start_time


def test_eat_records_a_meal_and_releases_forks():
    out = io.StringIO()
    table = Table(Settings(2, 800, 60, 60), out)
    diner = table.philosophers[0]
    before = now_ms()
    diner.eat()
    assert diner.eat_count == 1
    assert diner.last_meal >= before
    messages = [parts[2] for parts in _lines(out)]
    assert messages == ["has taken a fork", "has taken a fork", "is eating", "is sleeping"]
    for fork in table.forks:
        assert fork.acquire(blocking=False)
        fork.release()


def test_watch_meals_stops_once_everyone_has_eaten():
    table = Table(Settings(3, 800, 100, 100, must_eat=2), io.StringIO())
    for philosopher in table.philosophers:
        philosopher.eat_count = 2
    table.watch_meals()
    assert table.all_ate is True
    assert table.is_running() is False


def test_watch_deaths_reports_starved_philosopher():
    out = io.StringIO()
    table = Table(Settings(3, 800, 100, 100), out)
    table.philosophers[1].last_meal = now_ms() - 10_000
    table.watch_deaths()
    assert table.died is True
    assert _lines(out)[-1][1:] == ["2", "died"]


def test_lone_philosopher_takes_one_fork_and_dies():
    out = io.StringIO()
    table = run_simulation(Settings(1, 200, 60, 60), out)
    lines = _lines(out)
    assert table.died is True
    assert [parts[1:] for parts in lines] == [["1", "has taken a fork"], ["1", "died"]]
    assert int(lines[-1][0]) >= 200


def test_everyone_eats_enough_and_nobody_dies():
    out = io.StringIO()
    settings = Settings(5, 800, 100, 100, must_eat=3)
    table = run_simulation(settings, out)
    lines = _lines(out)
    assert table.all_ate is True
    assert table.died is False
    assert all(parts[2] != "died" for parts in lines)
    for philosopher in table.philosophers:
        assert philosopher.eat_count >= 3
        mine = [int(parts[0]) for parts in lines if parts[1] == str(philosopher.number)]
        assert mine == sorted(mine)
        meals = sum(
            1 for parts in lines if parts[1] == str(philosopher.number) and parts[2] == "is eating"
        )
        assert meals >= 3


def test_starvation_ends_with_single_death_line():
    out = io.StringIO()
    settings = Settings(4, 310, 200, 100)
    table = run_simulation(settings, out)
    lines = _lines(out)
    deaths = [parts for parts in lines if parts[2] == "died"]
    assert table.died is True
    assert len(deaths) == 1
    assert lines[-1] == deaths[0]
    assert int(deaths[0][0]) >= settings.time_to_die