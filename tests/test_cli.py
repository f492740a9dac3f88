import re

import pytest

from codexion.cli import main


def _lines(text):
    return [line for line in text.splitlines() if line.strip()]


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["2", "800", "20", "20", "20", "2", "0"],
        ["2", "800", "20", "20", "20", "2", "0", "fifo", "extra"],
    ],
)
def test_wrong_argument_count_prints_usage(argv, capsys):
    status = main(argv)
    out = capsys.readouterr().out
    assert status == 0
    assert "Fix the input: The input is not as desired!" in out
    assert "n_coders t_burnout t_compile" in out


@pytest.mark.parametrize(
    "bad_index, bad_value",
    [(0, "-3"), (1, "abc"), (2, "12x"), (3, "99999999999"), (4, "3000000000")],
)
def test_invalid_number_fails(bad_index, bad_value, capsys):
    argv = ["2", "800", "20", "20", "20", "2", "0", "fifo"]
    argv[bad_index] = bad_value
    status = main(argv)
    out = capsys.readouterr().out
    assert status == 1
    assert "is compiling" not in out
    assert out.strip() != ""


def test_invalid_scheduler_fails(capsys):
    status = main(["2", "800", "20", "20", "20", "2", "0", "round-robin"])
    out = capsys.readouterr().out
    assert status == 1
    assert "Algorithm can be 'edf' or 'fifo' or 'EDF' or 'FIFO'" in out


def test_zero_compiles_fails_validation(capsys):
    status = main(["2", "800", "20", "20", "20", "0", "0", "edf"])
    out = capsys.readouterr().out
    assert status == 1
    assert "input: Should be: Time values > 0, n_compiles >= 0" in out


def test_zero_coders_fails_validation(capsys):
    status = main(["0", "800", "20", "20", "20", "2", "0", "fifo"])
    assert status == 1
    assert "is compiling" not in capsys.readouterr().out


@pytest.mark.parametrize("scheduler", ["fifo", "FIFO", "edf", "EDF"])
def test_full_run_completes_all_compiles(scheduler, capsys):
    status = main(["2", "800", "20", "20", "20", "2", "0", scheduler])
    out = capsys.readouterr().out
    assert status == 0
    assert "burned out" not in out
    compiling = [line for line in _lines(out) if line.endswith("is compiling")]
    ids = sorted(int(line.split()[1]) for line in compiling)
    assert ids == [1, 1, 2, 2]


def test_output_line_format(capsys):
    status = main(["3", "900", "10", "10", "10", "1", "0", "fifo"])
    out = capsys.readouterr().out
    assert status == 0
    pattern = re.compile(
        r"^ *\d+ +\d+ (has taken a dongle|is compiling|is debugging|"
        r"is refactoring|burned out)$"
    )
    lines = _lines(out)
    assert lines
    assert all(pattern.match(line) for line in lines)


def test_elapsed_times_do_not_decrease(capsys):
    main(["2", "800", "10", "10", "10", "2", "0", "edf"])
    out = capsys.readouterr().out
    times = [int(line.split()[0]) for line in _lines(out)]
    assert times == sorted(times)


def test_lone_coder_burns_out(capsys):
    status = main(["1", "50", "20", "20", "20", "3", "0", "fifo"])
    out = capsys.readouterr().out
    lines = _lines(out)
    assert status == 0
    assert lines[0].endswith("1 has taken a dongle")
    assert lines[-1].endswith("1 burned out")
    assert "is compiling" not in out