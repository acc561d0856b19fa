from rich.console import Console

from streamstats.batch import describe
from streamstats.regression import RunningRegression, linear_regression
from streamstats.report import print_regression, print_summary, summary_table
from streamstats.running_stats import RunningStats


def render(fn, obj) -> str:
    console = Console(record=True, width=100)
    fn(obj, console=console)
    return console.export_text()


def test_summary_from_running_stats():
    d = RunningStats()
    d.append_array([2.3, 0.4])
    out = render(print_summary, d)
    assert "Descriptive Statistics" in out
    assert "population variance" in out
    assert "0.9025" in out
    # sample kurtosis is undefined for two values
    assert "undefined" in out


def test_summary_from_describe_dict():
    table = summary_table(describe([1.0, 2.0, 3.0, 4.0, 5.0]))
    assert table.row_count == 13


def test_regression_table():
    r = RunningRegression()
    r.append_array([0.0, 1.0, 2.0], [1.0, 3.0, 5.0])
    out = render(print_regression, r)
    assert "slope" in out
    assert "intercept std err" in out

    out = render(print_regression, linear_regression([0.0, 1.0], [1.0, 3.0]))
    assert "undefined" in out
