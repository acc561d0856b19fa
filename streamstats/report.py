import math
from typing import Any, Dict, Mapping, Optional, Union

from rich.console import Console
from rich.table import Table

from .regression import RegressionResult, RunningRegression
from .running_stats import RunningStats


def _fmt(v: Any) -> str:
    if isinstance(v, float):
        if math.isnan(v):
            return "[dim]undefined[/dim]"
        return f"{v:.10g}"
    return str(v)


def summary_table(
    stats: Union[RunningStats, Mapping[str, Any]], title: str = "Descriptive Statistics"
) -> Table:
    """Build a table from a RunningStats or a describe() dict."""
    data: Dict[str, Any] = stats.to_dict() if isinstance(stats, RunningStats) else dict(stats)
    t = Table(title=title)
    t.add_column("statistic")
    t.add_column("value", justify="right")
    for name, value in data.items():
        t.add_row(name.replace("_", " "), _fmt(value))
    return t


def regression_table(
    reg: Union[RunningRegression, RegressionResult], title: str = "Linear Regression"
) -> Table:
    result = reg.to_result() if isinstance(reg, RunningRegression) else reg
    t = Table(title=title)
    t.add_column("statistic")
    t.add_column("value", justify="right")
    for name, value in result._asdict().items():
        t.add_row(name.replace("_", " "), _fmt(value))
    return t


def print_summary(
    stats: Union[RunningStats, Mapping[str, Any]], console: Optional[Console] = None
) -> None:
    (console or Console()).print(summary_table(stats))


def print_regression(
    reg: Union[RunningRegression, RegressionResult], console: Optional[Console] = None
) -> None:
    (console or Console()).print(regression_table(reg))
