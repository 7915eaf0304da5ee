"""Output formatting utilities."""

from decimal import Decimal
from typing import Sequence

from pingcheck.models import Classification, Condition, Target


def fmt_num(value: float) -> str:
    """Render the shortest round-trip form of a number, without an exponent.

    Trailing zeros and a trailing "." are dropped, so 1.0 becomes "1" and
    4e-07 becomes "0.0000004".
    """
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def u(value: float | None) -> str:
    """Format an optional value.

    The Nagios Plugin Developer Guidelines require that nonexistent values
    are displayed as the single letter "U".
    """
    if value is None:
        return "U"
    return fmt_num(value)


def best(host: str, addr: str) -> str:
    """Show host/addr for names, just addr for numeric targets."""
    if host == addr:
        return addr
    return f"{host}/{addr}"


def perfdata(targets: Sequence[Target], times: Sequence[float | None], warn: float, crit: float) -> str:
    """Performance data in Nagios format, without the leading "|"."""
    return "".join(
        f" '{target.address}'={u(value)}s;{fmt_num(warn)};{fmt_num(crit)};0"
        for target, value in zip(targets, times)
    )


def render(
    targets: Sequence[Target],
    times: Sequence[float | None],
    classification: Classification,
    warn: float,
    crit: float,
    warnings: Sequence[str] = (),
) -> str:
    """Build the plugin message that follows "<name>: <STATUS> - "."""
    if classification.condition is Condition.NO_TARGETS:
        output = "no targets found"
    elif classification.condition is Condition.NO_DATA:
        output = f"no data |{perfdata(targets, times, warn, crit)}"
    else:
        target = targets[classification.index]
        output = "best rtt {:.0f} ms (for {}) |{}".format(
            classification.best * 1e3,
            best(target.host, str(target.address)),
            perfdata(targets, times, warn, crit),
        )

    for warning in warnings:
        output += f"\nwarning: {warning}"
    return output
