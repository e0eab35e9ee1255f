"""Parsing helpers shared by the CLI commands."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException


def parse_selection(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse ``('size=L', 'color=Green')`` into ``{'size': 'L', 'color': 'Green'}``."""
    selection: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid variant '{pair}'. Expected 'axis=value'.", param_hint="--variant"
            )
        axis, value = pair.split("=", 1)
        axis = axis.strip()
        if axis in selection:
            raise click.BadParameter(
                f"Option '{axis}' chosen more than once.", param_hint="--variant"
            )
        selection[axis] = value.strip()
    return selection


def parse_variant_groups(raw: tuple[str, ...]) -> dict[str, list[str]]:
    """Parse ``('size=S|M|L',)`` into ``{'size': ['S', 'M', 'L']}``."""
    groups: dict[str, list[str]] = {}
    for item in raw:
        if "=" not in item:
            raise click.BadParameter(
                f"Invalid variant group '{item}'. Expected 'axis=value|value'.",
                param_hint="--variants",
            )
        axis, values = item.split("=", 1)
        options = [v.strip() for v in values.split("|") if v.strip()]
        if not options:
            raise click.BadParameter(
                f"Variant group '{axis}' has no values.", param_hint="--variants"
            )
        groups[axis.strip()] = options
    return groups


def fail(exc: DomainException) -> click.ClickException:
    """Turn a domain error into a CLI error with an actionable message."""
    message = str(exc)
    if exc.retryable:
        message += " (temporary problem, please try again)"
    return click.ClickException(message)
