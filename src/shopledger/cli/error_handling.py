"""CLI error handling helpers."""

from typing import Callable, Iterable, TypeVar

import click

from shopledger.domain.errors import DomainError
from shopledger.utils.resolver import resolve_reference

T = TypeVar("T")


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def resolve_or_exit(
    ctx: click.Context,
    items: Iterable[T],
    reference: str,
    kind: str,
    get_name: Callable[[T], str] = lambda item: item.name,
) -> T:
    """Resolve an entity reference, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_reference(items, reference, kind, get_name=get_name)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
