"""Utility for resolving user-typed references to entity IDs."""

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def resolve_reference(
    items: Iterable[T],
    reference: str,
    kind: str,
    get_id: Callable[[T], str] = lambda item: item.id,
    get_name: Callable[[T], str] = lambda item: item.name,
) -> T:
    """Resolve an ID, unique ID prefix or exact name to one entity.

    Matching order: full ID, then case-insensitive exact name, then unique ID
    prefix.

    Args:
        items: Candidate entities
        reference: ID, ID prefix or name typed by the user
        kind: Entity kind used in error messages (e.g. "Customer")

    Returns:
        The matching entity

    Raises:
        ValueError: If nothing matches or the reference is ambiguous
    """
    candidates = list(items)
    reference = reference.strip()
    if not reference:
        raise ValueError(f"{kind} reference is empty")

    for item in candidates:
        if get_id(item) == reference:
            return item

    by_name = [item for item in candidates if get_name(item).lower() == reference.lower()]
    if len(by_name) == 1:
        return by_name[0]
    if len(by_name) > 1:
        raise ValueError(
            f"{kind} name '{reference}' is ambiguous ({len(by_name)} matches); use the ID"
        )

    by_prefix = [item for item in candidates if get_id(item).startswith(reference)]
    if len(by_prefix) == 1:
        return by_prefix[0]
    if len(by_prefix) > 1:
        raise ValueError(f"{kind} ID prefix '{reference}' is ambiguous")

    raise ValueError(f"{kind} '{reference}' not found")
