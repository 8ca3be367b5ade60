"""Single-primary bookkeeping for child collections.

Collections are lists of mutable mappings (draft records); ``flag`` names the
boolean that marks the primary member, e.g. ``is_primary_address``.
"""

from typing import Any, MutableMapping, Sequence

from logibase.domain.errors import ValidationError


def set_primary(collection: Sequence[MutableMapping[str, Any]], index: int, flag: str) -> None:
    """Make the member at ``index`` the only primary one.

    Every member's flag is rewritten, so exactly one member ends up primary.

    Raises:
        ValidationError: If ``index`` is outside the collection
    """
    if not 0 <= index < len(collection):
        raise ValidationError(f"No member at position {index} (collection has {len(collection)})")
    for position, member in enumerate(collection):
        member[flag] = position == index


def reassign_after_removal(
    collection: Sequence[MutableMapping[str, Any]], removed_was_primary: bool, flag: str
) -> bool:
    """Hand the primary flag to the first survivor after a removal.

    ``collection`` is the list as it is after the removal. When the removed
    member was primary, the member now at index 0 becomes primary. An empty
    collection is left without a primary.

    Returns:
        True if a member was promoted
    """
    if not removed_was_primary or not collection:
        return False
    collection[0][flag] = True
    return True

