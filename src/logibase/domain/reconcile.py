"""Upsert-by-id reconciliation of child collections.

A submitted child that carries an ``id`` is a sparse patch of the stored
record with that id; one without an ``id`` is a new record and must carry
every field required for creation. Children are applied one by one in
submission order and nothing is ever deleted here. Callers run this inside a
database transaction so that any error discards the whole update.
"""

from typing import Any, Mapping, Sequence

from logibase.database.base import Database
from logibase.domain.entities import Address, PartnerKind
from logibase.domain.errors import NotFoundError, ValidationError, child_not_found
from logibase.domain.regions import normalize_regions
from logibase.domain.schemas import ADDRESSES, INDONESIA, REGION_FIELDS, Collection


def collection_entries(collection: Collection, submitted: Any) -> list[dict[str, Any]]:
    """Check that a submitted collection is a list of objects.

    Returns:
        A copy of each entry, in submission order

    Raises:
        ValidationError: If ``submitted`` is not a list or tuple of objects
    """
    if isinstance(submitted, (str, bytes)) or not isinstance(submitted, Sequence):
        raise ValidationError(f"'{collection.name}' must be a list")

    entries = []
    for entry in submitted:
        if not isinstance(entry, Mapping):
            raise ValidationError(f"Each entry of '{collection.name}' must be an object")
        entries.append(dict(entry))
    return entries


def reconcile_collection(
    db: Database,
    kind: PartnerKind,
    collection: Collection,
    partner_id: int,
    submitted: Sequence[Mapping[str, Any]],
) -> None:
    """Apply submitted children of one collection to an aggregate.

    Args:
        db: Database instance (inside an open transaction)
        kind: Aggregate type
        collection: Schemas of the collection
        partner_id: ID of the aggregate root
        submitted: Children in submission order

    Raises:
        ValidationError: If the submission is not a list of objects, or an id
            is not an integer
        pydantic.ValidationError: If a child fails its schema
        NotFoundError: If a patched id does not belong to this aggregate
    """
    for data in collection_entries(collection, submitted):
        child_id = data.pop("id", None)
        if child_id is None:
            insert_child(db, kind, collection, partner_id, data)
        else:
            patch_child(db, kind, collection, partner_id, _as_id(collection, child_id), data)


def insert_child(
    db: Database, kind: PartnerKind, collection: Collection, partner_id: int, data: Mapping[str, Any]
) -> int:
    """Validate and insert a new child linked to ``partner_id``.

    Returns:
        ID of the new child
    """
    record = collection.create.model_validate(data).model_dump()
    if collection.name == ADDRESSES.name:
        record = normalize_regions(record, record["country_code"])
    return db.create_child(kind, collection.name, partner_id, record)


def patch_child(
    db: Database,
    kind: PartnerKind,
    collection: Collection,
    partner_id: int,
    child_id: int,
    data: Mapping[str, Any],
) -> None:
    """Update only the fields present in ``data`` on an existing child."""
    existing = db.get_child(kind, collection.name, child_id)
    if existing is None or existing.partner_id != partner_id:
        raise NotFoundError(child_not_found(collection.label, child_id, kind.value, partner_id))

    patch = collection.patch.model_validate(data).model_dump(exclude_unset=True)

    if collection.name == ADDRESSES.name:
        patch = _normalize_address_patch(patch, existing)

    if patch:
        db.update_child(kind, collection.name, child_id, patch)


def _normalize_address_patch(patch: dict[str, Any], existing: Address) -> dict[str, Any]:
    if "country_code" in patch:
        return normalize_regions(patch, patch["country_code"])
    # Region codes patched on their own still follow the stored country.
    if existing.country_code != INDONESIA and any(name in patch for name in REGION_FIELDS):
        return normalize_regions(patch, existing.country_code)
    return patch


def _as_id(collection: Collection, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Invalid {collection.label} id: {value!r}")
    return value
