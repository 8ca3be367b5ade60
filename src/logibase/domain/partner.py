"""Customer, supplier and vendor aggregate service.

A partner aggregate is a root record (customer, supplier or vendor) plus its
addresses, contacts and, for vendors, bank accounts. Creation and "update
all" both run as one database transaction and return the aggregate as read
back from storage.
"""

import logging
import math
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from pydantic import ValidationError as SchemaError

from logibase.database.base import Database, DuplicateCodeError
from logibase.domain.code_number import next_code
from logibase.domain.entities import (
    PartnerAggregate,
    PartnerKind,
    PartnerPage,
    StatusActive,
)
from logibase.domain.errors import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    child_not_found,
    duplicate_code,
    invalid_choice,
    not_authenticated,
    operation_failed,
    partner_not_found,
)
from logibase.domain.primary import reassign_after_removal, set_primary
from logibase.domain.reconcile import collection_entries, insert_child, reconcile_collection
from logibase.domain.schemas import ROOT_IGNORED, KindSpec, describe, kind_spec

logger = logging.getLogger(__name__)

COLLECTION_NAMES = ("addresses", "contacts", "bankings")


class PartnerService:
    """Service for managing customer, supplier and vendor aggregates."""

    def __init__(self, db: Database):
        """Initialize partner service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_aggregate(
        self,
        kind: PartnerKind | str,
        payload: Mapping[str, Any],
        created_by: Optional[str],
    ) -> PartnerAggregate:
        """Create a root record and its initial children atomically.

        The business code is generated from the kind's prefix; any ``code``
        in the payload is ignored.

        Args:
            kind: customer, supplier or vendor
            payload: Root fields plus optional ``addresses``, ``contacts`` and
                (vendor only) ``bankings`` lists
            created_by: Identity of the caller, stored for audit

        Returns:
            The persisted aggregate

        Raises:
            UnauthorizedError: If ``created_by`` is empty
            ValidationError: If a field is invalid or a child is incomplete
            ConflictError: If the generated code is already taken
            InternalError: On any unexpected failure
        """
        spec = kind_spec(kind)
        with self._guard("create", spec.kind):
            if not created_by:
                raise UnauthorizedError(not_authenticated())

            root_data, children = self._split_payload(spec, payload)
            root = spec.create.model_validate(root_data).model_dump()

            with self.db.transaction():
                code = next_code(spec.prefix, self.db.get_last_code(spec.kind, spec.prefix))
                if self.db.get_partner_by_code(spec.kind, code) is not None:
                    raise ConflictError(duplicate_code(spec.kind.value, code))

                partner_id = self.db.create_partner(spec.kind, code, root, created_by)
                for name, submitted in children.items():
                    collection = spec.collection(name)
                    for data in collection_entries(collection, submitted):
                        data.pop("id", None)
                        insert_child(self.db, spec.kind, collection, partner_id, data)

            aggregate = self._load(spec, partner_id)

        logger.info("Created %s %s (ID: %s) by %s", spec.kind.value, code, partner_id, created_by)
        return aggregate

    def update_aggregate(
        self, kind: PartnerKind | str, aggregate_id: int, patch: Mapping[str, Any]
    ) -> PartnerAggregate:
        """Patch a root record and reconcile its child collections atomically.

        Root fields present in ``patch`` are written; absent ones are left
        alone. Each child list is reconciled by id: children with an ``id``
        are patched, children without one are inserted. Nothing is deleted.
        Any failure rolls back the whole update.

        Args:
            kind: customer, supplier or vendor
            aggregate_id: ID of the root record
            patch: Root fields and child lists to apply

        Returns:
            The aggregate as stored after the update

        Raises:
            NotFoundError: If the root, or a patched child, does not exist
            ValidationError: If a field is invalid or a new child is incomplete
            InternalError: On any unexpected failure
        """
        spec = kind_spec(kind)
        with self._guard("update", spec.kind):
            with self.db.transaction():
                if self.db.get_partner(spec.kind, aggregate_id) is None:
                    raise NotFoundError(partner_not_found(spec.kind.value, aggregate_id))

                root_data, children = self._split_payload(spec, patch)
                root = spec.patch.model_validate(root_data).model_dump(exclude_unset=True)
                if root:
                    self.db.update_partner(spec.kind, aggregate_id, root)

                for name, submitted in children.items():
                    reconcile_collection(
                        self.db, spec.kind, spec.collection(name), aggregate_id, submitted
                    )

            aggregate = self._load(spec, aggregate_id)

        logger.info("Updated %s %s (ID: %s)", spec.kind.value, aggregate.partner.code, aggregate_id)
        return aggregate

    def get_aggregate(self, kind: PartnerKind | str, aggregate_id: int) -> PartnerAggregate:
        """Get an aggregate with all children and region names resolved.

        Raises:
            NotFoundError: If the root does not exist
        """
        spec = kind_spec(kind)
        with self._guard("load", spec.kind):
            return self._load(spec, aggregate_id)

    def list_aggregates(
        self,
        kind: PartnerKind | str,
        search: Optional[str] = None,
        status: Optional[str] = None,
        partner_type: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> PartnerPage:
        """List root records, newest first.

        Args:
            kind: customer, supplier or vendor
            search: Case-insensitive match on name or code
            status: Only records with this status
            partner_type: Only records of this type
            page: 1-based page number
            limit: Page size

        Returns:
            One page of root records with paging totals
        """
        spec = kind_spec(kind)
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive")
        if status is not None:
            try:
                status = StatusActive(status).value
            except ValueError as e:
                raise ValidationError(
                    invalid_choice("status", status, [s.value for s in StatusActive])
                ) from e

        with self._guard("list", spec.kind):
            items, total = self.db.list_partners(
                spec.kind,
                search=search or None,
                status=status,
                partner_type=partner_type,
                offset=(page - 1) * limit,
                limit=limit,
            )
        return PartnerPage(
            items=items,
            total=total,
            page=page,
            total_pages=math.ceil(total / limit),
        )

    def delete_aggregate(self, kind: PartnerKind | str, aggregate_id: int) -> None:
        """Delete a root record together with all of its children.

        Raises:
            NotFoundError: If the root does not exist
        """
        spec = kind_spec(kind)
        with self._guard("delete", spec.kind):
            with self.db.transaction():
                partner = self.db.get_partner(spec.kind, aggregate_id)
                if partner is None:
                    raise NotFoundError(partner_not_found(spec.kind.value, aggregate_id))
                self.db.delete_partner(spec.kind, aggregate_id)

        logger.info("Deleted %s %s (ID: %s)", spec.kind.value, partner.code, aggregate_id)

    def set_primary_child(
        self, kind: PartnerKind | str, aggregate_id: int, collection: str, child_id: int
    ) -> PartnerAggregate:
        """Make one child the only primary member of its collection.

        Raises:
            NotFoundError: If the aggregate or the child does not exist
        """
        spec = kind_spec(kind)
        child_spec = spec.collection(collection)
        flag = child_spec.primary_flag
        aggregate = self.get_aggregate(spec.kind, aggregate_id)

        members = [
            {"id": child.id, flag: getattr(child, flag)}
            for child in aggregate.collection(child_spec.name)
        ]
        index = _position(members, child_id)
        if index is None:
            raise NotFoundError(
                child_not_found(child_spec.label, child_id, spec.kind.value, aggregate_id)
            )

        set_primary(members, index, flag)
        return self.update_aggregate(spec.kind, aggregate_id, {child_spec.name: members})

    def remove_child(
        self, kind: PartnerKind | str, aggregate_id: int, collection: str, child_id: int
    ) -> PartnerAggregate:
        """Delete one child; if it was primary, the first survivor takes over.

        Survivors are ordered by creation. Removing the last member leaves the
        collection empty; preventing that is up to the caller.

        Raises:
            NotFoundError: If the aggregate or the child does not exist
        """
        spec = kind_spec(kind)
        child_spec = spec.collection(collection)
        flag = child_spec.primary_flag

        with self._guard("update", spec.kind):
            with self.db.transaction():
                if self.db.get_partner(spec.kind, aggregate_id) is None:
                    raise NotFoundError(partner_not_found(spec.kind.value, aggregate_id))

                members = [
                    {"id": child.id, flag: getattr(child, flag)}
                    for child in self.db.list_children(spec.kind, child_spec.name, aggregate_id)
                ]
                index = _position(members, child_id)
                if index is None:
                    raise NotFoundError(
                        child_not_found(child_spec.label, child_id, spec.kind.value, aggregate_id)
                    )

                removed = members.pop(index)
                self.db.delete_child(spec.kind, child_spec.name, child_id)
                if reassign_after_removal(members, removed[flag], flag):
                    self.db.update_child(spec.kind, child_spec.name, members[0]["id"], {flag: True})

            aggregate = self._load(spec, aggregate_id)

        logger.info(
            "Removed %s %s from %s %s", child_spec.label, child_id, spec.kind.value, aggregate_id
        )
        return aggregate

    def _load(self, spec: KindSpec, aggregate_id: int) -> PartnerAggregate:
        aggregate = self.db.get_aggregate(spec.kind, aggregate_id)
        if aggregate is None:
            raise NotFoundError(partner_not_found(spec.kind.value, aggregate_id))
        return aggregate

    def _split_payload(
        self, spec: KindSpec, payload: Mapping[str, Any]
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Separate root fields from child lists.

        Child lists that are None or empty are dropped; a list the kind does
        not have is a ValidationError. Root ``id`` and ``code`` are dropped.
        """
        if not isinstance(payload, Mapping):
            raise ValidationError(f"{spec.kind.value.capitalize()} data must be an object")

        root: dict[str, Any] = {}
        children: dict[str, Any] = {}
        for key, value in payload.items():
            if key in COLLECTION_NAMES:
                spec.collection(key)
                if value:
                    children[key] = value
            elif key not in ROOT_IGNORED:
                root[key] = value
        return root, children

    @contextmanager
    def _guard(self, action: str, kind: PartnerKind) -> Iterator[None]:
        """Pass domain errors through.

        Schema failures become ValidationError; anything else is logged and
        becomes InternalError.
        """
        try:
            yield
        except DomainError:
            raise
        except SchemaError as e:
            raise ValidationError(describe(e)) from e
        except DuplicateCodeError as e:
            raise ConflictError(duplicate_code(kind.value)) from e
        except Exception as e:
            logger.exception("Unexpected error while trying to %s %s", action, kind.value)
            raise InternalError(operation_failed(action, kind.value)) from e


def _position(members: list[dict[str, Any]], child_id: int) -> Optional[int]:
    for index, member in enumerate(members):
        if member["id"] == child_id:
            return index
    return None
