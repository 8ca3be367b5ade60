"""Abstract database interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, Optional

# Entities are only needed for annotations; a runtime import would loop back
# through domain/__init__.py.
if TYPE_CHECKING:
    from logibase.domain.entities import (
        Child,
        Country,
        District,
        Partner,
        PartnerAggregate,
        PartnerKind,
        Province,
        Regency,
    )


class StorageError(RuntimeError):
    """Storage failure raised by Database implementations."""


class DuplicateCodeError(StorageError):
    """The store rejected a root record because its code is taken."""


class TransactionTimeoutError(StorageError):
    """A transaction ran past its timeout and was rolled back."""


class Database(ABC):
    """Abstract database interface for logibase."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self, timeout: Optional[float] = None) -> AbstractContextManager[None]:
        """Open an atomic unit of work.

        The outermost block commits on success and rolls back if the block
        raises; nested blocks join the outer one. Write methods called inside
        the block are only flushed, not committed.

        Args:
            timeout: Seconds the unit may take before it is rolled back at
                commit time with TransactionTimeoutError. None uses the
                database default.
        """
        pass

    # Region operations
    @abstractmethod
    def upsert_regions(self, level: str, rows: list[dict[str, str]]) -> None:
        """Insert or update lookup rows keyed by code.

        Args:
            level: countries, provinces, regencies or districts
            rows: Column dicts for that level
        """
        pass

    @abstractmethod
    def list_countries(self) -> list[Country]:
        """List all countries."""
        pass

    @abstractmethod
    def list_provinces(self) -> list[Province]:
        """List all provinces."""
        pass

    @abstractmethod
    def list_regencies(self, province_code: str) -> list[Regency]:
        """List regencies of a province."""
        pass

    @abstractmethod
    def list_districts(self, regency_code: str) -> list[District]:
        """List districts of a regency."""
        pass

    # Aggregate root operations
    @abstractmethod
    def create_partner(
        self, kind: PartnerKind, code: str, fields: dict[str, Any], created_by: str
    ) -> int:
        """Create a root record. Returns its ID."""
        pass

    @abstractmethod
    def get_partner(self, kind: PartnerKind, partner_id: int) -> Optional[Partner]:
        """Get root record by ID."""
        pass

    @abstractmethod
    def get_partner_by_code(self, kind: PartnerKind, code: str) -> Optional[Partner]:
        """Get root record by business code."""
        pass

    @abstractmethod
    def get_last_code(self, kind: PartnerKind, prefix: str) -> Optional[str]:
        """Get the highest code starting with ``prefix``."""
        pass

    @abstractmethod
    def update_partner(self, kind: PartnerKind, partner_id: int, fields: dict[str, Any]) -> None:
        """Write the given fields of a root record."""
        pass

    @abstractmethod
    def delete_partner(self, kind: PartnerKind, partner_id: int) -> None:
        """Delete a root record and all of its children."""
        pass

    @abstractmethod
    def list_partners(
        self,
        kind: PartnerKind,
        search: Optional[str] = None,
        status: Optional[str] = None,
        partner_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Partner], int]:
        """List root records, newest first.

        Returns:
            The requested slice and the total number of matching records
        """
        pass

    @abstractmethod
    def get_aggregate(self, kind: PartnerKind, partner_id: int) -> Optional[PartnerAggregate]:
        """Get root record with all children and region names resolved."""
        pass

    # Child operations
    @abstractmethod
    def create_child(
        self, kind: PartnerKind, collection: str, partner_id: int, fields: dict[str, Any]
    ) -> int:
        """Create a child record linked to ``partner_id``. Returns its ID."""
        pass

    @abstractmethod
    def get_child(self, kind: PartnerKind, collection: str, child_id: int) -> Optional[Child]:
        """Get child record by ID."""
        pass

    @abstractmethod
    def update_child(
        self, kind: PartnerKind, collection: str, child_id: int, fields: dict[str, Any]
    ) -> None:
        """Write the given fields of a child record."""
        pass

    @abstractmethod
    def delete_child(self, kind: PartnerKind, collection: str, child_id: int) -> None:
        """Delete a child record."""
        pass

    @abstractmethod
    def list_children(self, kind: PartnerKind, collection: str, partner_id: int) -> list[Child]:
        """List children of one collection in creation order."""
        pass
