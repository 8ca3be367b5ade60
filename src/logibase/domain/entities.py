"""Domain model entities for logibase.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; the SQLAlchemy
models stay behind the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional


class PartnerKind(str, Enum):
    """Aggregate root types that share the address/contact layout."""

    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    VENDOR = "vendor"


class StatusActive(str, Enum):
    ACTIVE = "ACTIVE"
    NOACTIVE = "NOACTIVE"
    SUSPENDED = "SUSPENDED"


class PartnerType(str, Enum):
    """Supplier and vendor classification."""

    LOGISTIC = "LOGISTIC"
    SERVICES = "SERVICES"


class AddressType(str, Enum):
    HEAD_OFFICE = "HEAD_OFFICE"
    BRANCH = "BRANCH"
    WAREHOUSE = "WAREHOUSE"
    BILLING = "BILLING"
    SHIPPING = "SHIPPING"


class ContactType(str, Enum):
    PRIMARY = "PRIMARY"
    BILLING = "BILLING"
    SHIPPING = "SHIPPING"
    EMERGENCY = "EMERGENCY"
    TECHNICAL = "TECHNICAL"


class BankingBank(str, Enum):
    BCA = "BCA"
    BNI = "BNI"
    BRI = "BRI"
    MANDIRI = "MANDIRI"
    BNI_SYARIAH = "BNI_SYARIAH"
    DANAMON = "DANAMON"


@dataclass(frozen=True)
class Country:
    """Country lookup entry (ISO 3166-1 alpha-2 code)."""

    code: str
    name: str


@dataclass(frozen=True)
class Province:
    """Indonesian province."""

    code: str
    name: str


@dataclass(frozen=True)
class Regency:
    """Indonesian regency or city, child of a province."""

    code: str
    name: str
    province_code: str


@dataclass(frozen=True)
class District:
    """Indonesian district, child of a regency."""

    code: str
    name: str
    regency_code: str


@dataclass(frozen=True)
class Address:
    """Address of a customer, supplier or vendor.

    The ``*_name`` fields are resolved from the region lookup tables when the
    address is read back; they are None when the code is unset or unknown.
    """

    id: int
    partner_id: int
    address_type: str
    address_line1: str
    address_line2: Optional[str]
    zipcode: Optional[str]
    is_primary_address: bool
    country_code: str
    province_code: Optional[str] = None
    regency_code: Optional[str] = None
    district_code: Optional[str] = None
    country_name: Optional[str] = None
    province_name: Optional[str] = None
    regency_name: Optional[str] = None
    district_name: Optional[str] = None


@dataclass(frozen=True)
class Contact:
    """Contact person of a customer, supplier or vendor."""

    id: int
    partner_id: int
    contact_type: str
    name: str
    phone_number: str
    email: Optional[str]
    is_primary_contact: bool
    fax_number: Optional[str] = None


@dataclass(frozen=True)
class Banking:
    """Vendor bank account."""

    id: int
    partner_id: int
    banking_number: str
    banking_name: str
    banking_bank: str
    banking_branch: Optional[str]
    is_primary_banking_number: bool


Child = Address | Contact | Banking


@dataclass(frozen=True)
class Partner:
    """Aggregate root record shared by customers, suppliers and vendors.

    Fields that a kind does not use (for example ``payment_terms`` on a
    customer) stay None.
    """

    id: int
    kind: PartnerKind
    code: str
    name: str
    status: str
    created_at: datetime
    updated_at: datetime
    partner_type: Optional[str] = None
    notes: Optional[str] = None
    tax_number: Optional[str] = None
    tax_name: Optional[str] = None
    tax_address: Optional[str] = None
    tax_date: Optional[date] = None
    active_date: Optional[date] = None
    payment_terms: Optional[int] = None
    pic_name: Optional[str] = None
    pic_position: Optional[str] = None
    created_by: Optional[str] = None


@dataclass(frozen=True)
class PartnerAggregate:
    """Root record plus all of its child collections."""

    partner: Partner
    addresses: tuple[Address, ...] = ()
    contacts: tuple[Contact, ...] = ()
    bankings: tuple[Banking, ...] = ()

    def collection(self, name: str) -> tuple:
        """Return the child collection called ``name``."""
        return getattr(self, name)


@dataclass(frozen=True)
class PartnerPage:
    """One page of aggregate roots."""

    items: list[Partner] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0
