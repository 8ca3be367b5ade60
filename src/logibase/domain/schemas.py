"""Payload schemas for aggregate roots and their child collections.

Every record type has a ``*Create`` model, which must carry every required
field, and a ``*Patch`` model where every field is optional and only the keys
that were sent get written (``model_dump(exclude_unset=True)``). Blank strings
read as null on both paths.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Annotated, Any, ClassVar, Mapping, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError as SchemaError,
    conint,
    field_validator,
    model_validator,
)

from logibase.domain.entities import (
    AddressType,
    BankingBank,
    ContactType,
    PartnerKind,
    PartnerType,
    StatusActive,
)
from logibase.domain.errors import (
    ValidationError,
    invalid_choice,
    missing_required_field,
    unknown_field,
)
from logibase.utils.date_parser import parse_date

REGION_FIELDS = ("province_code", "regency_code", "district_code")
INDONESIA = "ID"

# "id" and "code" are never written by a payload; the code is assigned once at
# creation.
ROOT_IGNORED = frozenset({"id", "code"})


def _local_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return parse_date(value)
    return value


def _upper(value: str) -> str:
    return value.upper()


LocalDate = Annotated[date, BeforeValidator(_local_date)]
CountryCode = Annotated[str, Field(min_length=2, max_length=2), AfterValidator(_upper)]
PaymentTerms = conint(strict=True, ge=0, le=365)


class Record(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, use_enum_values=True)

    label: ClassVar[str] = "record"

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_null(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Patch(Record):
    """Sparse update: required fields may be left out but not cleared."""

    required: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _keep_required(self) -> "Patch":
        for name in self.required:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"Field '{name}' of {self.label} cannot be empty")
        return self


# Addresses


class AddressCreate(Record):
    label: ClassVar[str] = "address"

    address_type: AddressType
    address_line1: str
    address_line2: Optional[str] = None
    zipcode: Optional[str] = Field(None, max_length=10)
    is_primary_address: StrictBool
    country_code: CountryCode
    province_code: Optional[str] = None
    regency_code: Optional[str] = None
    district_code: Optional[str] = None


class AddressPatch(Patch):
    label: ClassVar[str] = "address"
    required: ClassVar[tuple[str, ...]] = (
        "address_type",
        "address_line1",
        "is_primary_address",
        "country_code",
    )

    address_type: Optional[AddressType] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    zipcode: Optional[str] = Field(None, max_length=10)
    is_primary_address: Optional[StrictBool] = None
    country_code: Optional[CountryCode] = None
    province_code: Optional[str] = None
    regency_code: Optional[str] = None
    district_code: Optional[str] = None


# Contacts


class ContactCreate(Record):
    label: ClassVar[str] = "contact"

    contact_type: ContactType
    name: str
    phone_number: str = Field(..., max_length=20)
    email: Optional[str] = None
    is_primary_contact: StrictBool


class ContactPatch(Patch):
    label: ClassVar[str] = "contact"
    required: ClassVar[tuple[str, ...]] = (
        "contact_type",
        "name",
        "phone_number",
        "is_primary_contact",
    )

    contact_type: Optional[ContactType] = None
    name: Optional[str] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = None
    is_primary_contact: Optional[StrictBool] = None


class VendorContactCreate(ContactCreate):
    fax_number: Optional[str] = Field(None, max_length=20)


class VendorContactPatch(ContactPatch):
    fax_number: Optional[str] = Field(None, max_length=20)


# Bank accounts (vendors only)


class BankingCreate(Record):
    label: ClassVar[str] = "banking"

    banking_number: str = Field(..., max_length=32)
    banking_name: str
    banking_bank: BankingBank
    banking_branch: Optional[str] = None
    is_primary_banking_number: StrictBool


class BankingPatch(Patch):
    label: ClassVar[str] = "banking"
    required: ClassVar[tuple[str, ...]] = (
        "banking_number",
        "banking_name",
        "banking_bank",
        "is_primary_banking_number",
    )

    banking_number: Optional[str] = Field(None, max_length=32)
    banking_name: Optional[str] = None
    banking_bank: Optional[BankingBank] = None
    banking_branch: Optional[str] = None
    is_primary_banking_number: Optional[StrictBool] = None


# Aggregate roots


class PartnerCreate(Record):
    name: str
    status: StatusActive = Field(StatusActive.ACTIVE, validate_default=True)
    notes: Optional[str] = Field(None, max_length=500)
    tax_number: Optional[str] = None
    tax_name: Optional[str] = None
    tax_address: Optional[str] = None
    tax_date: Optional[LocalDate] = None

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return StatusActive.ACTIVE
        return value


class PartnerPatch(Patch):
    required: ClassVar[tuple[str, ...]] = ("name", "status")

    name: Optional[str] = None
    status: Optional[StatusActive] = None
    notes: Optional[str] = Field(None, max_length=500)
    tax_number: Optional[str] = None
    tax_name: Optional[str] = None
    tax_address: Optional[str] = None
    tax_date: Optional[LocalDate] = None


class CustomerCreate(PartnerCreate):
    label: ClassVar[str] = "customer"

    partner_type: Optional[str] = None


class CustomerPatch(PartnerPatch):
    label: ClassVar[str] = "customer"

    partner_type: Optional[str] = None


class SupplierCreate(PartnerCreate):
    label: ClassVar[str] = "supplier"

    partner_type: Optional[PartnerType] = None
    active_date: Optional[LocalDate] = None


class SupplierPatch(PartnerPatch):
    label: ClassVar[str] = "supplier"

    partner_type: Optional[PartnerType] = None
    active_date: Optional[LocalDate] = None


class VendorCreate(SupplierCreate):
    label: ClassVar[str] = "vendor"

    payment_terms: Optional[PaymentTerms] = None
    pic_name: Optional[str] = None
    pic_position: Optional[str] = None


class VendorPatch(SupplierPatch):
    label: ClassVar[str] = "vendor"

    payment_terms: Optional[PaymentTerms] = None
    pic_name: Optional[str] = None
    pic_position: Optional[str] = None


@dataclass(frozen=True)
class Collection:
    """One child collection of an aggregate type."""

    name: str
    create: type[Record]
    patch: type[Patch]
    primary_flag: str

    @property
    def label(self) -> str:
        return self.create.label


ADDRESSES = Collection("addresses", AddressCreate, AddressPatch, "is_primary_address")
CONTACTS = Collection("contacts", ContactCreate, ContactPatch, "is_primary_contact")
VENDOR_CONTACTS = Collection(
    "contacts", VendorContactCreate, VendorContactPatch, "is_primary_contact"
)
BANKINGS = Collection("bankings", BankingCreate, BankingPatch, "is_primary_banking_number")


@dataclass(frozen=True)
class KindSpec:
    """Layout of one aggregate type."""

    kind: PartnerKind
    prefix: str
    create: type[Record]
    patch: type[Patch]
    collections: Mapping[str, Collection] = field(default_factory=dict)

    def collection(self, name: str) -> Collection:
        found = self.collections.get(name)
        if found is None:
            raise ValidationError(
                f"A {self.kind.value} has no '{name}' collection. "
                f"Expected one of: {', '.join(self.collections)}"
            )
        return found


KINDS: dict[PartnerKind, KindSpec] = {
    PartnerKind.CUSTOMER: KindSpec(
        kind=PartnerKind.CUSTOMER,
        prefix="CU",
        create=CustomerCreate,
        patch=CustomerPatch,
        collections={"addresses": ADDRESSES, "contacts": CONTACTS},
    ),
    PartnerKind.SUPPLIER: KindSpec(
        kind=PartnerKind.SUPPLIER,
        prefix="SU",
        create=SupplierCreate,
        patch=SupplierPatch,
        collections={"addresses": ADDRESSES, "contacts": CONTACTS},
    ),
    PartnerKind.VENDOR: KindSpec(
        kind=PartnerKind.VENDOR,
        prefix="VN",
        create=VendorCreate,
        patch=VendorPatch,
        collections={
            "addresses": ADDRESSES,
            "contacts": VENDOR_CONTACTS,
            "bankings": BANKINGS,
        },
    ),
}

MODELS: dict[str, type[Record]] = {
    model.__name__: model
    for model in (
        AddressCreate,
        AddressPatch,
        ContactCreate,
        ContactPatch,
        VendorContactCreate,
        VendorContactPatch,
        BankingCreate,
        BankingPatch,
        CustomerCreate,
        CustomerPatch,
        SupplierCreate,
        SupplierPatch,
        VendorCreate,
        VendorPatch,
    )
}


def kind_spec(kind: PartnerKind | str) -> KindSpec:
    """Look up the layout for ``kind``.

    Raises:
        ValidationError: If ``kind`` is not a known aggregate type
    """
    try:
        return KINDS[PartnerKind(kind)]
    except ValueError as e:
        raise ValidationError(invalid_choice("kind", kind, [k.value for k in PartnerKind])) from e


def describe(error: SchemaError) -> str:
    """Turn the first error of a failed payload validation into one message.

    A required field that is absent, null or blank is reported by name.
    """
    model = MODELS.get(error.title)
    label = model.label if model is not None else error.title
    detail = error.errors()[0]
    name = ".".join(str(part) for part in detail["loc"])

    if detail["type"] == "extra_forbidden":
        return unknown_field(label, name)
    if detail["type"] == "missing" or (name and detail.get("input") is None):
        return missing_required_field(label, name)

    if detail["type"] == "value_error":
        message = str(detail["ctx"]["error"])
    else:
        message = detail["msg"]
    if not name:
        return message
    return f"Invalid {label} field '{name}': {message}"
