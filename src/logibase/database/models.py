"""SQLAlchemy models for logibase database."""

from datetime import datetime, UTC
from typing import Any, Optional
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, declared_attr, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Country(Base):
    """Country lookup model."""

    __tablename__ = "countries"

    code = Column(String(2), primary_key=True)
    name = Column(String, nullable=False)


class Province(Base):
    """Indonesian province model."""

    __tablename__ = "provinces"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)

    regencies = relationship("Regency", back_populates="province")


class Regency(Base):
    """Indonesian regency/city model."""

    __tablename__ = "regencies"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    province_code = Column(String, ForeignKey("provinces.code"), nullable=False)

    province = relationship("Province", back_populates="regencies")
    districts = relationship("District", back_populates="regency")


class District(Base):
    """Indonesian district model."""

    __tablename__ = "districts"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    regency_code = Column(String, ForeignKey("regencies.code"), nullable=False)

    regency = relationship("Regency", back_populates="districts")


class PartnerColumns:
    """Columns shared by customers, suppliers and vendors."""

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="ACTIVE")
    partner_type = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    tax_number = Column(String, nullable=True)
    tax_name = Column(String, nullable=True)
    tax_address = Column(String, nullable=True)
    tax_date = Column(Date, nullable=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class AddressColumns:
    """Columns shared by all address tables."""

    id = Column(Integer, primary_key=True)
    address_type = Column(String, nullable=False)
    address_line1 = Column(String, nullable=False)
    address_line2 = Column(String, nullable=True)
    zipcode = Column(String, nullable=True)
    is_primary_address = Column(Boolean, default=False, nullable=False)

    @declared_attr
    def country_code(cls):
        return Column(String(2), ForeignKey("countries.code"), nullable=False)

    @declared_attr
    def province_code(cls):
        return Column(String, ForeignKey("provinces.code"), nullable=True)

    @declared_attr
    def regency_code(cls):
        return Column(String, ForeignKey("regencies.code"), nullable=True)

    @declared_attr
    def district_code(cls):
        return Column(String, ForeignKey("districts.code"), nullable=True)

    @declared_attr
    def country(cls):
        return relationship("Country")

    @declared_attr
    def province(cls):
        return relationship("Province")

    @declared_attr
    def regency(cls):
        return relationship("Regency")

    @declared_attr
    def district(cls):
        return relationship("District")


class ContactColumns:
    """Columns shared by all contact tables."""

    id = Column(Integer, primary_key=True)
    contact_type = Column(String, nullable=False)
    name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    email = Column(String, nullable=True)
    is_primary_contact = Column(Boolean, default=False, nullable=False)


class Customer(PartnerColumns, Base):
    """Customer model."""

    __tablename__ = "customers"

    code = Column(String, unique=True, nullable=False)

    # Relationships
    addresses = relationship(
        "CustomerAddress", back_populates="customer", cascade="all, delete-orphan",
        order_by="CustomerAddress.id",
    )
    contacts = relationship(
        "CustomerContact", back_populates="customer", cascade="all, delete-orphan",
        order_by="CustomerContact.id",
    )


class CustomerAddress(AddressColumns, Base):
    """Customer address model."""

    __tablename__ = "customer_addresses"

    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)

    customer = relationship("Customer", back_populates="addresses")


class CustomerContact(ContactColumns, Base):
    """Customer contact model."""

    __tablename__ = "customer_contacts"

    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)

    customer = relationship("Customer", back_populates="contacts")


class Supplier(PartnerColumns, Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    code = Column(String, unique=True, nullable=False)
    active_date = Column(Date, nullable=True)

    # Relationships
    addresses = relationship(
        "SupplierAddress", back_populates="supplier", cascade="all, delete-orphan",
        order_by="SupplierAddress.id",
    )
    contacts = relationship(
        "SupplierContact", back_populates="supplier", cascade="all, delete-orphan",
        order_by="SupplierContact.id",
    )


class SupplierAddress(AddressColumns, Base):
    """Supplier address model."""

    __tablename__ = "supplier_addresses"

    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False)

    supplier = relationship("Supplier", back_populates="addresses")


class SupplierContact(ContactColumns, Base):
    """Supplier contact model."""

    __tablename__ = "supplier_contacts"

    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False)

    supplier = relationship("Supplier", back_populates="contacts")


class Vendor(PartnerColumns, Base):
    """Vendor model."""

    __tablename__ = "vendors"

    code = Column(String, unique=True, nullable=False)
    active_date = Column(Date, nullable=True)
    payment_terms = Column(Integer, nullable=True)
    pic_name = Column(String, nullable=True)
    pic_position = Column(String, nullable=True)

    # Relationships
    addresses = relationship(
        "VendorAddress", back_populates="vendor", cascade="all, delete-orphan",
        order_by="VendorAddress.id",
    )
    contacts = relationship(
        "VendorContact", back_populates="vendor", cascade="all, delete-orphan",
        order_by="VendorContact.id",
    )
    bankings = relationship(
        "VendorBanking", back_populates="vendor", cascade="all, delete-orphan",
        order_by="VendorBanking.id",
    )


class VendorAddress(AddressColumns, Base):
    """Vendor address model."""

    __tablename__ = "vendor_addresses"

    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False)

    vendor = relationship("Vendor", back_populates="addresses")


class VendorContact(ContactColumns, Base):
    """Vendor contact model."""

    __tablename__ = "vendor_contacts"

    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False)
    fax_number = Column(String, nullable=True)

    vendor = relationship("Vendor", back_populates="contacts")


class VendorBanking(Base):
    """Vendor bank account model."""

    __tablename__ = "vendor_bankings"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False)
    banking_number = Column(String, nullable=False)
    banking_name = Column(String, nullable=False)
    banking_bank = Column(String, nullable=False)
    banking_branch = Column(String, nullable=True)
    is_primary_banking_number = Column(Boolean, default=False, nullable=False)

    vendor = relationship("Vendor", back_populates="bankings")


# Root model, its foreign key column on child tables, and child models per collection.
PARTNER_MODELS: dict[str, tuple[Any, str, dict[str, Any]]] = {
    "customer": (
        Customer,
        "customer_id",
        {"addresses": CustomerAddress, "contacts": CustomerContact},
    ),
    "supplier": (
        Supplier,
        "supplier_id",
        {"addresses": SupplierAddress, "contacts": SupplierContact},
    ),
    "vendor": (
        Vendor,
        "vendor_id",
        {"addresses": VendorAddress, "contacts": VendorContact, "bankings": VendorBanking},
    ),
}


def create_session_factory(database_url: str, timeout: Optional[float] = None) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    Args:
        database_url: SQLAlchemy database URL
        timeout: SQLite busy timeout in seconds
    """
    connect_args = {}
    if timeout is not None and database_url.startswith("sqlite"):
        connect_args["timeout"] = timeout
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
