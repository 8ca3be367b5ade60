"""Mapper functions to convert between domain models and SQLAlchemy models.

Customers, suppliers and vendors live in separate tables but map onto the
same domain entities; columns a table lacks come back as None.
"""

from typing import Any, Optional

from logibase.domain import entities as domain
from logibase.database.models import (
    Country as ORMCountry,
    Province as ORMProvince,
    Regency as ORMRegency,
    District as ORMDistrict,
)


def _name(region: Optional[Any]) -> Optional[str]:
    return region.name if region is not None else None


def country_to_domain(orm_country: ORMCountry) -> domain.Country:
    """Convert SQLAlchemy Country model to domain Country entity."""
    return domain.Country(code=orm_country.code, name=orm_country.name)


def province_to_domain(orm_province: ORMProvince) -> domain.Province:
    """Convert SQLAlchemy Province model to domain Province entity."""
    return domain.Province(code=orm_province.code, name=orm_province.name)


def regency_to_domain(orm_regency: ORMRegency) -> domain.Regency:
    """Convert SQLAlchemy Regency model to domain Regency entity."""
    return domain.Regency(
        code=orm_regency.code,
        name=orm_regency.name,
        province_code=orm_regency.province_code,
    )


def district_to_domain(orm_district: ORMDistrict) -> domain.District:
    """Convert SQLAlchemy District model to domain District entity."""
    return domain.District(
        code=orm_district.code,
        name=orm_district.name,
        regency_code=orm_district.regency_code,
    )


def partner_to_domain(orm_partner: Any, kind: domain.PartnerKind) -> domain.Partner:
    """Convert a Customer, Supplier or Vendor model to a domain Partner entity."""
    return domain.Partner(
        id=orm_partner.id,
        kind=kind,
        code=orm_partner.code,
        name=orm_partner.name,
        status=orm_partner.status,
        created_at=orm_partner.created_at,
        updated_at=orm_partner.updated_at,
        partner_type=orm_partner.partner_type,
        notes=orm_partner.notes,
        tax_number=orm_partner.tax_number,
        tax_name=orm_partner.tax_name,
        tax_address=orm_partner.tax_address,
        tax_date=orm_partner.tax_date,
        active_date=getattr(orm_partner, "active_date", None),
        payment_terms=getattr(orm_partner, "payment_terms", None),
        pic_name=getattr(orm_partner, "pic_name", None),
        pic_position=getattr(orm_partner, "pic_position", None),
        created_by=orm_partner.created_by,
    )


def address_to_domain(orm_address: Any, partner_id: int) -> domain.Address:
    """Convert an address model to a domain Address with region names resolved."""
    return domain.Address(
        id=orm_address.id,
        partner_id=partner_id,
        address_type=orm_address.address_type,
        address_line1=orm_address.address_line1,
        address_line2=orm_address.address_line2,
        zipcode=orm_address.zipcode,
        is_primary_address=orm_address.is_primary_address,
        country_code=orm_address.country_code,
        province_code=orm_address.province_code,
        regency_code=orm_address.regency_code,
        district_code=orm_address.district_code,
        country_name=_name(orm_address.country),
        province_name=_name(orm_address.province),
        regency_name=_name(orm_address.regency),
        district_name=_name(orm_address.district),
    )


def contact_to_domain(orm_contact: Any, partner_id: int) -> domain.Contact:
    """Convert a contact model to a domain Contact entity."""
    return domain.Contact(
        id=orm_contact.id,
        partner_id=partner_id,
        contact_type=orm_contact.contact_type,
        name=orm_contact.name,
        phone_number=orm_contact.phone_number,
        email=orm_contact.email,
        is_primary_contact=orm_contact.is_primary_contact,
        fax_number=getattr(orm_contact, "fax_number", None),
    )


def banking_to_domain(orm_banking: Any, partner_id: int) -> domain.Banking:
    """Convert a VendorBanking model to a domain Banking entity."""
    return domain.Banking(
        id=orm_banking.id,
        partner_id=partner_id,
        banking_number=orm_banking.banking_number,
        banking_name=orm_banking.banking_name,
        banking_bank=orm_banking.banking_bank,
        banking_branch=orm_banking.banking_branch,
        is_primary_banking_number=orm_banking.is_primary_banking_number,
    )


CHILD_MAPPERS = {
    "addresses": address_to_domain,
    "contacts": contact_to_domain,
    "bankings": banking_to_domain,
}


def child_to_domain(collection: str, orm_child: Any, partner_id: int) -> Any:
    """Convert a child model of the named collection to its domain entity."""
    return CHILD_MAPPERS[collection](orm_child, partner_id)


def aggregate_to_domain(orm_partner: Any, kind: domain.PartnerKind) -> domain.PartnerAggregate:
    """Convert a root model and its loaded children to a PartnerAggregate."""
    children = {
        name: tuple(child_to_domain(name, child, orm_partner.id) for child in getattr(orm_partner, name))
        for name in CHILD_MAPPERS
        if hasattr(orm_partner, name)
    }
    return domain.PartnerAggregate(partner=partner_to_domain(orm_partner, kind), **children)
