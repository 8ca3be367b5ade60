"""Domain layer for logibase application."""

from logibase.domain.partner import PartnerService
from logibase.domain.regions import RegionService

__all__ = [
    "PartnerService",
    "RegionService",
]
