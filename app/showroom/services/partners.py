from __future__ import annotations

from dataclasses import dataclass

from app.showroom.core.constants import is_valid_cnic
from app.showroom.core.error_catalog import AppError, ErrorCatalog

DEFAULT_PARTNER_NAME = "None"
DEFAULT_PARTNER_CNIC = "00000-0000000-0"


@dataclass(frozen=True)
class PartnerAttribution:
    name: str
    cnic: str


def _first(value) -> str | None:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_partner(
    vehicle_partner,
    vehicle_partner_cnic,
    showroom_name: str | None,
    *,
    placeholder_cnic: str = DEFAULT_PARTNER_CNIC,
) -> PartnerAttribution:
    """Pick the partner recorded on a stock-out movement.

    Name precedence: the vehicle's partner (first entry when several are
    recorded), then the showroom display name, then ``"None"``.
    National id precedence: the vehicle's partner CNIC, then the
    placeholder. The chosen CNIC must still match the CNIC format.
    """
    name = _first(vehicle_partner) or _first(showroom_name) or DEFAULT_PARTNER_NAME
    cnic = _first(vehicle_partner_cnic) or placeholder_cnic
    if not is_valid_cnic(cnic):
        raise AppError(ErrorCatalog.INVALID_PARTNER_CNIC, details={"partner_cnic": cnic})
    return PartnerAttribution(name=name, cnic=cnic)
