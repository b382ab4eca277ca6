import pytest

from app.showroom.core.error_catalog import AppError
from app.showroom.services.partners import DEFAULT_PARTNER_CNIC, resolve_partner


def test_vehicle_partner_wins():
    partner = resolve_partner("Kamran", "35202-7654321-3", "Showroom A")

    assert partner.name == "Kamran"
    assert partner.cnic == "35202-7654321-3"


def test_first_of_several_partners():
    partner = resolve_partner(["Kamran", "Bilal"], ["35202-7654321-3", "35202-1111111-1"], "Showroom A")

    assert partner.name == "Kamran"
    assert partner.cnic == "35202-7654321-3"


def test_falls_back_to_showroom_name_and_placeholder():
    partner = resolve_partner(None, "  ", "Showroom A")

    assert partner.name == "Showroom A"
    assert partner.cnic == DEFAULT_PARTNER_CNIC


def test_falls_back_to_literal_none():
    partner = resolve_partner([], None, "")

    assert partner.name == "None"


def test_custom_placeholder():
    partner = resolve_partner(None, None, "Showroom A", placeholder_cnic="11111-1111111-1")

    assert partner.cnic == "11111-1111111-1"


@pytest.mark.parametrize("cnic", ["123", "35202-765432-3", "35202_7654321_3"])
def test_malformed_partner_cnic_rejected(cnic):
    with pytest.raises(AppError) as exc_info:
        resolve_partner("Kamran", cnic, "Showroom A")

    assert exc_info.value.error.code == "INVALID_PARTNER_CNIC"
