import re
from enum import Enum

CNIC_PATTERN = re.compile(r"[0-9]{5}-[0-9]{7}-[0-9]")
NO_PAYMENT = "None"


class VehicleStatus(str, Enum):
    STOCK_IN = "StockIn"
    STOCK_OUT = "StockOut"


class PaymentType(str, Enum):
    CASH = "Cash"
    CARD = "Card"
    INSTALLMENT = "Installment"


class VehicleCategory(str, Enum):
    BIKE = "Bike"
    CAR = "Car"
    RICKSHAW = "Rickshaw"
    LOADER = "Loader"
    ELECTRIC_BIKE = "ElectricBike"

    @classmethod
    def parse(cls, value: str | None) -> "VehicleCategory | None":
        if not value:
            return None
        normalized = value.replace(" ", "").replace("_", "").lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        return None


def is_valid_cnic(value: str | None) -> bool:
    return bool(value) and CNIC_PATTERN.fullmatch(value) is not None
