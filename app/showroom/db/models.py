import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Index, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator, CHAR

from app.showroom.core.constants import VehicleCategory, VehicleStatus

MONEY = Numeric(14, 2)


class GUID(TypeDecorator):
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID

            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class Base(DeclarativeBase):
    pass


class User(Base):
    """A login account. Showroom accounts double as the tenant record."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="showroom", nullable=False)
    showroom_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class VehicleColumns:
    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    model: Mapped[str] = mapped_column(String(120), nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    color: Mapped[str | None] = mapped_column(String(60), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=VehicleStatus.STOCK_IN.value, nullable=False, index=True)
    engine_number: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    chassis_number: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    partner: Mapped[str | None] = mapped_column(String(255), nullable=True)
    partner_cnic: Mapped[str | None] = mapped_column(String(15), nullable=True)
    showroom_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False, index=True)
    showroom_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_added: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, onupdate=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"


class Bike(VehicleColumns, Base):
    __tablename__ = "bikes"
    category = VehicleCategory.BIKE


class Car(VehicleColumns, Base):
    __tablename__ = "cars"
    category = VehicleCategory.CAR


class Rickshaw(VehicleColumns, Base):
    __tablename__ = "rickshaws"
    category = VehicleCategory.RICKSHAW


class Loader(VehicleColumns, Base):
    __tablename__ = "loaders"
    category = VehicleCategory.LOADER


class ElectricBike(VehicleColumns, Base):
    __tablename__ = "electric_bikes"
    category = VehicleCategory.ELECTRIC_BIKE


VEHICLE_MODELS: dict[VehicleCategory, type[VehicleColumns]] = {
    VehicleCategory.BIKE: Bike,
    VehicleCategory.CAR: Car,
    VehicleCategory.RICKSHAW: Rickshaw,
    VehicleCategory.LOADER: Loader,
    VehicleCategory.ELECTRIC_BIKE: ElectricBike,
}

if set(VEHICLE_MODELS) != set(VehicleCategory):
    raise RuntimeError("every vehicle category needs a model")


def vehicle_model_for(category: VehicleCategory) -> type[VehicleColumns]:
    return VEHICLE_MODELS[category]


class Sale(Base):
    __tablename__ = "sales"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False, index=True)
    vehicle_type: Mapped[str] = mapped_column(String(30), nullable=False)
    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    model: Mapped[str] = mapped_column(String(120), nullable=False)
    color: Mapped[str | None] = mapped_column(String(60), nullable=True)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    payment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    due_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    monthly_installment: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_cnic: Mapped[str] = mapped_column(String(15), nullable=False)
    engine_number: Mapped[str] = mapped_column(String(120), nullable=False)
    chassis_number: Mapped[str] = mapped_column(String(120), nullable=False)
    showroom_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False, index=True)
    showroom_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sold_by_user_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False)
    sale_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class AuditEvent(Base):
    """Stock movement event; written for every stock-in and stock-out."""

    __tablename__ = "audit_events"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    vehicle_type: Mapped[str] = mapped_column(String(30), nullable=False)
    vehicle_id: Mapped[uuid.UUID | None] = mapped_column(GUID(), nullable=True)
    sale_id: Mapped[uuid.UUID | None] = mapped_column(GUID(), nullable=True, index=True)
    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    model: Mapped[str] = mapped_column(String(120), nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    engine_number: Mapped[str] = mapped_column(String(120), nullable=False)
    chassis_number: Mapped[str] = mapped_column(String(120), nullable=False)
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_cnic: Mapped[str | None] = mapped_column(String(15), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    showroom_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False, index=True)
    showroom_name: Mapped[str] = mapped_column(String(255), nullable=False)
    payment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    action_by: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False)
    partner: Mapped[str] = mapped_column(String(255), nullable=False)
    partner_cnic: Mapped[str] = mapped_column(String(15), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class IdempotencyRecord(Base):
    __tablename__ = "idempotency_records"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(GUID(), index=True, nullable=False)
    endpoint: Mapped[str] = mapped_column(String(255), nullable=False)
    method: Mapped[str] = mapped_column(String(10), nullable=False)
    idempotency_key: Mapped[str] = mapped_column(String(255), nullable=False)
    request_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    state: Mapped[str] = mapped_column(String(20), nullable=False)
    status_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    response_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("owner_id", "endpoint", "method", "idempotency_key", name="uq_idempotency"),
    )


Index("ix_sales_showroom_sale_date", Sale.showroom_id, Sale.sale_date)
