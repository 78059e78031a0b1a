# fiscaal/services/kilometers_service.py
from __future__ import annotations

from datetime import date

from sqlmodel import Session, select

from fiscaal.core.config import settings
from fiscaal.core.errors import ValidationError
from fiscaal.core.logger import logger
from fiscaal.models.kilometer import (
    VEHICLE_BIKE,
    VEHICLE_CAR,
    VEHICLE_MOTORCYCLE,
    KilometerEntry,
)
from fiscaal.schemas import KilometerIn
from fiscaal.services.money import round2


def mileage_rate(vehicle_type: str, is_private_vehicle: bool = True) -> float:
    """
    Allowance per km:

    - car: business rate with an own (private) car, commuting rate otherwise
    - bike / motorcycle: flat rate
    """
    if vehicle_type == VEHICLE_BIKE:
        return settings.KM_RATE_BIKE
    if vehicle_type == VEHICLE_MOTORCYCLE:
        return settings.KM_RATE_MOTORCYCLE
    if vehicle_type == VEHICLE_CAR:
        if is_private_vehicle:
            return settings.KM_RATE_CAR_BUSINESS
        return settings.KM_RATE_CAR_COMMUTING
    raise ValidationError(f"Unknown vehicle type: {vehicle_type!r}")


def calculate_mileage_amount(distance: float, vehicle_type: str, is_private_vehicle: bool = True) -> float:
    return round2(distance * mileage_rate(vehicle_type, is_private_vehicle))


def create_kilometer_entry(session: Session, data: KilometerIn) -> KilometerEntry:
    rate = mileage_rate(data.vehicle_type, data.is_private_vehicle)

    entry = KilometerEntry(
        **data.model_dump(),
        rate=rate,
        amount=calculate_mileage_amount(data.distance, data.vehicle_type, data.is_private_vehicle),
    )
    session.add(entry)
    session.commit()
    session.refresh(entry)

    logger.info(f"Trip {entry.id} stored ({entry.distance} km, private={entry.is_private})")
    return entry


def list_kilometer_entries(
    session: Session,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[KilometerEntry]:
    query = select(KilometerEntry)

    if date_from:
        query = query.where(KilometerEntry.date >= date_from)

    if date_to:
        query = query.where(KilometerEntry.date <= date_to)

    return list(session.exec(query.order_by(KilometerEntry.date)).all())
