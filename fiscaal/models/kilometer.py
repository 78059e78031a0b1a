from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime

from fiscaal.core.clock import utcnow

VEHICLE_CAR = "car"
VEHICLE_BIKE = "bike"
VEHICLE_MOTORCYCLE = "motorcycle"

VEHICLE_TYPES = (VEHICLE_CAR, VEHICLE_BIKE, VEHICLE_MOTORCYCLE)


class KilometerEntry(SQLModel, table=True):
    __tablename__ = "kilometer_entry"

    id: Optional[int] = Field(default=None, primary_key=True)

    date: date
    start_location: str = ""
    end_location: str = ""
    purpose: str = ""

    distance: float = 0.0                # km
    vehicle_type: str = VEHICLE_CAR

    # Private trip with a business vehicle (counts for private-use BTW)
    is_private: bool = False
    # Own vehicle used for business (mileage allowance rates)
    is_private_vehicle: bool = True

    rate: float = 0.0
    amount: float = 0.0

    client_id: Optional[int] = Field(default=None, foreign_key="client.id")
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
