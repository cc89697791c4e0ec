# backend/vaccination/seed.py
"""
Schema creation and reference data loading.

Reference data (vaccines, branches, time slots, payment methods) is never
changed by the API; it is loaded here, once, before the service starts.
Existing rows are left untouched, so loading is safe to repeat.
"""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .models import Base, Branches, PaymentMethods, TimeSlots, Vaccines

logger = logging.getLogger(__name__)


DEFAULT_REFERENCE_DATA = {
    "vaccines": [
        {"code": "BCG", "name": "BCG", "description": "Tuberculosis"},
        {"code": "HEPB", "name": "Hepatitis B"},
        {"code": "MMR", "name": "Measles, mumps, rubella"},
        {"code": "FLU", "name": "Influenza", "description": "Seasonal"},
        {"code": "TDAP", "name": "Tetanus, diphtheria, pertussis"},
    ],
    "branches": [
        {"code": "CENTRAL", "name": "Central Clinic", "vaccines": ["BCG", "HEPB", "MMR", "FLU", "TDAP"]},
        {"code": "NORTH", "name": "North Clinic", "vaccines": ["FLU", "MMR"]},
        {"code": "SOUTH", "name": "South Clinic", "vaccines": ["FLU", "HEPB", "TDAP"]},
    ],
    "time_slots": [
        {"id": 1, "start_time": "09:00", "end_time": "09:30"},
        {"id": 2, "start_time": "09:30", "end_time": "10:00"},
        {"id": 3, "start_time": "10:00", "end_time": "10:30"},
        {"id": 4, "start_time": "10:30", "end_time": "11:00"},
        {"id": 5, "start_time": "11:00", "end_time": "11:30"},
        {"id": 6, "start_time": "11:30", "end_time": "12:00"},
        {"id": 7, "start_time": "13:00", "end_time": "13:30"},
        {"id": 8, "start_time": "13:30", "end_time": "14:00"},
        {"id": 9, "start_time": "14:00", "end_time": "14:30"},
        {"id": 10, "start_time": "14:30", "end_time": "15:00"},
    ],
    "payment_methods": [
        {"id": 1, "name": "Cash"},
        {"id": 2, "name": "Credit card"},
        {"id": 3, "name": "Insurance"},
    ],
}


def create_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def seed_reference_data(db: Session, data: dict = DEFAULT_REFERENCE_DATA) -> dict:
    """
    Insert reference rows missing from the database.

    Returns:
        Number of inserted rows per section.
    """
    inserted = {"vaccines": 0, "branches": 0, "time_slots": 0, "payment_methods": 0}

    for row in data.get("vaccines", []):
        if db.get(Vaccines, row["code"]) is None:
            db.add(Vaccines(**row))
            inserted["vaccines"] += 1
    db.flush()

    for row in data.get("branches", []):
        if db.get(Branches, row["code"]) is not None:
            continue

        vaccine_codes = row.get("vaccines", [])
        vaccines = [db.get(Vaccines, code) for code in vaccine_codes]
        missing = [code for code, v in zip(vaccine_codes, vaccines) if v is None]
        if missing:
            raise ValueError(f"Branch {row['code']} references unknown vaccines: {missing}")

        db.add(Branches(code=row["code"], name=row["name"], vaccines=vaccines))
        inserted["branches"] += 1

    for row in data.get("time_slots", []):
        if db.get(TimeSlots, row["id"]) is None:
            db.add(TimeSlots(**row))
            inserted["time_slots"] += 1

    for row in data.get("payment_methods", []):
        if db.get(PaymentMethods, row["id"]) is None:
            db.add(PaymentMethods(**row))
            inserted["payment_methods"] += 1

    db.commit()
    logger.info(f"Reference data loaded: {inserted}")
    return inserted
