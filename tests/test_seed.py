"""
Tests for schema creation and reference data loading.
"""

import pytest

from vaccination.models import Branches, PaymentMethods, TimeSlots, Vaccines
from vaccination.seed import DEFAULT_REFERENCE_DATA, seed_reference_data


class TestSeedReferenceData:

    def test_default_data_loaded(self, session_factory):
        db = session_factory()
        try:
            inserted = seed_reference_data(db)

            assert inserted == {
                "vaccines": len(DEFAULT_REFERENCE_DATA["vaccines"]),
                "branches": len(DEFAULT_REFERENCE_DATA["branches"]),
                "time_slots": len(DEFAULT_REFERENCE_DATA["time_slots"]),
                "payment_methods": len(DEFAULT_REFERENCE_DATA["payment_methods"]),
            }
            assert [v.code for v in db.get(Branches, "NORTH").vaccines] == ["FLU", "MMR"]
        finally:
            db.close()

    def test_loading_twice_inserts_nothing(self, db):
        inserted = seed_reference_data(db, {
            "vaccines": [{"code": "V1", "name": "Renamed"}],
            "branches": [{"code": "B1", "name": "Renamed", "vaccines": ["V1"]}],
            "time_slots": [{"id": 1, "start_time": "08:00", "end_time": "08:30"}],
            "payment_methods": [{"id": 1, "name": "Renamed"}],
        })

        assert inserted == {"vaccines": 0, "branches": 0, "time_slots": 0, "payment_methods": 0}
        assert db.get(Vaccines, "V1").name == "Influenza"
        assert db.get(TimeSlots, 1).start_time == "09:00"
        assert db.get(PaymentMethods, 1).name == "Cash"

    def test_branch_with_unknown_vaccine_rejected(self, db):
        with pytest.raises(ValueError, match="unknown vaccines"):
            seed_reference_data(db, {"branches": [{"code": "B9", "name": "X", "vaccines": ["NOPE"]}]})
