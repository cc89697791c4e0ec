"""
Tests for status flags and the schedule report.
"""

import base64
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from vaccination.errors import ErrorCode, PreconditionError

from .conftest import make_request


class TestStatusUpdates:
    """Tests for confirm_schedule / mark_applied."""

    def test_confirm_then_apply_sets_both_flags(self, service):
        code = service.schedule_vaccination(make_request()).code

        service.confirm_schedule(code)
        service.mark_applied(code)

        schedule = service.get_schedule(code)
        assert schedule.confirmed is True
        assert schedule.applied is True

    def test_flags_are_independent(self, service):
        code = service.schedule_vaccination(make_request()).code

        schedule = service.mark_applied(code)

        assert schedule.applied is True
        assert schedule.confirmed is False

    def test_repeated_confirm_is_harmless(self, service):
        code = service.schedule_vaccination(make_request()).code

        service.confirm_schedule(code)
        schedule = service.confirm_schedule(code)

        assert schedule.confirmed is True

    @pytest.mark.parametrize("operation", ["confirm_schedule", "mark_applied", "get_schedule"])
    def test_unknown_code_fails(self, service, operation):
        with pytest.raises(PreconditionError) as exc_info:
            getattr(service, operation)("does-not-exist")

        assert exc_info.value.error_code is ErrorCode.INVALID_SCHEDULE

    @pytest.mark.parametrize("operation", ["confirm_schedule", "mark_applied"])
    def test_storage_error_on_update_propagates(self, service, db, monkeypatch, operation):
        """Integrity failures while updating flags are not reported as a taken slot."""
        code = service.schedule_vaccination(make_request()).code

        def failing_commit():
            raise IntegrityError("UPDATE vaccination_schedules", {}, Exception("constraint failed"))

        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(IntegrityError):
            getattr(service, operation)(code)


class TestScheduleReport:
    """Tests for build_schedule_report with a stub renderer."""

    @pytest.fixture
    def booked(self, service):
        """Four bookings over two branches and two days, one confirmed, one applied."""
        first = service.schedule_vaccination(make_request(time_slot_id=1))
        second = service.schedule_vaccination(make_request(time_slot_id=2))
        third = service.schedule_vaccination(make_request(branch_code="B2", vaccine_code="V3"))
        fourth = service.schedule_vaccination(make_request(schedule_date=date(2024, 6, 5)))

        service.confirm_schedule(first.code)
        service.mark_applied(second.code)
        return [first.code, second.code, third.code, fourth.code]

    def _codes(self, renderer):
        _, model = renderer.calls[-1]
        return [s.code for s in model.schedules]

    def test_report_is_base64_of_rendered_bytes(self, service, renderer, booked):
        report = service.build_schedule_report()

        assert base64.b64decode(report.report) == renderer.payload
        template_id, model = renderer.calls[-1]
        assert template_id == "schedule_report.txt"
        assert len(model.schedules) == 4

    def test_absent_bounds_are_empty_strings(self, service, renderer, booked):
        service.build_schedule_report()

        _, model = renderer.calls[-1]
        assert model.from_date == ""
        assert model.to_date == ""

    def test_date_bounds_are_inclusive_and_formatted(self, service, renderer, booked):
        service.build_schedule_report(from_date=date(2024, 6, 1), to_date=date(2024, 6, 1))

        _, model = renderer.calls[-1]
        assert model.from_date == "2024-06-01"
        assert model.to_date == "2024-06-01"
        assert set(self._codes(renderer)) == set(booked[:3])

    def test_open_ended_from_date(self, service, renderer, booked):
        service.build_schedule_report(from_date=date(2024, 6, 2))

        assert self._codes(renderer) == [booked[3]]

    def test_branch_filter(self, service, renderer, booked):
        service.build_schedule_report(branch_code="B2")

        assert self._codes(renderer) == [booked[2]]

    def test_flag_filters(self, service, renderer, booked):
        service.build_schedule_report(confirmed=True)
        assert self._codes(renderer) == [booked[0]]

        service.build_schedule_report(applied=True)
        assert self._codes(renderer) == [booked[1]]

        service.build_schedule_report(applied=False, confirmed=False)
        assert set(self._codes(renderer)) == {booked[2], booked[3]}

    def test_schedules_ordered_by_date_then_slot(self, service, renderer, booked):
        service.build_schedule_report(branch_code="B1")

        _, model = renderer.calls[-1]
        assert [(s.schedule_date, s.time_slot.start_time) for s in model.schedules] == [
            (date(2024, 6, 1), "09:00"),
            (date(2024, 6, 1), "09:30"),
            (date(2024, 6, 5), "09:00"),
        ]

    def test_empty_report_still_rendered(self, service, renderer):
        report = service.build_schedule_report(branch_code="B1")

        assert base64.b64decode(report.report) == renderer.payload
        assert self._codes(renderer) == []
