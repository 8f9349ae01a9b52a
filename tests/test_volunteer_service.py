from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from volunteer_hub.exceptions import (
    ConcurrentUpdateError, ConflictError, FormatError, NotFoundError, PermissionDeniedError,
)
from volunteer_hub.models import Event, Organization, User, UserStatus
from volunteer_hub.scheduling.core.ledger import ledger
from volunteer_hub.services import volunteer_service

EVENT_DATE = date(2024, 1, 5)


def create(db, start="9:00", end="12:00", count=3, name="Food drive", event_date=EVENT_DATE):
    result = volunteer_service.create_event(
        db, name, event_date, start, end, "Community hall", "Sorting donations", count, 100
    )
    return db.query(Event).filter(Event.id == result.event.id).one()


class TestCreateEvent:

    def test_creates_partitioned_event(self, db):
        result = volunteer_service.create_event(
            db, "Food drive", EVENT_DATE, "09:00", "12:00", "Hall", None, 3, 250
        )

        assert result.success
        assert result.notification == "successCreated"
        event = db.query(Event).one()
        assert len(event.id) == 24
        assert event.start_time == "9:00"
        assert event.end_time == "12:00"
        assert event.slots == [
            f"{event.id} 9:00 A.M. - 10:00 A.M.",
            f"{event.id} 10:00 A.M. - 11:00 A.M.",
            f"{event.id} 11:00 A.M. - 12:00 P.M.",
        ]
        assert event.volunteers_needed == 3
        assert event.volunteers_attending == 0
        assert event.donations_needed == 250
        assert event.active

    def test_bad_window_is_not_created(self, db):
        with pytest.raises(FormatError) as exc_info:
            volunteer_service.create_event(db, "Backwards", EVENT_DATE, "12:00", "9:00", None, None, 3)
        assert exc_info.value.notification == "failureNotCreated"
        assert db.query(Event).count() == 0

    def test_event_detail_display(self, db):
        event = create(db, start="13:00", end="14:30")
        detail = volunteer_service.get_event_detail(event)
        assert detail.display_date == "Jan 05, 2024"
        assert detail.display_start_time == "1:00 P.M."
        assert detail.display_end_time == "2:30 P.M."


class TestReservations:

    def test_reserve_and_cancel_persist(self, db, volunteer):
        event = create(db)
        token = event.slots[0]

        result = volunteer_service.reserve_slots(db, volunteer.id, event.id, [token])
        assert result.notification == "successVolunteeredOrDonated"
        db.expire_all()
        user = db.get(User, volunteer.id)
        assert user.volunteered_time == "1:00"
        assert user.reserved_events == [event.id]
        assert user.reserved_slots[1] == f"Jan 05, 2024 {token}"
        assert db.get(Event, event.id).volunteers_attending == 1

        result = volunteer_service.cancel_slots(db, volunteer.id, event.id, [user.reserved_slots[1]])
        assert result.notification == "successCancelled"
        db.expire_all()
        user = db.get(User, volunteer.id)
        event = db.get(Event, event.id)
        assert user.volunteered_time == "0:00"
        assert user.reserved_events == []
        assert token in event.slots
        assert event.volunteers_needed == 3
        assert event.volunteers_attending == 0

    def test_conflict_leaves_database_unchanged(self, db, volunteer):
        first = create(db, start="9:00", end="10:00", count=1)
        second = create(db, start="9:30", end="10:30", count=1, name="Park cleanup")
        volunteer_service.reserve_slots(db, volunteer.id, first.id, first.slots)

        with pytest.raises(ConflictError):
            volunteer_service.reserve_slots(db, volunteer.id, second.id, second.slots)

        db.expire_all()
        assert len(db.get(Event, second.id).slots) == 1
        assert db.get(User, volunteer.id).reserved_events == [first.id]

    def test_unknown_event(self, db, volunteer):
        with pytest.raises(NotFoundError):
            volunteer_service.reserve_slots(db, volunteer.id, "f" * 24, ["x"])

    def test_unknown_user(self, db):
        event = create(db)
        with pytest.raises(NotFoundError):
            volunteer_service.reserve_slots(db, 999, event.id, event.slots[:1])

    def test_user_events_in_join_order(self, db, volunteer):
        later = create(db, event_date=date(2024, 3, 1), name="Later")
        earlier = create(db, event_date=date(2024, 2, 1), name="Earlier")
        volunteer_service.reserve_slots(db, volunteer.id, later.id, later.slots[:1])
        volunteer_service.reserve_slots(db, volunteer.id, earlier.id, earlier.slots[:1])

        events = volunteer_service.get_user_events(db, db.get(User, volunteer.id))
        assert [e.name for e in events] == ["Later", "Earlier"]

    def test_lost_update_is_reported(self, db, volunteer, monkeypatch):
        event = create(db)
        real_reserve = ledger.reserve

        def racing_reserve(user, event, tokens, on_date=None):
            # Another request commits a change to the same event first
            db.execute(
                text("UPDATE events SET version_id = version_id + 1 WHERE id = :id"),
                {"id": event.id},
            )
            return real_reserve(user, event, tokens, on_date)

        monkeypatch.setattr(ledger, "reserve", racing_reserve)

        with pytest.raises(ConcurrentUpdateError) as exc_info:
            volunteer_service.reserve_slots(db, volunteer.id, event.id, event.slots[:1])
        assert exc_info.value.status_code == 409

        db.expire_all()
        assert len(db.get(Event, event.id).slots) == 3
        assert db.get(User, volunteer.id).volunteered_time == "0:00"


class TestEventLifecycle:

    def test_cancel_and_reschedule(self, db, volunteer):
        event = create(db)

        result = volunteer_service.cancel_event(db, event.id)
        assert result.notification == "successCancelled"
        assert volunteer_service.list_events(db) == []
        with pytest.raises(PermissionDeniedError):
            volunteer_service.reserve_slots(db, volunteer.id, event.id, event.slots[:1])

        volunteer_service.reschedule_event(db, event.id)
        assert [e.id for e in volunteer_service.list_events(db)] == [event.id]
        volunteer_service.reserve_slots(db, volunteer.id, event.id, event.slots[:1])

    def test_cancelled_events_listed_for_admin(self, db):
        event = create(db)
        volunteer_service.cancel_event(db, event.id)
        assert [e.id for e in volunteer_service.list_events(db, include_inactive=True)] == [event.id]

    def test_set_user_active(self, db, volunteer):
        user = volunteer_service.set_user_active(db, volunteer.id, False)
        assert not user.is_active


class TestDonations:

    def test_donate_to_event(self, db, volunteer):
        event = create(db)
        result = volunteer_service.donate(db, volunteer.id, event.id, 30)

        assert result.notification == "successVolunteeredOrDonated"
        db.expire_all()
        assert db.get(Event, event.id).donations_received == 30
        assert db.get(Event, event.id).donations_needed == 70
        assert db.get(User, volunteer.id).status == UserStatus.DONOR

    def test_donate_to_org_creates_organization(self, db, volunteer):
        result = volunteer_service.donate_to_org(db, None, 20, user_id=volunteer.id)

        assert result.notification == "thanksForDonation"
        org = db.query(Organization).one()
        assert org.name == "Team-Aptiv-Org"
        assert org.received_donations == 20
        assert db.get(User, volunteer.id).given_donations == 20

    def test_donate_to_unknown_org(self, db):
        with pytest.raises(NotFoundError):
            volunteer_service.donate_to_org(db, "0" * 24, 20)

    def test_organization_is_created_once(self, db):
        first = volunteer_service.get_or_create_organization(db)
        second = volunteer_service.get_or_create_organization(db)
        assert first.id == second.id

    def test_organization_name_is_unique(self, db):
        volunteer_service.get_or_create_organization(db)
        db.add(Organization(name="Team-Aptiv-Org", received_donations=0))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()
        assert db.query(Organization).count() == 1

    def test_lost_creation_race_returns_existing_row(self, db, monkeypatch):
        existing = Organization(name="Team-Aptiv-Org", received_donations=7)
        db.add(existing)
        db.commit()

        # The first lookup misses, as if the other request had not committed yet
        real_find = volunteer_service._find_organization
        calls = []

        def find_after_first_miss(session):
            calls.append(session)
            return None if len(calls) == 1 else real_find(session)

        monkeypatch.setattr(volunteer_service, "_find_organization", find_after_first_miss)

        organization = volunteer_service.get_or_create_organization(db)
        assert organization.id == existing.id
        assert organization.received_donations == 7
        assert db.query(Organization).count() == 1
