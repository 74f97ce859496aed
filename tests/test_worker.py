from datetime import date, datetime, timedelta

from beautyboosters.models_booking import Booking, BookingReminder, BoosterBookingRequest
from beautyboosters.worker import REMINDER_TYPE, WorkerSettings, expire_booking_requests, queue_booking_reminders

NOW = datetime(2026, 3, 10, 9, 0)


def add_booking(db, day: date, time: str, status="confirmed", booster=None) -> Booking:
    booking = Booking(
        customer_email="kunde@example.com",
        customer_name="Kunde",
        service_name="Bryllupsmakeup",
        booster_id=booster.id if booster else None,
        booster_name=booster.name if booster else None,
        booking_date=day,
        booking_time=time,
        amount=1999,
        status=status,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


class TestExpireRequests:
    def test_only_pending_past_deadline_expire(self, db, booster):
        booking = add_booking(db, date(2026, 3, 12), "10:00", status="pending_assignment")
        stale = BoosterBookingRequest(booking_id=booking.id, booster_id=booster.id, expires_at=NOW - timedelta(minutes=1))
        fresh = BoosterBookingRequest(booking_id=booking.id, booster_id=booster.id, expires_at=NOW + timedelta(hours=1))
        answered = BoosterBookingRequest(
            booking_id=booking.id, booster_id=booster.id, expires_at=NOW - timedelta(hours=1), status="accepted"
        )
        db.add_all([stale, fresh, answered])
        db.commit()

        assert expire_booking_requests(db, NOW) == 1

        db.expire_all()
        assert [stale.status, fresh.status, answered.status] == ["expired", "pending", "accepted"]
        assert expire_booking_requests(db, NOW) == 0


class TestQueueReminders:
    def test_queues_bookings_inside_lead_window(self, db, booster):
        soon = add_booking(db, date(2026, 3, 11), "08:00", booster=booster)
        add_booking(db, date(2026, 3, 11), "10:00")  # 25 hours out
        add_booking(db, date(2026, 3, 10), "08:00")  # already started
        add_booking(db, date(2026, 3, 10), "15:00", status="cancelled")

        assert queue_booking_reminders(db, NOW, lead_hours=24) == 1

        reminder = db.query(BookingReminder).one()
        assert reminder.booking_id == soon.id
        assert reminder.type == REMINDER_TYPE
        assert reminder.email == "kunde@example.com"
        assert reminder.payload["booster_name"] == booster.name
        assert reminder.payload["booking_time"] == "08:00"
        assert reminder.scheduled_at == NOW

    def test_booking_entering_window_is_due_immediately(self, db):
        booking = add_booking(db, date(2026, 3, 10), "18:00")
        assert queue_booking_reminders(db, NOW, lead_hours=2) == 0

        later = NOW.replace(hour=16, minute=30)
        assert queue_booking_reminders(db, later, lead_hours=2) == 1
        reminder = db.query(BookingReminder).one()
        assert reminder.booking_id == booking.id
        assert reminder.scheduled_at == later

    def test_running_twice_queues_once(self, db):
        add_booking(db, date(2026, 3, 10), "12:00")
        assert queue_booking_reminders(db, NOW) == 1
        assert queue_booking_reminders(db, NOW + timedelta(minutes=30)) == 0
        assert db.query(BookingReminder).count() == 1

    def test_nothing_to_do(self, db):
        assert queue_booking_reminders(db, NOW) == 0


def test_worker_registers_cron_jobs():
    names = {job.name for job in WorkerSettings.cron_jobs}
    assert any("expire_booking_requests" in name for name in names)
    assert any("queue_booking_reminders" in name for name in names)
