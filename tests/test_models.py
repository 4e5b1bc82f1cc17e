import pytest

from app import crud, schemas
from app.core.errors import ConflictError, ValidationError
from app.models.booking import Booking
from app.models.event import Event, EventMode
from app.models.user import User, UserRole
from tests.conftest import event_payload


class TestUserModel:
    def test_password_is_hashed_on_create(self, db, make_user):
        user = make_user(password="password123")
        assert user.password != "password123"
        assert user.check_password("password123")
        assert not user.check_password("wrong-password")

    def test_password_not_rehashed_on_unrelated_update(self, db, user):
        stored_hash = user.password
        crud.user.update(db, db_obj=user, obj_in={"name": "Renamed User"})
        assert user.password == stored_hash
        assert user.check_password("password123")

    def test_reassigning_the_hash_is_not_a_change(self, user):
        stored_hash = user.password
        user.password = stored_hash
        assert user.password == stored_hash

    def test_changing_password_rehashes(self, db, user):
        stored_hash = user.password
        crud.user.update(db, db_obj=user, obj_in={"password": "new-password-1"})
        assert user.password != stored_hash
        assert user.check_password("new-password-1")
        assert not user.check_password("password123")

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError) as exc:
            User(name="Jane", email="jane@example.com", password="short")
        assert exc.value.field == "password"

    def test_email_is_normalized(self, make_user):
        user = make_user(email="  Jane@Example.COM ")
        assert user.email == "jane@example.com"

    def test_invalid_role_rejected(self):
        with pytest.raises(ValidationError) as exc:
            User(name="Jane", email="jane@example.com", password="password123", role="superuser")
        assert exc.value.message == "Role must be either user or admin"

    def test_default_role_is_user(self, user):
        assert user.role == UserRole.USER
        assert not user.is_admin

    def test_duplicate_email_conflicts(self, make_user):
        make_user(email="dup@example.com")
        with pytest.raises(ConflictError):
            make_user(email="DUP@example.com")

    def test_name_length(self):
        with pytest.raises(ValidationError):
            User(name="J", email="j@example.com", password="password123")


class TestEventModel:
    def test_slug_derived_from_title(self, make_event):
        event = make_event(title="  My Amazing Event! ")
        assert event.title == "My Amazing Event!"
        assert event.slug == "my-amazing-event"

    def test_date_and_time_are_normalized(self, make_event):
        event = make_event(date="June 15, 2030", time="2:30 PM")
        assert event.date == "2030-06-15"
        assert event.time == "14:30"

    def test_mode_enum(self, make_event):
        assert make_event(mode="hybrid").mode == EventMode.HYBRID
        with pytest.raises(ValidationError) as exc:
            Event(**event_payload(mode="in-person"))
        assert exc.value.field == "mode"

    def test_agenda_and_tags_cleaned(self, make_event):
        event = make_event(agenda=[" Intro ", ""], tags=["ai", " ai ", "ml"])
        assert event.agenda == ["Intro"]
        assert event.tags == ["ai", "ml"]

    def test_empty_tags_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Event(**event_payload(tags=["  "]))
        assert exc.value.field == "tags"

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            Event(**event_payload(title="x" * 101))

    def test_title_without_letters_or_digits(self):
        with pytest.raises(ValidationError):
            Event(**event_payload(title="!!!"))

    def test_slug_kept_when_title_unchanged(self, db, make_event):
        event = make_event(title="Data Day")
        crud.event.update(db, db_obj=event, obj_in={"title": "Data Day", "venue": "Hall B"})
        assert event.slug == "data-day"
        assert event.venue == "Hall B"

    def test_slug_regenerated_on_title_change(self, db, make_event):
        event = make_event(title="Data Day")
        crud.event.update(db, db_obj=event, obj_in={"title": "Data Night"})
        assert event.slug == "data-night"
        assert crud.event.get_by_slug(db, slug="data-night").id == event.id

    def test_explicit_slug_is_ignored(self, db):
        event = crud.event.create(db, obj_in={**event_payload(title="Rust Meetup"), "slug": "custom"})
        assert event.slug == "rust-meetup"

    def test_duplicate_slug_conflicts(self, make_event):
        make_event(title="My Amazing Event!")
        with pytest.raises(ConflictError) as exc:
            make_event(title="my amazing event")
        assert "duplicate slug" in exc.value.message

    def test_missing_required_field(self, db):
        payload = event_payload()
        del payload["organizer"]
        with pytest.raises(ValidationError) as exc:
            crud.event.create(db, obj_in=payload)
        assert exc.value.field == "organizer"


class TestBookingModel:
    def test_booking_normalizes_email(self, db, make_event):
        event = make_event()
        booking = crud.booking.create(
            db, obj_in=schemas.BookingCreate(event_id=event.id, email=" Guest@Example.com ")
        )
        assert booking.email == "guest@example.com"

    def test_timestamps_equal_on_creation(self, db, make_event):
        event = make_event()
        booking = crud.booking.create(
            db, obj_in=schemas.BookingCreate(event_id=event.id, email="a@example.com")
        )
        assert booking.created_at == booking.updated_at
        assert event.created_at == event.updated_at

    def test_update_moves_updated_at_forward(self, db, make_event):
        first = make_event(title="First Event")
        second = make_event(title="Second Event")
        booking = crud.booking.create(
            db, obj_in=schemas.BookingCreate(event_id=first.id, email="a@example.com")
        )
        created_at = booking.created_at
        moved = crud.booking.update_event(db, db_obj=booking, event_id=second.id)
        assert moved.created_at == created_at
        assert moved.updated_at >= moved.created_at

    def test_unknown_event_rejected(self, db):
        with pytest.raises(ValidationError) as exc:
            crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=9999, email="a@example.com"))
        assert exc.value.message == "referenced event does not exist"
        assert db.query(Booking).count() == 0

    def test_duplicate_pair_conflicts_case_insensitively(self, db, make_event):
        event = make_event()
        crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=event.id, email="a@example.com"))
        with pytest.raises(ConflictError) as exc:
            crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=event.id, email="A@Example.com"))
        assert exc.value.message == "This email has already booked this event"

    def test_same_email_can_book_another_event(self, db, make_event):
        first = make_event(title="First Event")
        second = make_event(title="Second Event")
        crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=first.id, email="a@example.com"))
        crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=second.id, email="a@example.com"))
        assert db.query(Booking).count() == 2

    def test_moving_booking_to_missing_event_rejected(self, db, make_event):
        event = make_event()
        booking = crud.booking.create(
            db, obj_in=schemas.BookingCreate(event_id=event.id, email="a@example.com")
        )
        with pytest.raises(ValidationError):
            crud.booking.update_event(db, db_obj=booking, event_id=4242)
        db.expire_all()
        assert crud.booking.get(db, booking.id).event_id == event.id

    def test_moving_booking_to_existing_event(self, db, make_event):
        first = make_event(title="First Event")
        second = make_event(title="Second Event")
        booking = crud.booking.create(
            db, obj_in=schemas.BookingCreate(event_id=first.id, email="a@example.com")
        )
        moved = crud.booking.update_event(db, db_obj=booking, event_id=second.id)
        assert moved.event_id == second.id

    def test_invalid_booking_email(self, db, make_event):
        event = make_event()
        with pytest.raises(ValidationError):
            crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=event.id, email="someone@localhost"))
