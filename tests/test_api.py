from app import crud, schemas
from app.models.user import UserRole
from tests.conftest import API, auth_headers, event_payload


class TestAuth:
    def test_register_then_duplicate(self, client):
        body = {"name": "Jane Doe", "email": "a@b.com", "password": "password123"}
        response = client.post(f"{API}/auth/register", json=body)
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "a@b.com"
        assert data["role"] == "user"
        assert "password" not in data

        response = client.post(f"{API}/auth/register", json={**body, "email": "A@B.com"})
        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_register_invalid_email(self, client):
        body = {"name": "Jane Doe", "email": "nope", "password": "password123"}
        response = client.post(f"{API}/auth/register", json=body)
        assert response.status_code == 400
        assert response.json()["field"] == "email"

    def test_register_missing_field(self, client):
        response = client.post(f"{API}/auth/register", json={"name": "Jane Doe"})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_login_and_me(self, client, user):
        response = client.post(
            f"{API}/auth/login",
            data={"username": "USER@example.com", "password": "password123"},
        )
        assert response.status_code == 200
        token = response.json()["access_token"]
        assert response.json()["role"] == "user"

        response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["id"] == user.id

    def test_login_wrong_password(self, client, user):
        response = client.post(
            f"{API}/auth/login",
            data={"username": "user@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_me_requires_token(self, client):
        assert client.get(f"{API}/auth/me").status_code == 401

    def test_bad_token(self, client):
        response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401


class TestProfile:
    def test_update_profile(self, client, user):
        response = client.patch(
            f"{API}/profile/",
            json={"name": "New Name", "email": "New@Example.com"},
            headers=auth_headers(user),
        )
        assert response.status_code == 200
        assert response.json()["email"] == "new@example.com"
        assert response.json()["name"] == "New Name"

    def test_email_taken_by_another_user(self, client, user, admin):
        response = client.patch(
            f"{API}/profile/",
            json={"name": "Regular User", "email": admin.email},
            headers=auth_headers(user),
        )
        assert response.status_code == 409


class TestEvents:
    def test_create_event_as_admin(self, client, admin):
        response = client.post(
            f"{API}/events/",
            json=event_payload(title="My Amazing Event!", time="2:30 PM"),
            headers=auth_headers(admin),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "my-amazing-event"
        assert data["time"] == "14:30"
        assert data["mode"] == "offline"

    def test_duplicate_title_conflicts(self, client, admin):
        client.post(f"{API}/events/", json=event_payload(title="My Amazing Event!"), headers=auth_headers(admin))
        response = client.post(
            f"{API}/events/", json=event_payload(title="my amazing event"), headers=auth_headers(admin)
        )
        assert response.status_code == 409

    def test_create_event_requires_admin(self, client, user):
        response = client.post(f"{API}/events/", json=event_payload(), headers=auth_headers(user))
        assert response.status_code == 403
        assert client.post(f"{API}/events/", json=event_payload()).status_code == 401

    def test_invalid_time_rejected(self, client, admin):
        response = client.post(
            f"{API}/events/", json=event_payload(time="25:00"), headers=auth_headers(admin)
        )
        assert response.status_code == 400
        assert response.json()["field"] == "time"

    def test_get_event_by_slug(self, client, make_event):
        make_event(title="Data Day")
        response = client.get(f"{API}/events/data-day")
        assert response.status_code == 200
        assert response.json()["title"] == "Data Day"

    def test_missing_and_malformed_slugs(self, client):
        assert client.get(f"{API}/events/no-such-event").status_code == 404
        response = client.get(f"{API}/events/Bad_Slug")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid slug format"

    def test_list_events_newest_first(self, client, make_event):
        make_event(title="First Event")
        make_event(title="Second Event")
        slugs = [e["slug"] for e in client.get(f"{API}/events/").json()]
        assert slugs == ["second-event", "first-event"]

    def test_update_title_regenerates_slug(self, client, admin, make_event):
        make_event(title="Data Day")
        response = client.put(
            f"{API}/events/data-day", json={"title": "Data Night"}, headers=auth_headers(admin)
        )
        assert response.status_code == 200
        assert response.json()["slug"] == "data-night"
        assert client.get(f"{API}/events/data-day").status_code == 404

    def test_similar_events_share_a_tag(self, client, make_event):
        make_event(title="Python Day", tags=["python", "web"])
        make_event(title="Django Night", tags=["web"])
        make_event(title="Rust Meetup", tags=["rust"])
        response = client.get(f"{API}/events/python-day/similar")
        assert [e["slug"] for e in response.json()] == ["django-night"]

    def test_similar_events_newest_first_and_limited(self, db, make_event):
        source = make_event(title="Python Day", tags=["python"])
        for n in range(4):
            make_event(title=f"Python Meetup {n}", tags=["python", "meetup"])
        similar = crud.event.get_similar(db, event=source, limit=3)
        assert [e.slug for e in similar] == ["python-meetup-3", "python-meetup-2", "python-meetup-1"]

    def test_similar_events_without_matches(self, db, make_event):
        source = make_event(title="Rust Meetup", tags=["rust"])
        make_event(title="Go Meetup", tags=["go"])
        assert crud.event.get_similar(db, event=source) == []

    def test_delete_event(self, db, client, admin, make_event):
        event = make_event()
        crud.booking.create(db, obj_in=schemas.BookingCreate(event_id=event.id, email="a@example.com"))

        response = client.delete(f"{API}/events/{event.slug}", headers=auth_headers(admin))
        assert response.status_code == 409
        assert "1 booking." in response.json()["detail"]

        booking = crud.booking.get_by_event(db, event_id=event.id)[0]
        crud.booking.remove(db, id=booking.id)
        response = client.delete(f"{API}/events/{event.slug}", headers=auth_headers(admin))
        assert response.status_code == 200
        assert client.get(f"{API}/events/{event.slug}").status_code == 404


class TestBookings:
    def test_anonymous_booking(self, client, make_event):
        event = make_event()
        response = client.post(f"{API}/bookings/", json={"event_id": event.id, "email": "Guest@Example.com"})
        assert response.status_code == 201
        assert response.json()["email"] == "guest@example.com"
        assert response.json()["user_id"] is None

    def test_duplicate_booking(self, client, make_event):
        event = make_event()
        body = {"event_id": event.id, "email": "guest@example.com"}
        assert client.post(f"{API}/bookings/", json=body).status_code == 201
        response = client.post(f"{API}/bookings/", json={**body, "email": "GUEST@example.com"})
        assert response.status_code == 409

    def test_booking_unknown_event(self, client):
        response = client.post(f"{API}/bookings/", json={"event_id": 999, "email": "guest@example.com"})
        assert response.status_code == 400
        assert response.json()["field"] == "event_id"

    def test_signed_in_booking_and_listing(self, client, user, make_event):
        event = make_event()
        response = client.post(
            f"{API}/bookings/",
            json={"event_id": event.id, "email": user.email},
            headers=auth_headers(user),
        )
        assert response.json()["user_id"] == user.id

        response = client.get(f"{API}/bookings/user/{user.id}", headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()[0]["event"]["slug"] == event.slug

    def test_cannot_view_other_users_bookings(self, client, user, admin):
        response = client.get(f"{API}/bookings/user/{admin.id}", headers=auth_headers(user))
        assert response.status_code == 403
        response = client.get(f"{API}/bookings/user/{user.id}", headers=auth_headers(admin))
        assert response.status_code == 200

    def test_cancel_booking(self, client, make_user, make_event):
        owner = make_user(email="owner@example.com")
        other = make_user(email="other@example.com")
        event = make_event()
        booking_id = client.post(
            f"{API}/bookings/",
            json={"event_id": event.id, "email": owner.email},
            headers=auth_headers(owner),
        ).json()["id"]

        response = client.delete(f"{API}/bookings/{booking_id}", headers=auth_headers(other))
        assert response.status_code == 403
        response = client.delete(f"{API}/bookings/{booking_id}", headers=auth_headers(owner))
        assert response.status_code == 200
        response = client.delete(f"{API}/bookings/{booking_id}", headers=auth_headers(owner))
        assert response.status_code == 404

    def test_admin_lists_all_bookings(self, client, user, admin, make_event):
        event = make_event()
        client.post(f"{API}/bookings/", json={"event_id": event.id, "email": "guest@example.com"})
        assert client.get(f"{API}/bookings/", headers=auth_headers(user)).status_code == 403
        response = client.get(f"{API}/bookings/", headers=auth_headers(admin))
        assert response.status_code == 200
        assert len(response.json()) == 1


class TestRoles:
    def test_admin_promotes_user(self, client, user, admin):
        response = client.patch(
            f"{API}/users/{user.id}/role", json={"role": "admin"}, headers=auth_headers(admin)
        )
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    def test_user_cannot_change_roles(self, client, user, admin):
        response = client.patch(
            f"{API}/users/{admin.id}/role", json={"role": "user"}, headers=auth_headers(user)
        )
        assert response.status_code == 403

    def test_admin_cannot_demote_self(self, client, admin, make_user):
        make_user(email="second-admin@example.com", role=UserRole.ADMIN)
        response = client.patch(
            f"{API}/users/{admin.id}/role", json={"role": "user"}, headers=auth_headers(admin)
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "You cannot remove your own admin role"

    def test_demote_other_admin(self, client, admin, make_user):
        other = make_user(email="second-admin@example.com", role=UserRole.ADMIN)
        response = client.patch(
            f"{API}/users/{other.id}/role", json={"role": "user"}, headers=auth_headers(admin)
        )
        assert response.status_code == 200
        assert response.json()["role"] == "user"

    def test_invalid_role_value(self, client, user, admin):
        response = client.patch(
            f"{API}/users/{user.id}/role", json={"role": "owner"}, headers=auth_headers(admin)
        )
        assert response.status_code == 400

    def test_unknown_user(self, client, admin):
        response = client.patch(
            f"{API}/users/999/role", json={"role": "admin"}, headers=auth_headers(admin)
        )
        assert response.status_code == 404

    def test_demoted_admin_loses_access_immediately(self, db, client, admin, make_user):
        other = make_user(email="second-admin@example.com", role=UserRole.ADMIN)
        token_headers = auth_headers(other)
        client.patch(f"{API}/users/{other.id}/role", json={"role": "user"}, headers=auth_headers(admin))
        assert client.get(f"{API}/users/", headers=token_headers).status_code == 403


class TestStats:
    def test_stats_require_admin(self, client, user):
        assert client.get(f"{API}/stats/overview", headers=auth_headers(user)).status_code == 403

    def test_dashboard(self, client, admin, make_event):
        upcoming = make_event(title="Future Event", date="2099-01-01", mode="online")
        make_event(title="Past Event", date="2001-01-01")
        client.post(f"{API}/bookings/", json={"event_id": upcoming.id, "email": "guest@example.com"})
        headers = auth_headers(admin)

        overview = client.get(f"{API}/stats/overview", headers=headers).json()
        assert overview == {"total_events": 2, "total_bookings": 1, "total_users": 1}

        popular = client.get(f"{API}/stats/popular-events", headers=headers).json()
        assert popular[0]["slug"] == "future-event"
        assert popular[0]["booking_count"] == 1
        assert popular[1]["booking_count"] == 0

        soon = client.get(f"{API}/stats/upcoming-events", headers=headers).json()
        assert [e["slug"] for e in soon] == ["future-event"]

        recent = client.get(f"{API}/stats/recent-bookings", headers=headers).json()
        assert recent[0]["event"]["slug"] == "future-event"
        assert recent[0]["user"] is None

        growth = client.get(f"{API}/stats/growth", headers=headers).json()
        assert growth["bookings"] == {"weekly": 1, "monthly": 1}
        assert growth["users"]["weekly"] == 1

        events = client.get(f"{API}/stats/events", headers=headers).json()
        assert events["upcoming"] == 1
        assert events["past"] == 1
        assert events["by_mode"]["online"] == 1


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "x-process-time" in response.headers
