import os
import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from olimpiadas.services import payment_service as payment_module

API = "/api/v1"
VALID_CPF = "11144477735"


def bearer(user_id: uuid.UUID, email: str) -> dict[str, str]:
    token = jwt.encode(
        {
            "sub": str(user_id),
            "email": email,
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        },
        os.environ["SUPABASE_JWT_SECRET"],
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


def test_root_health_check(client):
    assert client.get("/").json() == {"status": "ok", "service": "olimpiadas-backend"}


class TestAuth:
    def test_missing_token(self, client):
        resp = client.get(f"{API}/users/me")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Authentication required"

    def test_invalid_token(self, client):
        resp = client.get(
            f"{API}/users/me", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 401

    def test_profile_not_completed(self, client):
        headers = bearer(uuid.uuid4(), "nova@example.com")
        resp = client.get(f"{API}/users/me", headers=headers)
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Profile not completed"


class TestUsers:
    def test_create_me(self, client):
        user_id = uuid.uuid4()
        resp = client.post(
            f"{API}/users/me",
            headers=bearer(user_id, "nova@example.com"),
            json={
                "full_name": "  João Pereira ",
                "document_type": "CPF",
                "document_number": "111.444.777-35",
                "phone": "+55 (51) 99988-7766",
                "birth_date": "25/12/1990",
            },
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["id"] == str(user_id)
        assert body["email"] == "nova@example.com"
        assert body["full_name"] == "João Pereira"
        assert body["document_number"] == VALID_CPF
        assert body["document_display"] == "111.444.777-35"
        assert body["phone"] == "+5551999887766"
        assert body["birth_date"] == "1990-12-25"

    def test_create_me_invalid_cpf(self, client):
        resp = client.post(
            f"{API}/users/me",
            headers=bearer(uuid.uuid4(), "nova@example.com"),
            json={
                "full_name": "João Pereira",
                "document_number": "111.444.777-34",
                "phone": "51999887766",
                "birth_date": "1990-12-25",
            },
        )
        assert resp.status_code == 422

    def test_create_me_twice(self, client, user, user_headers):
        resp = client.post(
            f"{API}/users/me",
            headers=user_headers,
            json={
                "full_name": "Maria Silva",
                "document_number": VALID_CPF,
                "phone": "51999887766",
                "birth_date": "1990-12-25",
            },
        )
        assert resp.status_code == 409

    def test_read_and_update_me(self, client, user, user_headers):
        resp = client.patch(
            f"{API}/users/me", headers=user_headers, json={"full_name": "Maria S."}
        )
        assert resp.status_code == 200
        assert resp.json()["full_name"] == "Maria S."

        resp = client.get(f"{API}/users/me", headers=user_headers)
        assert resp.json()["full_name"] == "Maria S."

    def test_document_cannot_be_changed(self, client, user, user_headers):
        resp = client.patch(
            f"{API}/users/me", headers=user_headers, json={"document_number": "1"}
        )
        assert resp.status_code == 422


class TestNavigation:
    def test_roles_drive_the_menu(self, client, user, user_headers, event, profiles, grant):
        grant(user, profiles["ATL"])

        resp = client.get(
            f"{API}/users/me/navigation",
            headers=user_headers,
            params={"event_id": str(event.id)},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["role_codes"] == ["ATL"]
        assert body["redirect"] == "/athlete-profile"
        assert "Minhas Pontuações" in [i["label"] for i in body["items"]]

    def test_no_roles(self, client, user, user_headers, event):
        resp = client.get(
            f"{API}/users/me/navigation",
            headers=user_headers,
            params={"event_id": str(event.id)},
        )
        assert resp.json() == {"role_codes": [], "items": [], "redirect": None}


class TestEvents:
    def test_list_and_get(self, client, event):
        resp = client.get(f"{API}/events")
        assert resp.status_code == 200
        assert [e["id"] for e in resp.json()] == [str(event.id)]

        resp = client.get(f"{API}/events/{event.id}")
        assert resp.json()["name"] == event.name

    def test_unknown_event(self, client):
        assert client.get(f"{API}/events/{uuid.uuid4()}").status_code == 404


class TestRegistrations:
    def test_created_then_updated(self, client, user, user_headers, event, fees):
        url = f"{API}/events/{event.id}/registrations"

        first = client.post(url, headers=user_headers, json={"role": "PGR"})
        assert first.status_code == 201
        assert first.json()["already_existed"] is False
        assert first.json()["payment"]["identifier"] == "001"

        second = client.post(url, headers=user_headers, json={"role": "ATL"})
        assert second.status_code == 200
        body = second.json()
        assert body["already_existed"] is True
        assert body["registration"]["id"] == first.json()["registration"]["id"]
        assert body["payment"]["amount"] == 180.0

    def test_unknown_role(self, client, user, user_headers, event, fees):
        resp = client.post(
            f"{API}/events/{event.id}/registrations",
            headers=user_headers,
            json={"role": "ADM"},
        )
        assert resp.status_code == 422

    def test_missing_fee_message(self, session, client, user, user_headers, event, fees):
        session.delete(fees["ATL"])
        session.commit()

        resp = client.post(
            f"{API}/events/{event.id}/registrations",
            headers=user_headers,
            json={"role": "ATL"},
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Registration fee not found for this event"

    def test_register_dependent_and_list(self, client, user, user_headers, event, fees):
        resp = client.post(
            f"{API}/events/{event.id}/dependents",
            headers=user_headers,
            json={
                "full_name": "Pedro Silva",
                "document_type": "RG",
                "document_number": "123456789",
                "birth_date": "2021-03-04",
            },
        )
        assert resp.status_code == 201
        assert resp.json()["document_display"] == "12.345.678-9"

        resp = client.get(f"{API}/users/me/dependents", headers=user_headers)
        assert [d["full_name"] for d in resp.json()] == ["Pedro Silva"]


class TestPayments:
    def register(self, client, headers, event, role="ATL"):
        return client.post(
            f"{API}/events/{event.id}/registrations",
            headers=headers,
            json={"role": role},
        )

    def test_my_payment(self, client, user, user_headers, event, fees):
        self.register(client, user_headers, event)

        resp = client.get(f"{API}/events/{event.id}/payments/me", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == "pending"

    def test_no_payment_yet(self, client, user, user_headers, event):
        resp = client.get(f"{API}/events/{event.id}/payments/me", headers=user_headers)
        assert resp.status_code == 404

    def test_upload_proof(self, client, user, user_headers, event, fees, monkeypatch):
        self.register(client, user_headers, event)
        sent = []
        monkeypatch.setattr(
            payment_module, "upload_proof", lambda *a: "https://cdn/proof.pdf"
        )
        monkeypatch.setattr(
            payment_module, "send_payment_proof", lambda **kw: sent.append(kw)
        )

        resp = client.post(
            f"{API}/events/{event.id}/payments/me/proof",
            headers=user_headers,
            files={"file": ("pix.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert resp.status_code == 200
        assert resp.json()["proof_url"] == "https://cdn/proof.pdf"
        assert sent[0]["roles"] == ["ATL"]

    def test_staff_only_listing(self, client, user, user_headers, event, fees):
        self.register(client, user_headers, event)

        resp = client.get(f"{API}/events/{event.id}/payments", headers=user_headers)
        assert resp.status_code == 403

    def test_admin_confirms(
        self, client, user, user_headers, event, profiles, fees, make_user, grant
    ):
        self.register(client, user_headers, event)
        admin = make_user("admin@example.com", full_name="Admin")
        grant(admin, profiles["ADM"])
        admin_headers = bearer(admin.id, admin.email)

        listing = client.get(
            f"{API}/events/{event.id}/payments",
            headers=admin_headers,
            params={"status_filter": "pending"},
        )
        assert listing.status_code == 200
        payment_id = listing.json()[0]["id"]

        resp = client.patch(
            f"{API}/events/{event.id}/payments/{payment_id}/status",
            headers=admin_headers,
            json={"status": "confirmed", "validated_without_proof": True},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "confirmed"
        assert resp.json()["validated_without_proof"] is True

        resp = client.patch(
            f"{API}/events/{event.id}/payments/{payment_id}/status",
            headers=admin_headers,
            json={"status": "pending"},
        )
        assert resp.status_code == 400


class TestAdminUsers:
    def test_replace_profiles(
        self, client, user, event, profiles, make_user, grant
    ):
        admin = make_user("admin@example.com", full_name="Admin")
        grant(admin, profiles["ADM"])
        headers = bearer(admin.id, admin.email)

        resp = client.put(
            f"{API}/events/{event.id}/users/{user.id}/profiles",
            headers=headers,
            json={"profile_ids": [profiles["ATL"].id, profiles["JUZ"].id]},
        )
        assert resp.status_code == 200
        assert resp.json()["role_codes"] == ["ATL", "JUZ"]

        listing = client.get(f"{API}/events/{event.id}/users", headers=headers)
        assert {u["email"] for u in listing.json()} == {
            "admin@example.com",
            "atleta@example.com",
        }

    def test_exclusive_conflict(self, client, user, event, profiles, make_user, grant):
        admin = make_user("admin@example.com", full_name="Admin")
        grant(admin, profiles["ADM"])

        resp = client.put(
            f"{API}/events/{event.id}/users/{user.id}/profiles",
            headers=bearer(admin.id, admin.email),
            json={"profile_ids": [profiles["ATL"].id, profiles["PGR"].id]},
        )
        assert resp.status_code == 400

    def test_requires_admin(self, client, user, user_headers, event, profiles, grant):
        grant(user, profiles["ORE"])

        resp = client.get(f"{API}/events/{event.id}/users", headers=user_headers)
        assert resp.status_code == 403
