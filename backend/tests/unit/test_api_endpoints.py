"""
Tests for the HTTP API
Runs the real app (lifespan included) against a SQLite file
"""
import pytest
from fastapi.testclient import TestClient

from rapiddial.core.config import Settings
from rapiddial.main import create_app


@pytest.fixture
def client(database_url, add_prospect, add_field_rep):
    add_field_rep("rep-1", territory="Miami", home_lat=25.80, home_lng=-80.20)
    add_field_rep("rep-nohome", territory="Miami")
    add_prospect("p1", territory="Miami", business_name="Sunrise Chiropractic",
                 specialty="Chiropractor", address_lat=25.70, address_lng=-80.30)
    add_prospect("p2", territory="Miami", business_name="Bayfront Dental",
                 specialty="Dental", address_lat=25.90, address_lng=-80.10)
    add_prospect("p3", territory="Tampa", business_name="Gulf Medical",
                 specialty="Medical", address_lat=27.90, address_lng=-82.50)

    settings = Settings(
        environment="test",
        database_url=database_url,
        redis_url=None,
        supabase_url=None,
        supabase_service_key=None,
        twilio_account_sid=None,
        twilio_auth_token=None,
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client


class TestCallingListEndpoint:
    """Tests for /api/v1/calling-list"""

    def test_routed_list(self, client):
        response = client.get("/api/v1/calling-list/rep-1")

        assert response.status_code == 200
        data = response.json()
        assert data["fieldRepId"] == "rep-1"
        assert data["territory"] == "Miami"
        assert data["count"] == 2
        assert sorted(p["id"] for p in data["prospects"]) == ["p1", "p2"]
        assert data["prospects"][0]["businessName"]
        assert data["estimatedDriveMinutes"] > 0

    def test_rep_without_home_gets_priority_order(self, client):
        response = client.get("/api/v1/calling-list/rep-nohome")

        data = response.json()
        assert [p["id"] for p in data["prospects"]] == ["p1", "p2"]
        assert data["estimatedDriveMinutes"] is None

    def test_unknown_rep_is_404(self, client):
        response = client.get("/api/v1/calling-list/ghost")
        assert response.status_code == 404

    def test_recalculate_priorities(self, client):
        response = client.post("/api/v1/calling-list/recalculate-priorities", json={"territory": "Miami"})

        assert response.status_code == 200
        assert response.json() == {"updated": 2}


class TestWebhookEndpoints:
    """Tests for /api/v1/webhooks/twilio"""

    def test_form_encoded_status(self, client):
        response = client.post(
            "/api/v1/webhooks/twilio/status",
            data={"CallSid": "CA1", "CallStatus": "ringing", "To": "+13055550100"},
        )

        assert response.status_code == 200
        assert response.json() == {"callKey": "CA1", "status": "ringing"}

    def test_json_status_with_parent(self, client):
        response = client.post(
            "/api/v1/webhooks/twilio/status",
            json={"CallSid": "CA-child", "ParentCallSid": "CA-parent", "CallStatus": "in-progress"},
        )

        assert response.json() == {"callKey": "CA-parent", "status": "in-progress"}

    def test_status_side_channel_query(self, client):
        client.post(
            "/api/v1/webhooks/twilio/status?prospectId=p1&callerId=alice",
            data={"CallSid": "CA2", "CallStatus": "initiated"},
        )

        call = client.get("/api/v1/calls/CA2").json()
        assert call["prospectId"] == "p1"
        assert call["callerId"] == "alice"
        assert call["prospectBusinessName"] == "Sunrise Chiropractic"

    def test_missing_call_sid_is_400(self, client):
        response = client.post("/api/v1/webhooks/twilio/status", data={"CallStatus": "ringing"})
        assert response.status_code == 400

    def test_malformed_json_is_400(self, client):
        response = client.post(
            "/api/v1/webhooks/twilio/status",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Malformed JSON body"

    def test_recording_without_archive(self, client):
        response = client.post(
            "/api/v1/webhooks/twilio/recording",
            data={"CallSid": "CA3", "RecordingUrl": "https://api.twilio.com/rec/RE1", "RecordingDuration": "42"},
        )

        assert response.status_code == 200
        call = client.get("/api/v1/calls/CA3").json()
        assert call["recordingUrl"] == "https://api.twilio.com/rec/RE1"
        assert call["durationSeconds"] == 42
        assert call["outcome"] == "Call completed"


class TestCallEndpoints:
    """Tests for /api/v1/calls"""

    def test_outcome_flow(self, client):
        initiated = client.post(
            "/api/v1/calls/initiated",
            json={"callSid": "CA10", "prospectId": "p1", "callerId": "alice"},
        )
        assert initiated.status_code == 200
        assert initiated.json()["status"] == "initiated"

        response = client.post(
            "/api/v1/calls/outcome",
            json={"prospectId": "p1", "callerId": "alice", "outcome": "Booked", "notes": "Tue 10am"},
        )

        assert response.status_code == 200
        assert response.json() == {"status": "recorded"}
        call = client.get("/api/v1/calls/CA10").json()
        assert call["outcome"] == "Booked"
        assert call["notes"] == "Tue 10am"

    def test_outcome_without_call_is_409(self, client):
        response = client.post(
            "/api/v1/calls/outcome",
            json={"prospectId": "p2", "callerId": "alice", "outcome": "Booked"},
        )
        assert response.status_code == 409

    def test_outcome_with_blank_caller_is_400(self, client):
        response = client.post(
            "/api/v1/calls/outcome",
            json={"prospectId": "p2", "callerId": "", "outcome": "Booked"},
        )
        assert response.status_code == 400

    def test_list_calls(self, client):
        for sid in ("CA20", "CA21", "CA22"):
            client.post("/api/v1/calls/initiated", json={"callSid": sid, "prospectId": "p2", "callerId": "bob"})

        response = client.get("/api/v1/calls", params={"limit": 2, "search": "bayfront"})

        data = response.json()
        assert data["total"] == 3
        assert data["limit"] == 2
        assert data["offset"] == 0
        assert len(data["items"]) == 2
        assert data["items"][0]["prospectBusinessName"] == "Bayfront Dental"

    def test_unknown_call_is_404(self, client):
        assert client.get("/api/v1/calls/CA-missing").status_code == 404


class TestCallOutcomeEndpoints:
    """Tests for /api/v1/call-outcomes"""

    def test_defaults_seeded_on_startup(self, client):
        labels = [o["label"] for o in client.get("/api/v1/call-outcomes").json()]
        assert labels[0] == "Booked"
        assert len(labels) == 7

    def test_create_update_delete(self, client):
        created = client.post("/api/v1/call-outcomes", json={
            "label": "Voicemail", "bg_color": "bg-slate-100", "text_color": "text-slate-700", "sort_order": 8,
        })
        assert created.status_code == 201
        outcome_id = created.json()["id"]

        patched = client.patch(f"/api/v1/call-outcomes/{outcome_id}", json={"label": "Left voicemail"})
        assert patched.json()["label"] == "Left voicemail"

        assert client.delete(f"/api/v1/call-outcomes/{outcome_id}").status_code == 204
        assert client.delete(f"/api/v1/call-outcomes/{outcome_id}").status_code == 404

    def test_duplicate_label_is_400(self, client):
        response = client.post("/api/v1/call-outcomes", json={
            "label": "Booked", "bg_color": "bg-x", "text_color": "text-x",
        })
        assert response.status_code == 400


class TestHealthEndpoints:
    """Tests for / and /health"""

    def test_root(self, client):
        assert client.get("/").json() == {"message": "RapidDial API", "status": "running"}

    def test_health_reports_database_and_cache(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["cache_enabled"] is False
