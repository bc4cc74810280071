class TestRsvpAPI:
    async def test_no_response_yet(self, client, earnings_event):
        response = await client.get(f"/api/v1/events/{earnings_event.id}/response")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": None, "error": None}

    async def test_respond_then_change(self, client, earnings_event):
        url = f"/api/v1/events/{earnings_event.id}/response"

        accepted = await client.put(url, json={"status": "accepted", "notes": "Joining"})
        declined = await client.put(url, json={"status": "declined"})

        assert accepted.status_code == 200
        assert accepted.json()["data"]["color_code"] == "green"
        data = declined.json()["data"]
        assert data["id"] == accepted.json()["data"]["id"]
        assert data["response_status"] == "declined"
        assert data["color_code"] == "yellow"
        assert data["response_label"] == "Not Attending"
        assert data["color_hex"] == "#ffc107"
        assert data["notes"] == "Joining"

        current = await client.get(url)
        assert current.json()["data"]["response_status"] == "declined"

    async def test_response_shows_in_calendar(
        self, client, software_subscription, earnings_event
    ):
        await client.put(
            f"/api/v1/events/{earnings_event.id}/response", json={"status": "accepted"}
        )

        response = await client.get(
            "/api/v1/events",
            params={"start": "2024-12-15T00:00:00", "end": "2024-12-15T23:59:59"},
        )

        (event,) = response.json()["data"]["events"]
        assert event["rsvp_status"] == "accepted"
        assert event["color_code"] == "green"
        assert event["rsvp_label"] == "Attending"
        assert event["color_hex"] == "#28a745"
        assert event["user_response"]["response_status"] == "accepted"
        assert [a["full_name"] for a in event["attendees"]] == ["Ada Analyst"]

    async def test_invalid_status(self, client, earnings_event):
        response = await client.put(
            f"/api/v1/events/{earnings_event.id}/response", json={"status": "maybe"}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert "maybe" in body["error"]["message"]

    async def test_missing_body(self, client, earnings_event):
        response = await client.put(f"/api/v1/events/{earnings_event.id}/response")

        assert response.status_code == 422

    async def test_unknown_event(self, client):
        response = await client.put(
            "/api/v1/events/999999/response", json={"status": "accepted"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EVENT_NOT_FOUND"

    async def test_remove_response(self, client, earnings_event):
        url = f"/api/v1/events/{earnings_event.id}/response"
        await client.put(url, json={"status": "pending"})

        removed = await client.delete(url)
        missing = await client.delete(url)

        assert removed.status_code == 200
        assert removed.json()["data"] == {"message": "Response removed"}
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "RESPONSE_NOT_FOUND"
