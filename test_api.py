#!/usr/bin/env python3
"""Smoke test script for a running skill (uvicorn travel_skill.main:app --port 8001)."""

import json
import sys
import uuid

import httpx


BASE_URL = "http://127.0.0.1:8001"
CALLER_ID = "local-parent-bot"


def post_activity(activity: dict) -> list[dict]:
    response = httpx.post(
        f"{BASE_URL}/api/messages",
        json=activity,
        headers={"X-Caller-Id": CALLER_ID},
        timeout=30.0,
    )
    response.raise_for_status()
    return response.json()["activities"]


def print_activities(activities: list[dict]) -> None:
    for activity in activities:
        if activity["type"] == "trace":
            continue
        if activity["type"] == "endOfConversation":
            print(f"  <- endOfConversation code={activity.get('code')} value={json.dumps(activity.get('value'))}")
        else:
            print(f"  <- {activity.get('text')}")


def test_booking_flow() -> bool:
    """Drive a full booking through the event entry point."""
    print("=" * 60)
    print("Testing POST /api/messages (BookFlight event)")
    print("=" * 60)

    conversation = {"id": f"smoke-{uuid.uuid4()}"}
    turns = [
        {"type": "event", "name": "BookFlight", "value": {"destination": "Paris"}, "conversation": conversation},
        {"type": "message", "text": "Seattle", "conversation": conversation},
        {"type": "message", "text": "2024-09-01", "conversation": conversation},
        {"type": "message", "text": "yes", "conversation": conversation},
    ]

    try:
        last: list[dict] = []
        for turn in turns:
            print(f"  -> {turn.get('text') or turn.get('name')}")
            last = post_activity(turn)
            print_activities(last)
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except Exception as e:
        print(f"❌ Error: {e}")
        return False

    eoc = [a for a in last if a["type"] == "endOfConversation"]
    if not eoc or eoc[0].get("code") != "completedSuccessfully":
        print("❌ Booking did not complete")
        return False

    print("✅ Booking completed")
    return True


def main():
    ok = test_booking_flow()
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
