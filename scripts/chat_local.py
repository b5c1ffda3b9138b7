#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no parent bot).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable conversation id for the session
- Sends your typed messages through the same HandleIncomingActivityUseCase
- Prints every outbound activity (messages, traces, end of conversation)
"""

from __future__ import annotations

import json
import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from travel_skill.domain.entities.activity import Activity, ActivityTypes
from travel_skill.wiring.dependencies import get_container


def _print_header(conversation_id: str) -> None:
    print("\nLocal Skill Harness")
    print("-" * 60)
    print(f"conversation_id: {conversation_id}")
    print("Type your message and press Enter.")
    print("Commands: /event <Name> [json], /end, /traces, /new, /quit, /help")
    print("-" * 60)


def _parse_command(user_text: str, conversation_id: str) -> Activity:
    if user_text.startswith("/event"):
        parts = user_text.split(maxsplit=2)
        name = parts[1] if len(parts) > 1 else ""
        value = json.loads(parts[2]) if len(parts) > 2 else None
        return Activity(type=ActivityTypes.EVENT, conversation_id=conversation_id, name=name, value=value)
    if user_text == "/end":
        return Activity(type=ActivityTypes.END_OF_CONVERSATION, conversation_id=conversation_id)
    return Activity(type=ActivityTypes.MESSAGE, conversation_id=conversation_id, text=user_text)


def _print_activity(activity: Activity, show_traces: bool) -> None:
    if activity.type == ActivityTypes.TRACE:
        if show_traces:
            print(f"(trace) {activity.name}: {activity.label}")
        return
    if activity.type == ActivityTypes.END_OF_CONVERSATION:
        value = json.dumps(activity.value) if activity.value is not None else ""
        print(f"(endOfConversation) code={activity.code} {value} {activity.text or ''}".rstrip())
        return
    print(f"(bot, {activity.input_hint}) {activity.text}")


def main() -> None:
    # Stable conversation id; can override via env or /new
    conversation_id = os.getenv("CHAT_CONVERSATION_ID", "local_user_1")
    container = get_container()
    use_case = container["use_case"]
    show_traces = False
    _print_header(conversation_id)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /event <Name> [json] -> send an event activity, e.g. /event BookFlight {\"destination\": \"Paris\"}")
            print("  /end    -> send endOfConversation as the parent bot would")
            print("  /traces -> toggle printing of trace activities")
            print("  /new    -> start a new conversation id")
            print("  /quit   -> exit")
            continue
        if cmd == "/traces":
            show_traces = not show_traces
            print(f"traces: {'on' if show_traces else 'off'}")
            continue
        if cmd == "/new":
            conversation_id = f"local_user_{int(time.time())}"
            print(f"New conversation_id: {conversation_id}")
            continue

        try:
            activity = _parse_command(user_text, conversation_id)
        except json.JSONDecodeError as e:
            print(f"ERROR: event value is not JSON: {e}")
            continue

        for response in use_case.handle(activity):
            _print_activity(response, show_traces)

        print("-" * 60)


if __name__ == "__main__":
    main()
