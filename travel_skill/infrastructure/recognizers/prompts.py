from __future__ import annotations


def build_recognize_prompt(text: str, intents: list[str], entity_categories: list[str]) -> str:
    return (
        "You are the language understanding model of a flight booking assistant.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema:\n"
        "{\n"
        "  \"topIntent\": \"...\",\n"
        "  \"intents\": [{\"category\": \"...\", \"confidenceScore\": 0.0}],\n"
        "  \"entities\": [\n"
        "    {\"category\": \"...\", \"text\": \"...\", \"confidenceScore\": 0.0,\n"
        "     \"resolutions\": [{\"resolutionKind\": \"DateTimeResolution\", \"timex\": \"...\", \"value\": \"...\"}]}\n"
        "  ]\n"
        "}\n"
        "Rules:\n"
        f"  - Score every intent in {intents}; confidenceScore is between 0 and 1.\n"
        "  - topIntent is the category with the highest confidenceScore.\n"
        f"  - Only extract entities of the categories {entity_categories}.\n"
        "  - Entity text is copied verbatim from the utterance.\n"
        "  - Destination is the city the user wants to travel to.\n"
        "  - Date is the travel date phrase; add a DateTimeResolution with a TIMEX value when you can.\n"
        "  - Use an empty entities list when nothing matches.\n"
        "\n"
        f"utterance: {text}\n"
    )
