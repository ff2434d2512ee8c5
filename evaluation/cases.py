# Labelled conversations for intent-classification evaluation.
# "messages" is the request history; only the last user turn is classified.
EVAL_CASES = [
    {
        "id": "crisis_en",
        "messages": [{"role": "user", "content": "I want to die"}],
        "expected_intent": "crisis",
        "expected_language": "en",
    },
    {
        "id": "crisis_es",
        "messages": [{"role": "user", "content": "Estoy pensando en quitarme la vida"}],
        "expected_intent": "crisis",
        "expected_language": "es",
    },
    {
        "id": "crisis_beats_start",
        "messages": [{"role": "user", "content": "play something, I want to hurt myself"}],
        "expected_intent": "crisis",
        "expected_language": "en",
    },
    {
        "id": "library_en",
        "messages": [{"role": "user", "content": "Show me the library"}],
        "expected_intent": "library_request",
        "expected_language": "en",
    },
    {
        "id": "library_es",
        "messages": [{"role": "user", "content": "¿Qué tienes en la biblioteca?"}],
        "expected_intent": "library_request",
        "expected_language": "es",
    },
    {
        "id": "help_en",
        "messages": [{"role": "user", "content": "help"}],
        "expected_intent": "help_request",
        "expected_language": "en",
    },
    {
        "id": "help_es",
        "messages": [{"role": "user", "content": "necesito ayuda"}],
        "expected_intent": "help_request",
        "expected_language": "es",
    },
    {
        "id": "decline_en",
        "messages": [{"role": "user", "content": "not now, I just want to talk"}],
        "expected_intent": "decline_or_talk_only",
        "expected_language": "en",
    },
    {
        "id": "decline_es",
        "messages": [{"role": "user", "content": "ahora no, gracias"}],
        "expected_intent": "decline_or_talk_only",
        "expected_language": "es",
    },
    {
        "id": "bare_english",
        "messages": [{"role": "user", "content": "english"}],
        "expected_intent": "start_practice",
        "expected_language": "en",
    },
    {
        "id": "bare_espanol",
        "messages": [{"role": "user", "content": "Español"}],
        "expected_intent": "start_practice",
        "expected_language": "es",
    },
    {
        "id": "start_keyword_es",
        "messages": [{"role": "user", "content": "reproduce la meditación"}],
        "expected_intent": "start_practice",
        "expected_language": "es",
    },
    {
        "id": "affirmation_after_invitation",
        "messages": [
            {"role": "user", "content": "I feel anxious"},
            {
                "role": "assistant",
                "content": "I hear you. Would you like to try a 3-minute Calm Breath? Just say “yes”, "
                           "or pick “english” or “español”.",
            },
            {"role": "user", "content": "yes"},
        ],
        "expected_intent": "start_practice",
        "expected_language": "en",
    },
    {
        "id": "affirmation_without_invitation",
        "messages": [{"role": "user", "content": "yes"}],
        "expected_intent": "unclassified",
        "expected_language": "en",
    },
    {
        "id": "smalltalk_es",
        "messages": [{"role": "user", "content": "hola, estoy cansada"}],
        "expected_intent": "unclassified",
        "expected_language": "es",
    },
    {
        "id": "empty_history",
        "messages": [],
        "expected_intent": "unclassified",
        "expected_language": "en",
    },
]
