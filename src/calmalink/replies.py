"""
Bilingual reply copy.

All user-facing sentences live here so the composer renders them and the
intent router can recognise its own invitations in past assistant turns.
"""
from typing import Dict, Sequence

from .catalog import FALLBACK_LANGUAGE, PracticeRecord

CRISIS = {
    "en": (
        "I’m really sorry you’re going through this. In the U.S., call or text 988 "
        "(Suicide & Crisis Lifeline), or call 911 if this is an emergency. If you’re outside "
        "the U.S., use your local emergency number."
    ),
    "es": (
        "Siento que estés pasando por esto. En EE. UU., llama o envía un texto al 988 "
        "(Línea de Vida), o llama al 911 si es una emergencia. Si estás fuera de EE. UU., "
        "usa tu número local de emergencias."
    ),
}

HELP = {
    "en": (
        "You can say: “just talk” if you don’t want to meditate • “english” or “español” to "
        "pick a language • “play the meditation” to start • “show library” to see options. "
        "If you need urgent help, call 911 or 988 (U.S.)."
    ),
    "es": (
        "Puedes decir: “solo hablar” si no quieres meditar • “español” o “english” para elegir "
        "idioma • “reproduce la meditación” para empezar • “lista de meditaciones” para ver "
        "opciones. Si necesitas ayuda urgente, llama al 911 o al 988 en EE. UU."
    ),
}

LIBRARY_HEADER = {"en": "Current library:", "es": "Biblioteca actual:"}
LIBRARY_FOOTER = {
    "en": "More meditations are coming soon.",
    "es": "Más meditaciones llegarán pronto.",
}

LANGUAGE_NAMES = {
    "en": {"en": "English", "es": "Spanish"},
    "es": {"en": "Inglés", "es": "Español"},
}

SUPPORTIVE = {
    "en": (
        "Thanks for sharing. I’m here with you. What’s on your mind?",
        "I hear you. That sounds like a lot. Want to tell me a bit more?",
        "You’re not alone. What part feels heaviest right now?",
    ),
    "es": (
        "Gracias por compartir. Estoy aquí contigo. ¿Qué tienes en mente?",
        "Te escucho. Suena como mucho. ¿Quieres contarme un poco más?",
        "No estás solo/a. ¿Qué parte se siente más pesada ahora?",
    ),
}

# Decline acknowledgements never offer a practice.
DECLINE = {
    "en": (
        "Of course, we can just talk. What’s on your mind?",
        "That’s completely fine. I’m here to listen whenever you’re ready.",
        "No problem. Tell me whatever feels important right now.",
    ),
    "es": (
        "Claro, podemos solo conversar. ¿Qué tienes en mente?",
        "Está perfectamente bien. Estoy aquí para escucharte cuando quieras.",
        "Sin problema. Cuéntame lo que sientas importante ahora.",
    ),
}

# Lowercased prefixes that mark an invitation to start a practice.
INVITATION_MARKERS = {
    "en": "would you like to try",
    "es": "¿quieres probar",
}

# HTTP-level messages are always bilingual: the language is unknown before parsing.
METHOD_NOT_ALLOWED = "Use POST to chat. / Usa POST para chatear."
INVALID_JSON = "Invalid JSON body. / Cuerpo JSON inválido."
ORIGIN_NOT_ALLOWED = "Origin not allowed. / Origen no permitido."
MISCONFIGURED = "Server misconfigured. / El servidor no está configurado correctamente."
INTERNAL_ERROR = "Sorry, something went wrong. / Lo siento, hubo un problema."
RATE_LIMITED = "Too many messages. Please wait a moment. / Demasiados mensajes. Espera un momento."
MESSAGE_TOO_LONG = "Your message is too long. / Tu mensaje es demasiado largo."


def pick(table: Dict[str, str], language: str) -> str:
    return table.get(language) or table[FALLBACK_LANGUAGE]


def rotate(table: Dict[str, Sequence[str]], language: str, index: int) -> str:
    variants = table.get(language) or table[FALLBACK_LANGUAGE]
    return variants[index % len(variants)]


def short_title(record: PracticeRecord) -> str:
    """'Calm Breath • 3 min' -> 'Calm Breath'."""
    return record.title.split(" • ")[0].strip()


def practice_intro(record: PracticeRecord) -> str:
    if record.language == "es":
        return f"Aquí tienes tu práctica de {short_title(record)}."
    return f"Here is your {short_title(record)} practice."


def invitation(record: PracticeRecord, language: str) -> str:
    if language == "es":
        return (
            f"¿Quieres probar una {short_title(record)} de {record.duration_minutes} minutos? "
            f"Solo di “sí”, o elige “english” o “español”."
        )
    return (
        f"Would you like to try a {record.duration_minutes}-minute {short_title(record)}? "
        f"Just say “yes”, or pick “english” or “español”."
    )


def is_invitation(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in INVITATION_MARKERS.values())


def language_list(codes: Sequence[str], language: str) -> str:
    """Human list of language names: 'English & Spanish', 'Inglés y Español'."""
    table = LANGUAGE_NAMES.get(language) or LANGUAGE_NAMES[FALLBACK_LANGUAGE]
    names = [table.get(code, code.upper()) for code in codes]
    if len(names) <= 1:
        return "".join(names)
    if language == "es":
        # Spanish "y" becomes "e" before an /i/ sound.
        joiner = " e " if names[-1].lower().startswith(("i", "hi")) else " y "
    else:
        joiner = " & "
    return ", ".join(names[:-1]) + joiner + names[-1]
