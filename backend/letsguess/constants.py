"""Константы игры."""
import string

# Палитра цветов игроков, выдаётся по порядку входа в партию
COLORS: list[str] = [
    "#d32f2f", "#1976d2", "#388e3c", "#f57c00",
    "#7b1fa2", "#c2185b", "#00796b", "#5d4037",
]

GAME_ID_ALPHABET = string.ascii_lowercase + string.digits
GAME_ID_LENGTH = 6

REDACTION_GLYPH = "█"

DEFAULT_PLAYER_NAME = "Anonymous"
MAX_PLAYER_NAME_LENGTH = 32

# Разделы статьи, которые не попадают в текст игры
SKIPPED_SECTIONS = frozenset({
    "References", "External links", "See also", "Notes", "Sources",
    "Further reading", "Bibliography",
})
MIN_PARAGRAPH_LENGTH = 50
PARAGRAPHS_PER_SECTION = 2

# Ответы API, после которых имеет смысл повторить запрос
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})

FALLBACK_TITLE = "Internet"
FALLBACK_TEXT = (
    "Internet. The Internet is a global system of interconnected computer "
    "networks that uses the Internet protocol suite to communicate between "
    "networks and devices. It is a network of networks that consists of "
    "private, public, academic, business, and government networks of local "
    "to global scope, linked by a broad array of electronic, wireless, and "
    "optical networking technologies."
)
