"""
Constants for the Preach Point application.
Contains truly immutable values that never change across environments.
"""

# Application metadata
APP_TITLE = "Preach Point API"
APP_DESCRIPTION = "Bible passage reader with AI translation and commentary"

# Languages supported by the commentary endpoint
LANGUAGE_LABELS = {
    "en": "English",
    "af": "Afrikaans",
}
DEFAULT_LANGUAGE_LABEL = LANGUAGE_LABELS["en"]

# Commentary defaults, matching the first options of the browser UI
DEFAULT_COMMENTARY_TONE = "teaching"
DEFAULT_COMMENTARY_LEVEL = "short"

# Prompts
TRANSLATION_SYSTEM_PROMPT = "You are a precise translator."
TRANSLATION_USER_PROMPT = (
    "Translate these Bible verses into Afrikaans, preserving verse numbers:\n\n"
    "{passage}"
)
COMMENTARY_SYSTEM_PROMPT = (
    "You are Preach Point AI, an expert Bible commentary assistant."
)
COMMENTARY_USER_PROMPT = (
    "Here is the passage ({reference}):\n{passage}\n\n"
    'Now write a {language} commentary at the "{level}" level, '
    'using a "{tone}" tone.'
)

# Translation cache default expiry (24h)
TRANSLATION_CACHE_TTL_SECONDS = 24 * 60 * 60

# Testament boundaries for parsing the Gutenberg KJV text
OLD_TESTAMENT_FIRST_BOOK = "The First Book of Moses: Called Genesis"
OLD_TESTAMENT_LAST_BOOK = "Malachi"
NEW_TESTAMENT_FIRST_BOOK = "The Gospel According to Saint Matthew"
NEW_TESTAMENT_LAST_BOOK = "The Revelation of Saint John the Divine"
GUTENBERG_END_MARKER = (
    "*** END OF THE PROJECT GUTENBERG EBOOK THE KING JAMES VERSION OF THE BIBLE ***"
)

# Some Gutenberg headings differ from the table of contents entry
ALTERNATIVE_BOOK_NAMES = {
    "The First Book of Samuel": "The First Book of the Kings",
    "The Second Book of Samuel": "The Second Book of the Kings",
    "The First Book of the Kings": "The Third Book of the Kings",
    "The Second Book of the Kings": "The Fourth Book of the Kings",
    "Ecclesiastes": "The Preacher",
}

# Short book names served by the API, in canonical order
KJV_BOOK_NAMES = [
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel",
    "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles", "Ezra",
    "Nehemiah", "Esther", "Job", "Psalms", "Proverbs",
    "Ecclesiastes", "Song of Solomon", "Isaiah", "Jeremiah", "Lamentations",
    "Ezekiel", "Daniel", "Hosea", "Joel", "Amos",
    "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk",
    "Zephaniah", "Haggai", "Zechariah", "Malachi",
    "Matthew", "Mark", "Luke", "John", "Acts",
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians", "1 Timothy",
    "2 Timothy", "Titus", "Philemon", "Hebrews", "James",
    "1 Peter", "2 Peter", "1 John", "2 John", "3 John",
    "Jude", "Revelation",
]

# Regex patterns
VERSE_PATTERN = r"(\d+:\d+)"

# FASTAPI server settings
PREACHPOINT_SERVER_HOST = "localhost"
PREACHPOINT_SERVER_PORT = 3000
PREACHPOINT_SERVER_DEFAULT_BASE_URL = (
    f"http://{PREACHPOINT_SERVER_HOST}:{PREACHPOINT_SERVER_PORT}"
)
