"""
Constants and configuration values shared across the music query assistant.
"""

# Web search collaborator (RapidAPI Google search proxy)
DEFAULT_SEARCH_API_URL = "https://google-search74.p.rapidapi.com/"
DEFAULT_SEARCH_API_HOST = "google-search74.p.rapidapi.com"

# Text generation collaborator (any OpenAI-compatible chat completions endpoint)
DEFAULT_LLM_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_LLM_MODEL = "llama3-70b-8192"

# Per-call timeout for every collaborator request, in seconds
DEFAULT_TIMEOUT_SECONDS = 20.0

# Search fan-out configuration
SEARCH_CONSTANTS = {
    'INFO_RESULT_LIMIT': 10,
    'LINKS_RESULT_LIMIT': 8,
}

# Query variants for the info fan-out; {song} is replaced with the song name
INFO_SEARCH_TEMPLATES = [
    '"{song}" song complete information singer composer lyricist movie year',
    '"{song}" bollywood song details cast music director',
    '"{song}" film song background awards popularity',
    '"{song}" lyrics meaning story context',
]
LINKS_SEARCH_TEMPLATE = (
    '"{song}" lyrics site:genius.com OR site:gaana.com OR site:jiosaavn.com '
    'OR site:youtube.com OR site:spotify.com'
)

# Generation settings per result type
GENERATION_SETTINGS = {
    'story': {'temperature': 0.7, 'max_tokens': 1000},
    'lyrics': {'temperature': 0.8, 'max_tokens': 800},
}

# Extraction limits
EXTRACTION_CONSTANTS = {
    'MIN_FIELD_LENGTH': 2,      # captured span must be strictly longer
    'MAX_FIELD_LENGTH': 50,     # captured span must be strictly shorter
    'MAX_FIELD_TOKENS': 4,
    'MAX_AWARDS': 3,
    'MAX_LEGAL_LINKS': 5,
    'DETAILED_INFO_RESULTS': 3,
    'DETAILED_INFO_MIN_DESCRIPTION': 50,
    'CONTEXT_RESULTS': 3,
    'CONTEXT_MAX_CHARS': 500,
    'CONTEXT_EXTRA_SENTENCE_THRESHOLD': 100,
}

# Generated-text analysis limits
ANALYSIS_CONSTANTS = {
    'MAX_THEMES': 4,
    'MAX_CHARACTERS': 3,
    'MAX_VERSES': 3,
    'ABAB_MIN_LINES': 4,
    'AA_MIN_LINES': 2,
}

# Formatting limits
FORMAT_CONSTANTS = {
    'DETAILED_INFO_MIN_LENGTH': 100,
    'DETAILED_INFO_PREVIEW': 200,
}

# Script detection: Devanagari share of non-whitespace characters above which a query is Hindi
DEVANAGARI_THRESHOLD = 0.3

# Flask Configuration
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
