"""
Heuristic keyword and pattern tables.

Every decision the detector and extractors make is driven by the data in this
module. Tables keyed by language use the plain language names ('hindi',
'english'); ordered tables are sequences of (label, triggers) pairs consumed by
the first-match helpers in matching.py, so the first group that fires wins.
"""

# ─────────────────────────────── LANGUAGE DETECTION ───────────────────────────
DEVANAGARI_PATTERN = r"[\u0900-\u097F]"

# Explicit response-language markers, checked Hindi first
LANGUAGE_MARKERS = [
    ('hindi', [
        'hindi', 'हिंदी', 'हिन्दी', 'देवनागरी',
        'में बताओ', 'में दो', 'में लिखो', 'में समझाओ',
        'हिंदी में', 'भारतीय', 'बॉलीवुड',
    ]),
    ('english', ['english', 'in english', 'translate to english']),
]

# ─────────────────────────────── INTENT PATTERNS ──────────────────────────────
# Priority order matters: story > lyrics > info
INTENT_PATTERNS = [
    ('story', [
        r"(?:story|कहानी|summary|सारांश|meaning|अर्थ|मतलब)",
        r"(?:explain|समझाएं|समझाओ|describe|वर्णन|what.*about|के बारे में)",
        r"(?:narrative|कथा|plot|कथानक|theme|विषय|संदेश)",
        r"(?:tell me about|बताओ|सुनाओ)",
    ]),
    ('lyrics', [
        r"(?:write|लिखें|लिखो|create|बनाएं|बनाओ|generate|उत्पन्न)",
        r"(?:new verse|नया श्लोक|नई पंक्ति|more lines|और पंक्तियां)",
        r"(?:extend|बढ़ाएं|बढ़ाओ|add|जोड़ें|जोड़ो|composition|रचना)",
        r"(?:continue|जारी|आगे|next|अगला)",
        r"(?:lyrics|बोल|गीत के बोल|पद)",
    ]),
    ('info', [
        r"(?:information|info|details|जानकारी|विवरण|बताओ|बताइए)",
        r"(?:singer|गायक|artist|कलाकार|who sang|किसने गाया)",
        r"(?:composer|संगीतकार|music director|निर्देशक)",
        r"(?:movie|film|फिल्म|picture|चित्र|से है)",
        r"(?:year|साल|वर्ष|when|कब)",
        r"(?:about|के बारे में|विषय में)",
    ]),
]

# ─────────────────────────────── SONG NAME EXTRACTION ─────────────────────────
QUOTE_CHARS = "\"'“”‘’«»`"
SONG_MARKER = r"(?:song|geet|गीत|गाना)"
TOPIC_PARTICLE = r"(?:ka|ke|ki|का|के|की|about|में|से)"

SONG_NAME_PATTERNS = [
    rf"[{QUOTE_CHARS}](.*?)[{QUOTE_CHARS}]",
    rf"{SONG_MARKER}\s+[{QUOTE_CHARS}](.*?)[{QUOTE_CHARS}]",
    rf"{SONG_MARKER}\s+([^\s].+?)(?:\s+{TOPIC_PARTICLE})",
    rf"(?:for|के लिए)\s+([^\s].+?)(?:\s+(?:song|geet|गीत))",
]

# Fallback titles and artists, matched as case-insensitive substrings
KNOWN_SONGS = [
    'abhi na jao chhod kar', 'अभी न जाओ छोड़ कर',
    'lag ja gale', 'लग जा गले',
    'tere bina zindagi se', 'तेरे बिना जिंदगी से',
    'tum hi ho', 'तुम ही हो',
    'raag darbari', 'राग दरबारी',
    'kabhi kabhi mere dil mein', 'कभी कभी मेरे दिल में',
    'ye jo mohabbat hai', 'ये जो मोहब्बत है',
    'chupke chupke', 'चुपके चुपके',
    'tujhse naraz nahi zindagi', 'तुझसे नाराज़ नहीं जिंदगी',
    'kishore kumar', 'lata mangeshkar', 'mohammad rafi',
]

# ─────────────────────────────── SNIPPET FIELD KEYWORDS ───────────────────────
FIELD_KEYWORDS = {
    'artist': ['singer', 'sung by', 'voice', 'गायक', 'आवाज़'],
    'playback_singer': ['playback singer', 'playback', 'प्लेबैक'],
    'composer': ['music director', 'composer', 'music by', 'संगीतकार', 'संगीत'],
    'lyricist': ['lyricist', 'lyrics by', 'written by', 'गीतकार', 'बोल'],
    'director': ['director', 'directed by', 'निर्देशक'],
    'movie': ['movie', 'film', 'from', 'फिल्म', 'चित्र'],
    'year': ['year', 'released', 'साल', 'वर्ष'],
    'genre': ['genre', 'style', 'type', 'शैली'],
    'album': ['album', 'soundtrack', 'एल्बम'],
    'record_label': ['record label', 'label', 'production', 'लेबल'],
    'duration': ['duration', 'length', 'minutes', 'अवधि'],
}

YEAR_PATTERN = r"(?:19|20)\d{2}"

AWARD_KEYWORDS = ['award', 'prize', 'recognition', 'filmfare', 'national', 'पुरस्कार']

POPULARITY_INDICATORS = ['popular', 'hit', 'famous', 'classic', 'evergreen', 'प्रसिद्ध']
DEFAULT_POPULARITY = 'Well-known'

TRUSTED_DOMAINS = [
    'genius.com', 'gaana.com', 'jiosaavn.com', 'youtube.com',
    'spotify.com', 'apple.com', 'amazon.com', 'wynk.in', 'hungama.com',
]

# ─────────────────────────────── STORY ANALYSIS ───────────────────────────────
THEME_KEYWORDS = {
    'hindi': ['प्रेम', 'विरह', 'खुशी', 'दुख', 'याद', 'उम्मीद', 'सपने', 'जीवन',
              'मोहब्बत', 'इश्क', 'रिश्ते', 'परिवार'],
    'english': ['love', 'separation', 'joy', 'sorrow', 'memory', 'hope', 'dreams',
                'life', 'relationships', 'family', 'romance', 'longing'],
}

MOOD_GROUPS = {
    'hindi': [
        ('प्रसन्नता', ['खुश', 'प्रसन्न', 'आनंद', 'हर्ष']),
        ('दुखी', ['दुख', 'गम', 'विषाद', 'उदास']),
        ('रोमांटिक', ['प्रेम', 'मोहब्बत', 'इश्क', 'प्यार']),
        ('शांत', ['शांत', 'मधुर', 'कोमल', 'सुकून']),
        ('उत्साहपूर्ण', ['उत्साह', 'जोश', 'उमंग', 'उत्सव']),
    ],
    'english': [
        ('uplifting', ['happy', 'joyful', 'cheerful', 'delighted']),
        ('melancholic', ['sad', 'melancholy', 'sorrowful', 'gloomy']),
        ('romantic', ['love', 'romantic', 'tender', 'passionate']),
        ('peaceful', ['peaceful', 'calm', 'serene', 'tranquil']),
        ('energetic', ['energetic', 'vibrant', 'enthusiastic', 'lively']),
    ],
}
DEFAULT_MOOD = {'hindi': 'भावनात्मक', 'english': 'emotional'}

CHARACTER_INDICATORS = [
    'hero', 'heroine', 'lover', 'beloved', 'protagonist',
    'नायक', 'नायिका', 'प्रेमी', 'प्रेमिका',
]

CULTURAL_KEYWORDS = {
    'hindi': ['भारतीय', 'संस्कृति', 'परंपरा', 'रीति-रिवाज', 'त्योहार', 'पारिवारिक'],
    'english': ['indian', 'culture', 'tradition', 'festival', 'family', 'heritage'],
}
CULTURAL_LABELS = {
    'hindi': {'rooted': 'भारतीय सांस्कृतिक संदर्भ में निहित', 'general': 'सामान्य सांस्कृतिक संदर्भ'},
    'english': {'rooted': 'Rooted in Indian cultural context', 'general': 'General cultural context'},
}

ERA_KEYWORDS = {
    'hindi': ['स्वर्ण युग', 'क्लासिक', 'पुराना', 'आधुनिक'],
    'english': ['golden age', 'classic', 'vintage', 'modern', 'contemporary'],
}
# Inclusive year ranges mapped to era labels
ERA_RANGES = [
    ((1950, 1970), 'golden'),
    ((1980, 2000), 'modern'),
]
HISTORICAL_LABELS = {
    'hindi': {
        'golden': 'बॉलीवुड का स्वर्ण युग',
        'modern': 'आधुनिक बॉलीवुड युग',
        'significant': 'ऐतिहासिक महत्व के साथ',
        'contemporary': 'समसामयिक संदर्भ',
    },
    'english': {
        'golden': 'Golden Age of Bollywood',
        'modern': 'Modern Bollywood Era',
        'significant': 'With historical significance',
        'contemporary': 'Contemporary context',
    },
}

# ─────────────────────────────── LYRICS ANALYSIS ──────────────────────────────
LYRIC_THEME_GROUPS = {
    'hindi': [
        ('प्रेम गीत', ['प्रेम', 'मोहब्बत', 'इश्क', 'प्यार']),
        ('विरह गीत', ['विरह', 'बिछड़ना', 'जुदाई', 'याद']),
        ('उत्सव गीत', ['खुशी', 'आनंद', 'उत्सव', 'मंगल']),
        ('दुख गीत', ['दुख', 'गम', 'आंसू', 'दर्द']),
        ('पारिवारिक गीत', ['माँ', 'मातृ', 'परिवार', 'रिश्ते']),
    ],
    'english': [
        ('Love Song', ['love', 'heart', 'romance', 'affection']),
        ('Separation Song', ['separation', 'goodbye', 'apart', 'missing']),
        ('Celebration Song', ['joy', 'happiness', 'celebration', 'festival']),
        ('Melancholic Song', ['sadness', 'tears', 'sorrow', 'pain']),
        ('Family Song', ['mother', 'family', 'relationships', 'bond']),
    ],
}
DEFAULT_LYRIC_THEME = {'hindi': 'भावनात्मक गीत', 'english': 'Emotional Song'}

LYRICS_STYLE_LABELS = {'hindi': 'पारंपरिक बॉलीवुड', 'english': 'Traditional Bollywood'}
RHYTHM_PATTERN_LABELS = {'hindi': 'मात्रिक छंद', 'english': 'Melodic Meter'}
RHYME_SCHEME_LABELS = {
    'hindi': {'abab': 'ABAB तुकांत', 'aa': 'AA तुकांत', 'mixed': 'मिश्रित छंद', 'free': 'मुक्त छंद'},
    'english': {'abab': 'ABAB Rhyme Scheme', 'aa': 'AA Rhyme Scheme', 'mixed': 'Mixed Meter', 'free': 'Free Verse'},
}
