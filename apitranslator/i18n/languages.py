"""
Language catalog.

ISO 639-1 codes the translator accepts, their display names, and helpers
for normalizing whatever a client sends in a query string or header.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported languages."""
    
    AA = "aa"  # Afar
    AB = "ab"  # Abkhazian
    AF = "af"  # Afrikaans
    AM = "am"  # Amharic
    AR = "ar"  # Arabic
    AS = "as"  # Assamese
    AY = "ay"  # Aymara
    AZ = "az"  # Azerbaijani
    BA = "ba"  # Bashkir
    BE = "be"  # Belarusian
    BG = "bg"  # Bulgarian
    BH = "bh"  # Bihari
    BI = "bi"  # Bislama
    BN = "bn"  # Bengali
    BO = "bo"  # Tibetan
    BR = "br"  # Breton
    CA = "ca"  # Catalan
    CO = "co"  # Corsican
    CS = "cs"  # Czech
    CY = "cy"  # Welsh
    DA = "da"  # Danish
    DE = "de"  # German
    DZ = "dz"  # Dzongkha
    EL = "el"  # Greek
    EN = "en"  # English
    EO = "eo"  # Esperanto
    ES = "es"  # Spanish
    ET = "et"  # Estonian
    EU = "eu"  # Basque
    FA = "fa"  # Persian
    FI = "fi"  # Finnish
    FJ = "fj"  # Fijian
    FO = "fo"  # Faroese
    FR = "fr"  # French
    FY = "fy"  # Frisian
    GA = "ga"  # Irish
    GD = "gd"  # Gaelic
    GL = "gl"  # Galician
    GN = "gn"  # Guarani
    GU = "gu"  # Gujarati
    HA = "ha"  # Hausa
    HE = "he"  # Hebrew
    HI = "hi"  # Hindi
    HR = "hr"  # Croatian
    HU = "hu"  # Hungarian
    HY = "hy"  # Armenian
    IA = "ia"  # Interlingua
    ID = "id"  # Indonesian
    IE = "ie"  # Interlingue
    IK = "ik"  # Inupiak
    IS = "is"  # Icelandic
    IT = "it"  # Italian
    IU = "iu"  # Inuktitut
    JA = "ja"  # Japanese
    JV = "jv"  # Javanese
    KA = "ka"  # Georgian
    KK = "kk"  # Kazakh
    KL = "kl"  # Greenlandic
    KM = "km"  # Cambodian
    KN = "kn"  # Kannada
    KO = "ko"  # Korean
    KS = "ks"  # Kashmiri
    KU = "ku"  # Kurdish
    KY = "ky"  # Kirghiz
    LA = "la"  # Latin
    LN = "ln"  # Lingala
    LO = "lo"  # Laothian
    LT = "lt"  # Lithuanian
    LV = "lv"  # Latvian
    MG = "mg"  # Malagasy
    MI = "mi"  # Maori
    MK = "mk"  # Macedonian
    ML = "ml"  # Malayalam
    MN = "mn"  # Mongolian
    MO = "mo"  # Moldavian
    MR = "mr"  # Marathi
    MS = "ms"  # Malay
    MT = "mt"  # Maltese
    MY = "my"  # Burmese
    NA = "na"  # Nauru
    NE = "ne"  # Nepali
    NL = "nl"  # Dutch
    NO = "no"  # Norwegian
    OC = "oc"  # Occitan
    OM = "om"  # Oromo
    OR = "or"  # Oriya
    PA = "pa"  # Punjabi
    PL = "pl"  # Polish
    PS = "ps"  # Pashto
    PT = "pt"  # Portuguese
    QU = "qu"  # Quechua
    RM = "rm"  # Romansh
    RN = "rn"  # Kirundi
    RO = "ro"  # Romanian
    RU = "ru"  # Russian
    RW = "rw"  # Kinyarwanda
    SA = "sa"  # Sanskrit
    SD = "sd"  # Sindhi
    SG = "sg"  # Sango
    SI = "si"  # Sinhalese
    SK = "sk"  # Slovak
    SL = "sl"  # Slovenian
    SM = "sm"  # Samoan
    SN = "sn"  # Shona
    SO = "so"  # Somali
    SQ = "sq"  # Albanian
    SR = "sr"  # Serbian
    SS = "ss"  # Siswati
    ST = "st"  # Sesotho
    SU = "su"  # Sundanese
    SV = "sv"  # Swedish
    SW = "sw"  # Swahili
    TA = "ta"  # Tamil
    TE = "te"  # Telugu
    TG = "tg"  # Tajik
    TH = "th"  # Thai
    TI = "ti"  # Tigrinya
    TK = "tk"  # Turkmen
    TL = "tl"  # Tagalog
    TN = "tn"  # Setswana
    TO = "to"  # Tonga
    TR = "tr"  # Turkish
    TS = "ts"  # Tsonga
    TT = "tt"  # Tatar
    TW = "tw"  # Twi
    UK = "uk"  # Ukrainian
    UR = "ur"  # Urdu
    UZ = "uz"  # Uzbek
    VI = "vi"  # Vietnamese
    VO = "vo"  # Volapuk
    WO = "wo"  # Wolof
    XH = "xh"  # Xhosa
    YI = "yi"  # Yiddish
    YO = "yo"  # Yoruba
    ZA = "za"  # Zhuang
    ZH = "zh"  # Chinese
    ZU = "zu"  # Zulu


# Human-readable names
LANGUAGE_NAMES: dict[str, str] = {
    "aa": "Afar",
    "ab": "Abkhazian",
    "af": "Afrikaans",
    "am": "Amharic",
    "ar": "Arabic",
    "as": "Assamese",
    "ay": "Aymara",
    "az": "Azerbaijani",
    "ba": "Bashkir",
    "be": "Belarusian",
    "bg": "Bulgarian",
    "bh": "Bihari",
    "bi": "Bislama",
    "bn": "Bengali",
    "bo": "Tibetan",
    "br": "Breton",
    "ca": "Catalan",
    "co": "Corsican",
    "cs": "Czech",
    "cy": "Welsh",
    "da": "Danish",
    "de": "German",
    "dz": "Dzongkha",
    "el": "Greek",
    "en": "English",
    "eo": "Esperanto",
    "es": "Spanish",
    "et": "Estonian",
    "eu": "Basque",
    "fa": "Persian",
    "fi": "Finnish",
    "fj": "Fijian",
    "fo": "Faroese",
    "fr": "French",
    "fy": "Frisian",
    "ga": "Irish",
    "gd": "Gaelic",
    "gl": "Galician",
    "gn": "Guarani",
    "gu": "Gujarati",
    "ha": "Hausa",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "hy": "Armenian",
    "ia": "Interlingua",
    "id": "Indonesian",
    "ie": "Interlingue",
    "ik": "Inupiak",
    "is": "Icelandic",
    "it": "Italian",
    "iu": "Inuktitut",
    "ja": "Japanese",
    "jv": "Javanese",
    "ka": "Georgian",
    "kk": "Kazakh",
    "kl": "Greenlandic",
    "km": "Cambodian",
    "kn": "Kannada",
    "ko": "Korean",
    "ks": "Kashmiri",
    "ku": "Kurdish",
    "ky": "Kirghiz",
    "la": "Latin",
    "ln": "Lingala",
    "lo": "Laothian",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "mg": "Malagasy",
    "mi": "Maori",
    "mk": "Macedonian",
    "ml": "Malayalam",
    "mn": "Mongolian",
    "mo": "Moldavian",
    "mr": "Marathi",
    "ms": "Malay",
    "mt": "Maltese",
    "my": "Burmese",
    "na": "Nauru",
    "ne": "Nepali",
    "nl": "Dutch",
    "no": "Norwegian",
    "oc": "Occitan",
    "om": "Oromo",
    "or": "Oriya",
    "pa": "Punjabi",
    "pl": "Polish",
    "ps": "Pashto",
    "pt": "Portuguese",
    "qu": "Quechua",
    "rm": "Romansh",
    "rn": "Kirundi",
    "ro": "Romanian",
    "ru": "Russian",
    "rw": "Kinyarwanda",
    "sa": "Sanskrit",
    "sd": "Sindhi",
    "sg": "Sango",
    "si": "Sinhalese",
    "sk": "Slovak",
    "sl": "Slovenian",
    "sm": "Samoan",
    "sn": "Shona",
    "so": "Somali",
    "sq": "Albanian",
    "sr": "Serbian",
    "ss": "Siswati",
    "st": "Sesotho",
    "su": "Sundanese",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "te": "Telugu",
    "tg": "Tajik",
    "th": "Thai",
    "ti": "Tigrinya",
    "tk": "Turkmen",
    "tl": "Tagalog",
    "tn": "Setswana",
    "to": "Tonga",
    "tr": "Turkish",
    "ts": "Tsonga",
    "tt": "Tatar",
    "tw": "Twi",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "uz": "Uzbek",
    "vi": "Vietnamese",
    "vo": "Volapuk",
    "wo": "Wolof",
    "xh": "Xhosa",
    "yi": "Yiddish",
    "yo": "Yoruba",
    "za": "Zhuang",
    "zh": "Chinese",
    "zu": "Zulu",
}


# All supported (for API)
SUPPORTED_LANGUAGES = list(Language)

_VALID_CODES = frozenset(lang.value for lang in Language)


# =============================================================================
# Utilities
# =============================================================================


def get_language_name(code: str | Language) -> str:
    """Get human-readable language name."""
    return LANGUAGE_NAMES.get(normalize_language_code(code), "Unknown")


def normalize_language_code(code: str | Language) -> str:
    """
    Normalize language code to standard form.
    
    Handles region subtags (``en-US``), quality values (``fr;q=0.9``),
    underscores (``pt_BR``) and English language names (``spanish``).
    """
    if isinstance(code, Language):
        return code.value

    code = code.lower().strip()
    
    # Strip quality values: "fr;q=0.9"
    if ";" in code:
        code = code.split(";", 1)[0].strip()
    
    # Take primary subtag: "en-us" -> "en"
    for sep in ("-", "_"):
        if sep in code:
            code = code.split(sep, 1)[0].strip()
    
    # Handle common variants
    variants = {
        "english": "en",
        "spanish": "es",
        "french": "fr",
        "german": "de",
        "chinese": "zh",
        "japanese": "ja",
        "korean": "ko",
        "portuguese": "pt",
        "italian": "it",
        "russian": "ru",
        "arabic": "ar",
        "hindi": "hi",
        "dutch": "nl",
        "polish": "pl",
        "vietnamese": "vi",
        "thai": "th",
        "turkish": "tr",
        "indonesian": "id",
        "swedish": "sv",
        "norwegian": "no",
        "danish": "da",
        "finnish": "fi",
        "greek": "el",
        "czech": "cs",
        "hungarian": "hu",
        "romanian": "ro",
        "ukrainian": "uk",
        "hebrew": "he",
        "persian": "fa",
        "farsi": "fa",
        "bengali": "bn",
        "tamil": "ta",
        "telugu": "te",
        "swahili": "sw",
        # Legacy ISO codes
        "iw": "he",
        "ji": "yi",
        "in": "id",
    }
    
    return variants.get(code, code)


def is_valid_language(code: str | None) -> bool:
    """Check if code names a supported language."""
    if not code:
        return False
    return normalize_language_code(code) in _VALID_CODES


def get_language_by_code(code: str) -> Language | None:
    """Get Language enum by code."""
    code = normalize_language_code(code)
    try:
        return Language(code)
    except ValueError:
        return None
