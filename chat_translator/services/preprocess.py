"""
Chat text preprocessing.

Expands common chat shortforms before translation so the model sees full
words, and flags slang and sarcasm markers for the client. The translation
pipeline treats the processed text as its input and does not inspect flags.
"""

import re
from dataclasses import dataclass, field, asdict
from typing import Dict

SHORTFORMS: Dict[str, str] = {
    "u": "you",
    "ur": "your",
    "r": "are",
    "y": "why",
    "pls": "please",
    "plz": "please",
    "thx": "thanks",
    "thnx": "thanks",
    "ty": "thank you",
    "tmrw": "tomorrow",
    "tmr": "tomorrow",
    "2day": "today",
    "2moro": "tomorrow",
    "gm": "good morning",
    "gn": "good night",
    "msg": "message",
    "b4": "before",
    "bcz": "because",
    "bc": "because",
    "coz": "because",
    "idk": "i don't know",
    "imo": "in my opinion",
    "btw": "by the way",
    "brb": "be right back",
    "omw": "on my way",
    "asap": "as soon as possible",
    "np": "no problem",
    "k": "okay",
    "ok": "okay",
    "wyd": "what are you doing",
    "hbu": "how about you",
    "ttyl": "talk to you later",
}

SLANG_TERMS = frozenset({
    "lit", "dope", "sus", "bruh", "lol", "lmao", "rofl", "yolo", "fomo",
    "salty", "savage", "bae", "noob", "chill", "vibe", "cringe", "legit",
})

SARCASM_MARKERS = (
    re.compile(r"\byeah,? right\b", re.IGNORECASE),
    re.compile(r"\boh,? (great|wonderful|perfect|fantastic)\b", re.IGNORECASE),
    re.compile(r"\bas if\b", re.IGNORECASE),
    re.compile(r"\bsure,? whatever\b", re.IGNORECASE),
    re.compile(r"(^|\s)/s\b"),
)

# word characters (letters, digits, apostrophes) with surrounding punctuation kept apart
_TOKEN = re.compile(r"^(\W*)([\w']+)(\W*)$", re.UNICODE)


@dataclass
class PreprocessingFlags:
    had_shortforms: bool = False
    had_slang: bool = False
    had_sarcasm: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


@dataclass
class PreprocessResult:
    processed: str
    flags: PreprocessingFlags = field(default_factory=PreprocessingFlags)


def preprocess_text(text: str) -> PreprocessResult:
    """
    Normalize informal chat text.

    Whitespace between words is collapsed to single spaces. Tokens are
    matched case-insensitively and keep their leading/trailing punctuation,
    so "u?" becomes "you?".
    """
    flags = PreprocessingFlags()
    if not text or not text.strip():
        return PreprocessResult(processed=text, flags=flags)

    flags.had_sarcasm = any(marker.search(text) for marker in SARCASM_MARKERS)

    words = []
    for token in text.split():
        match = _TOKEN.match(token)
        if not match:
            words.append(token)
            continue

        lead, word, trail = match.groups()
        key = word.lower()
        if key in SHORTFORMS:
            flags.had_shortforms = True
            word = SHORTFORMS[key]
        elif key in SLANG_TERMS:
            flags.had_slang = True
        words.append(f"{lead}{word}{trail}")

    return PreprocessResult(processed=" ".join(words), flags=flags)
