"""
Unicode to ASCII transliteration.
"""
import unicodedata
from typing import Optional

from unidecode import unidecode

from ..localization import Translator, get_translator


def to_ascii(text: str, locale: Optional[str] = None, translator: Optional[Translator] = None) -> str:
    """
    Best-effort transliteration to ASCII.
    - NFC composition first so combining marks meet their base letter
    - Locale transliterations win (e.g. German 'ä' -> 'ae')
    - Everything else goes through the Unidecode code-point tables
    - Code points Unidecode does not know are dropped
    """
    if not text or text.isascii():
        return text
    translator = translator or get_translator()
    out = []
    for ch in unicodedata.normalize("NFC", text):
        if ch.isascii():
            out.append(ch)
            continue
        override = translator.lookup("transliterations", ch, locale)
        out.append(override if override is not None else unidecode(ch))
    return "".join(out)
