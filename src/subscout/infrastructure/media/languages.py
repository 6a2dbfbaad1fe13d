"""Language lookup table.

Maps every known spelling of a language (provider code, ISO 639-1,
ISO 639-2/3, English name, aliases) to one canonical ``LanguageInfo``.
The table is built by a pure function and is read-only afterwards, so it
can be shared freely between concurrent resolutions.

Conflict policy for keys claimed by more than one entry: an entry's own
provider code always maps to that entry, every other key belongs to the
entry registered first.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType

from subscout.domain.entities.media import LanguageInfo

# Order matters: earlier entries win shared keys ("pt" -> pt-br, "zh" -> zh-cn).
DEFAULT_LANGUAGES: tuple[LanguageInfo, ...] = (
    LanguageInfo("en", "en", "eng", "English"),
    LanguageInfo("el", "el", "gre", "Greek", aliases=("ell",)),
    LanguageInfo("es", "es", "spa", "Spanish", aliases=("espanol", "castellano")),
    LanguageInfo("fr", "fr", "fre", "French", aliases=("fra", "francais")),
    LanguageInfo("de", "de", "ger", "German", aliases=("deu", "deutsch")),
    LanguageInfo("it", "it", "ita", "Italian", aliases=("italiano",)),
    LanguageInfo(
        "pt-br",
        "pt",
        "por",
        "Portuguese (Brazilian)",
        aliases=("pob", "brazilian", "portuguese"),
    ),
    LanguageInfo("pt-pt", "pt", "por", "Portuguese"),
    LanguageInfo("zh-cn", "zh", "chi", "Chinese (simplified)", aliases=("zho", "chs")),
    LanguageInfo("zh-tw", "zh", "chi", "Chinese (traditional)", aliases=("cht",)),
    LanguageInfo("ze", "zh", "zho", "Chinese bilingual"),
    LanguageInfo("af", "af", "afr", "Afrikaans"),
    LanguageInfo("sq", "sq", "sqi", "Albanian"),
    LanguageInfo("ar", "ar", "ara", "Arabic"),
    LanguageInfo("hy", "hy", "hye", "Armenian"),
    LanguageInfo("eu", "eu", "eus", "Basque", aliases=("baq",)),
    LanguageInfo("bn", "bn", "ben", "Bengali"),
    LanguageInfo("bg", "bg", "bul", "Bulgarian"),
    LanguageInfo("ca", "ca", "cat", "Catalan"),
    LanguageInfo("hr", "hr", "hrv", "Croatian"),
    LanguageInfo("cs", "cs", "cze", "Czech", aliases=("ces",)),
    LanguageInfo("da", "da", "dan", "Danish"),
    LanguageInfo("nl", "nl", "dut", "Dutch", aliases=("nld",)),
    LanguageInfo("fi", "fi", "fin", "Finnish"),
    LanguageInfo("he", "he", "heb", "Hebrew"),
    LanguageInfo("hi", "hi", "hin", "Hindi"),
    LanguageInfo("hu", "hu", "hun", "Hungarian"),
    LanguageInfo("id", "id", "ind", "Indonesian"),
    LanguageInfo("ja", "ja", "jpn", "Japanese"),
    LanguageInfo("ko", "ko", "kor", "Korean"),
    LanguageInfo("lv", "lv", "lav", "Latvian"),
    LanguageInfo("lt", "lt", "lit", "Lithuanian"),
    LanguageInfo("mk", "mk", "mkd", "Macedonian"),
    LanguageInfo("ms", "ms", "msa", "Malay"),
    LanguageInfo("no", "no", "nor", "Norwegian", aliases=("nob",)),
    LanguageInfo("fa", "fa", "fas", "Persian", aliases=("farsi",)),
    LanguageInfo("pl", "pl", "pol", "Polish"),
    LanguageInfo("ro", "ro", "ron", "Romanian"),
    LanguageInfo("ru", "ru", "rus", "Russian"),
    LanguageInfo("sr", "sr", "srp", "Serbian"),
    LanguageInfo("sk", "sk", "slk", "Slovak"),
    LanguageInfo("sl", "sl", "slv", "Slovenian"),
    LanguageInfo("sv", "sv", "swe", "Swedish"),
    LanguageInfo("th", "th", "tha", "Thai"),
    LanguageInfo("tr", "tr", "tur", "Turkish"),
    LanguageInfo("uk", "uk", "ukr", "Ukrainian"),
    LanguageInfo("vi", "vi", "vie", "Vietnamese"),
)


class LanguageTable(Mapping[str, LanguageInfo]):
    """Immutable, case-insensitive lookup from any language key to its entry."""

    __slots__ = ("_entries", "_keys")

    def __init__(
        self, keys: Mapping[str, LanguageInfo], entries: tuple[LanguageInfo, ...]
    ) -> None:
        self._keys = MappingProxyType(dict(keys))
        self._entries = entries

    def __getitem__(self, key: str) -> LanguageInfo:
        return self._keys[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def provider_code(self, key: str) -> str | None:
        """Canonical provider code for *key*, or None if unknown."""
        info = self._keys.get(key.lower())
        return info.provider_code if info is not None else None

    def is_provider_code(self, code: str) -> bool:
        """True if *code* is some entry's canonical provider code."""
        return any(entry.provider_code == code for entry in self._entries)


def _keys_for(entry: LanguageInfo) -> list[str]:
    raw = [entry.provider_code, entry.alpha2, entry.alpha3, entry.name, *entry.aliases]
    return [k.strip().lower() for k in raw if k and k.strip()]


def build_language_table(
    entries: Iterable[LanguageInfo] = DEFAULT_LANGUAGES,
) -> LanguageTable:
    """Build a read-only language table from *entries* (order is significant)."""
    entries = tuple(entries)
    keys: dict[str, LanguageInfo] = {}

    for entry in entries:
        for key in _keys_for(entry):
            if key not in keys:
                keys[key] = entry

    # Provider codes are authoritative for themselves.
    for entry in entries:
        keys[entry.provider_code.lower()] = entry

    return LanguageTable(keys, entries)


@lru_cache(maxsize=1)
def default_language_table() -> LanguageTable:
    """Process-wide table built from ``DEFAULT_LANGUAGES`` (built once)."""
    return build_language_table(DEFAULT_LANGUAGES)
