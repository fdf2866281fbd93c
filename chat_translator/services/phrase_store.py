"""
File-backed phrase tables for the translation pipeline.

Two tables share one record format:

- PhraseStore: the runtime phrase cache, one append-only file per directed
  language pair (``<src>-<tgt>.csv``), created on demand.
- IdiomTable: pre-seeded, read-only idiom files (``<src>-<tgt>-idioms.csv``)
  that exist only for the eight directed pairs between English and the
  other chat languages.

Each line holds two quoted fields, ``"<source phrase>","<target phrase>"``.
Records are written with csv.QUOTE_ALL, so quotes inside a phrase are doubled
and commas stay inside the quoted field; plain phrases produce exactly the
legacy two-column format. Lookup is a linear scan; the first record whose
trimmed source field equals the trimmed query (case-insensitive) wins, and
duplicate keys are tolerated.
"""

import asyncio
import csv
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .languages import HUB_LANGUAGE, LanguageCode

logger = logging.getLogger(__name__)

LanguageLike = Union[LanguageCode, str]


def _code(language: LanguageLike) -> str:
    return language.value if isinstance(language, LanguageCode) else str(language)


def _normalize(phrase: str) -> str:
    return phrase.strip().lower()


def scan_table(path: Path, phrase: str) -> Optional[str]:
    """
    Return the target field of the first record matching `phrase`.

    Records with an empty source or target field are skipped. A missing or
    unreadable file is a miss.
    """
    wanted = _normalize(phrase)
    if not wanted:
        return None

    try:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            for row in csv.reader(handle):
                if len(row) < 2:
                    continue
                source, target = row[0].strip(), row[1].strip()
                if source and target and source.lower() == wanted:
                    return target
    except FileNotFoundError:
        logger.debug(f"Phrase table {path.name} does not exist")
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.warning(f"Phrase table {path.name} unreadable: {e}")

    return None


def _write_record(path: Path, phrase: str, translation: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([phrase.strip(), translation.strip()])


class PhraseStore:
    """
    Runtime phrase cache keyed by directed language pair.

    Appends to the same file are serialized with a per-file asyncio.Lock so
    concurrent writers never interleave partial records. Blocking file I/O
    runs in the default executor.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        self._locks: Dict[Path, asyncio.Lock] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    def path_for(self, source_lang: LanguageLike, target_lang: LanguageLike) -> Path:
        return self.data_dir / f"{_code(source_lang)}-{_code(target_lang)}.csv"

    def _lock_for(self, path: Path) -> asyncio.Lock:
        lock = self._locks.get(path)
        if lock is None:
            lock = self._locks[path] = asyncio.Lock()
        return lock

    async def lookup(
        self,
        phrase: str,
        source_lang: LanguageLike,
        target_lang: LanguageLike,
    ) -> Optional[str]:
        """Return the cached translation of `phrase`, or None on a miss."""
        path = self.path_for(source_lang, target_lang)
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, scan_table, path, phrase)

    async def append(
        self,
        phrase: str,
        translation: str,
        source_lang: LanguageLike,
        target_lang: LanguageLike,
    ) -> bool:
        """
        Append one record to the pair's file, creating the file if needed.

        Returns:
            True when the record was written. Write failures are logged and
            reported as False; they are never raised.
        """
        path = self.path_for(source_lang, target_lang)
        async with self._lock_for(path):
            return await self._append_locked(path, phrase, translation)

    async def append_if_absent(
        self,
        phrase: str,
        translation: str,
        source_lang: LanguageLike,
        target_lang: LanguageLike,
    ) -> bool:
        """Append unless `phrase` already has a record for the pair."""
        path = self.path_for(source_lang, target_lang)
        loop = asyncio.get_event_loop()
        async with self._lock_for(path):
            existing = await loop.run_in_executor(None, scan_table, path, phrase)
            if existing is not None:
                return False
            return await self._append_locked(path, phrase, translation)

    async def _append_locked(self, path: Path, phrase: str, translation: str) -> bool:
        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(None, _write_record, path, phrase, translation)
        except OSError as e:
            self.logger.warning(
                f"Phrase cache write failed for {path.name}: {e}",
                extra={"cache_file": str(path)},
            )
            return False

        self.logger.debug(f"Cached phrase in {path.name}")
        return True


class IdiomTable:
    """Read-only idiom lookup for the directed pairs between English and the rest."""

    PAIRS = frozenset(
        pair
        for other in LanguageCode
        if other != HUB_LANGUAGE
        for pair in ((HUB_LANGUAGE, other), (other, HUB_LANGUAGE))
    )

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path_for(self, source_lang: LanguageLike, target_lang: LanguageLike) -> Optional[Path]:
        try:
            pair = (LanguageCode(_code(source_lang)), LanguageCode(_code(target_lang)))
        except ValueError:
            return None
        if pair not in self.PAIRS:
            return None
        return self.data_dir / f"{pair[0].value}-{pair[1].value}-idioms.csv"

    async def lookup(
        self,
        phrase: str,
        source_lang: LanguageLike,
        target_lang: LanguageLike,
    ) -> Optional[str]:
        """Return the idiom translation for `phrase`, or None."""
        path = self.path_for(source_lang, target_lang)
        if path is None:
            return None
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, scan_table, path, phrase)
