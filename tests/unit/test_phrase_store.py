"""
Unit tests for the phrase cache and idiom table.
"""

import asyncio

import pytest

from chat_translator.services.languages import LanguageCode
from chat_translator.services.phrase_store import IdiomTable, PhraseStore, scan_table
from tests.fakes import REPO_DATA_DIR, write_table


class TestScanTable:
    def test_missing_file_is_a_miss(self, tmp_path):
        assert scan_table(tmp_path / "nope.csv", "hello") is None

    def test_case_insensitive_trimmed_match(self, tmp_path):
        path = tmp_path / "en-hi.csv"
        write_table(path, [("Hello There", "नमस्ते")])
        assert scan_table(path, "  hello there ") == "नमस्ते"

    def test_first_match_wins_with_duplicates(self, tmp_path):
        path = tmp_path / "en-hi.csv"
        write_table(path, [("hi", "first"), ("hi", "second")])
        assert scan_table(path, "hi") == "first"

    def test_records_with_empty_fields_are_skipped(self, tmp_path):
        path = tmp_path / "en-hi.csv"
        path.write_text('"hi",""\n\n"hi","real"\n', encoding="utf-8")
        assert scan_table(path, "hi") == "real"

    def test_empty_query_never_matches(self, tmp_path):
        path = tmp_path / "en-hi.csv"
        write_table(path, [("hi", "there")])
        assert scan_table(path, "   ") is None


class TestPhraseStore:
    @pytest.mark.asyncio
    async def test_append_creates_file_in_legacy_format(self, tmp_path):
        store = PhraseStore(tmp_path / "data")

        written = await store.append(" thank you ", " धन्यवाद ", LanguageCode.ENGLISH, LanguageCode.HINDI)

        assert written is True
        path = tmp_path / "data" / "en-hi.csv"
        assert path.read_text(encoding="utf-8") == '"thank you","धन्यवाद"\n'
        assert await store.lookup("Thank You", "en", "hi") == "धन्यवाद"

    @pytest.mark.asyncio
    async def test_pairs_are_directional(self, tmp_path):
        store = PhraseStore(tmp_path)
        await store.append("hello", "नमस्ते", "en", "hi")

        assert await store.lookup("hello", "hi", "en") is None
        assert store.path_for("hi", "en").name == "hi-en.csv"

    @pytest.mark.asyncio
    async def test_commas_and_quotes_survive(self, tmp_path):
        store = PhraseStore(tmp_path)
        phrase = 'he said "yes, sure"'

        await store.append(phrase, "उसने कहा \"हाँ, ज़रूर\"", "en", "hi")

        assert await store.lookup(phrase, "en", "hi") == "उसने कहा \"हाँ, ज़रूर\""

    @pytest.mark.asyncio
    async def test_write_failure_is_swallowed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = PhraseStore(blocker / "data")

        assert await store.append("hello", "नमस्ते", "en", "hi") is False
        assert await store.lookup("hello", "en", "hi") is None

    @pytest.mark.asyncio
    async def test_concurrent_appends_keep_records_intact(self, tmp_path):
        store = PhraseStore(tmp_path)

        await asyncio.gather(*[
            store.append(f"phrase {i}", f"वाक्य {i}", "en", "hi") for i in range(25)
        ])

        lines = (tmp_path / "en-hi.csv").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 25
        assert all(line.startswith('"phrase ') and line.endswith('"') for line in lines)

    @pytest.mark.asyncio
    async def test_append_if_absent_writes_once_under_contention(self, tmp_path):
        store = PhraseStore(tmp_path)

        results = await asyncio.gather(*[
            store.append_if_absent("see you", "फिर मिलेंगे", "en", "hi") for _ in range(10)
        ])

        assert results.count(True) == 1
        lines = (tmp_path / "en-hi.csv").read_text(encoding="utf-8").splitlines()
        assert lines == ['"see you","फिर मिलेंगे"']


class TestIdiomTable:
    def test_only_english_pairs_have_tables(self, tmp_path):
        table = IdiomTable(tmp_path)
        assert len(IdiomTable.PAIRS) == 8
        assert table.path_for("en", "ta").name == "en-ta-idioms.csv"
        assert table.path_for("te", "en").name == "te-en-idioms.csv"
        assert table.path_for("hi", "mr") is None
        assert table.path_for("en", "fr") is None

    @pytest.mark.asyncio
    async def test_lookup(self, data_dir):
        table = IdiomTable(data_dir)
        assert await table.lookup("Good Morning", "en", "hi") == "सुप्रभात"
        assert await table.lookup("good morning", "hi", "en") is None

    @pytest.mark.asyncio
    async def test_missing_idiom_file_is_a_miss(self, tmp_path):
        table = IdiomTable(tmp_path)
        assert await table.lookup("good morning", "en", "mr") is None

    @pytest.mark.asyncio
    async def test_shipped_tables_cover_all_pairs(self):
        table = IdiomTable(REPO_DATA_DIR)
        for source, target in IdiomTable.PAIRS:
            assert table.path_for(source, target).exists()
        assert await table.lookup("good morning", "en", "hi") == "सुप्रभात"
