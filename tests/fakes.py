"""In-memory stand-ins for the NLLB and EasyOCR models, and table helpers."""

import asyncio
import threading
import time
from pathlib import Path

from chat_translator.services.ml_models.base import BaseMLModel, ModelConfig

REPO_DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def _key(value):
    return getattr(value, "value", value)


class FakeTranslationModel(BaseMLModel[str]):
    """Counts loads and calls; returns canned translations or echoes input."""

    def __init__(self, translations=None, fail=False, load_delay=0.0, blocking_load=False):
        super().__init__(ModelConfig(model_name="fake-nllb"))
        self.translations = {
            (text, _key(src), _key(tgt)): out
            for (text, src, tgt), out in (translations or {}).items()
        }
        self.fail = fail
        self.load_delay = load_delay
        self.blocking_load = blocking_load
        self.load_count = 0
        self.active_loads = 0
        self.max_concurrent_loads = 0
        self._counter_lock = threading.Lock()
        self.calls = []

    async def _load_model(self):
        if self.blocking_load:
            # Thread-backed like the transformers pipeline load
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(None, self._blocking_load)
        else:
            self.load_count += 1
            await asyncio.sleep(self.load_delay)
        self._model = object()

    def _blocking_load(self):
        with self._counter_lock:
            self.load_count += 1
            self.active_loads += 1
            self.max_concurrent_loads = max(self.max_concurrent_loads, self.active_loads)
        try:
            time.sleep(self.load_delay)
        finally:
            with self._counter_lock:
                self.active_loads -= 1

    async def _run_inference(self, inputs, source_lang=None, target_lang=None):
        self.calls.append((inputs, _key(source_lang), _key(target_lang)))
        if self.fail:
            raise RuntimeError("model exploded")
        return self.translations.get((inputs, _key(source_lang), _key(target_lang)), inputs)

    async def translate(self, text, source_lang, target_lang):
        return await self.inference(text, source_lang=source_lang, target_lang=target_lang)


class FakeOCRModel(BaseMLModel):
    def __init__(self, lines=None, fail=False):
        super().__init__(ModelConfig(model_name="fake-ocr"))
        self.lines = lines or []
        self.fail = fail
        self.images = []

    async def _load_model(self):
        self._model = object()

    async def _run_inference(self, inputs):
        self.images.append(inputs)
        if self.fail:
            raise RuntimeError("reader crashed")
        return list(self.lines)

    async def extract_lines(self, image):
        return await self.inference(image)


def write_table(path: Path, rows):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        for source, target in rows:
            handle.write(f'"{source}","{target}"\n')


