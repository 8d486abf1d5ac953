import asyncio
import importlib.util
import pathlib

import pytest

from batch_ocr.services.errors import EngineInitializationError, RecognitionError

# Import fixtures_docs by file path to avoid package-relative imports issues
_HERE = pathlib.Path(__file__).resolve().parent
_FD_PATH = _HERE / "fixtures_docs.py"
_spec = importlib.util.spec_from_file_location("fixtures_docs", str(_FD_PATH))
assert _spec and _spec.loader
fixtures_docs = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(fixtures_docs)  # type: ignore


class FakeEngine:
    """Stands in for TesseractEngine; records what it was asked to read."""

    def __init__(self, text: str = "recognized text", fail: bool = False):
        self.text = text
        self.fail = fail
        self.images = []
        self.terminated = False

    async def recognize(self, image) -> str:
        if self.terminated:
            raise RecognitionError("Recognition engine has been terminated")
        if self.fail:
            raise RecognitionError("Recognition failed: engine crashed")
        self.images.append(image)
        await asyncio.sleep(0)
        return self.text

    async def terminate(self) -> None:
        self.terminated = True


class FakeEngineFactory:
    """Async engine factory that counts how often it was called."""

    def __init__(self, text: str = "recognized text", fail_times: int = 0, delay: float = 0.01, recognize_fails: bool = False):
        self.text = text
        self.fail_times = fail_times
        self.delay = delay
        self.recognize_fails = recognize_fails
        self.calls = 0
        self.engines = []

    async def __call__(self, config) -> FakeEngine:
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.calls <= self.fail_times:
            raise EngineInitializationError("tesseract is not installed or it's not in your PATH")
        engine = FakeEngine(self.text, fail=self.recognize_fails)
        self.engines.append(engine)
        return engine


@pytest.fixture
def docs():
    return fixtures_docs


@pytest.fixture
def engine_factory():
    return FakeEngineFactory()


@pytest.fixture
def make_engine_factory():
    return FakeEngineFactory


@pytest.fixture
def manager(engine_factory):
    from batch_ocr.services.engine import RecognitionEngineManager

    return RecognitionEngineManager(engine_factory=engine_factory)


@pytest.fixture
def shared_engine_factory(monkeypatch):
    """Point the process-wide engine manager at a fake factory."""
    from batch_ocr.services.engine import engine_manager

    factory = FakeEngineFactory()
    monkeypatch.setattr(engine_manager, "_factory", factory, raising=True)
    yield factory
    engine_manager._engine = None
    engine_manager._pending = None
