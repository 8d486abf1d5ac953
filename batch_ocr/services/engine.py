"""
Recognition Engine Service.

Owns the single Tesseract-backed recognition engine shared by every file in a
batch. The engine is brought up lazily on first use, at most once even when
many files ask for it at the same time, and torn down explicitly once the
batch is done.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple

import pytesseract
from PIL import Image

from ..config import settings
from .errors import EngineInitializationError, RecognitionError

logger = logging.getLogger("batch_ocr.engine")

LANGUAGES: Tuple[str, ...] = ("eng", "pol")
OEM = 1
PSM = 3
CACHE_METHOD = "memory"


@dataclass(frozen=True)
class EngineConfig:
    languages: Tuple[str, ...] = LANGUAGES
    oem: int = OEM
    psm: int = PSM
    cache_method: str = CACHE_METHOD
    tesseract_cmd: Optional[str] = None

    @property
    def lang(self) -> str:
        return "+".join(self.languages)

    @property
    def tesseract_config(self) -> str:
        return f"--oem {self.oem} --psm {self.psm}"


def default_engine_config() -> EngineConfig:
    return EngineConfig(tesseract_cmd=settings.tesseract_cmd)


def _probe_tesseract(tesseract_cmd: Optional[str]) -> Tuple[str, Tuple[str, ...]]:
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
    version = pytesseract.get_tesseract_version()
    languages = pytesseract.get_languages(config="")
    return str(version), tuple(languages)


class TesseractEngine:
    """
    Recognition engine backed by the tesseract binary.

    Language data is loaded by tesseract per call and kept in memory only;
    nothing is cached on disk by this process.
    """

    def __init__(self, config: EngineConfig, version: str, available_languages: Tuple[str, ...]):
        self.config = config
        self.version = version
        self.available_languages = available_languages
        self._closed = False

    @classmethod
    async def create(cls, config: EngineConfig) -> "TesseractEngine":
        """Probe the tesseract install and return a ready engine."""
        if config.cache_method != CACHE_METHOD:
            raise EngineInitializationError(
                f"Unsupported cache method '{config.cache_method}', only '{CACHE_METHOD}' is available"
            )

        try:
            version, available = await asyncio.to_thread(_probe_tesseract, config.tesseract_cmd)
        except pytesseract.TesseractNotFoundError as e:
            raise EngineInitializationError("tesseract is not installed or it's not in your PATH") from e
        except (pytesseract.TesseractError, OSError) as e:
            raise EngineInitializationError(f"Could not start tesseract: {e}") from e

        missing = [lang for lang in config.languages if lang not in available]
        if missing:
            raise EngineInitializationError(f"Missing tesseract language data: {', '.join(missing)}")

        logger.info("Tesseract %s ready (lang=%s, %s)", version, config.lang, config.tesseract_config)
        return cls(config, version, available)

    @property
    def closed(self) -> bool:
        return self._closed

    async def recognize(self, image: Image.Image) -> str:
        if self._closed:
            raise RecognitionError("Recognition engine has been terminated")
        try:
            text = await asyncio.to_thread(
                pytesseract.image_to_string,
                image,
                lang=self.config.lang,
                config=self.config.tesseract_config,
            )
        except pytesseract.TesseractError as e:
            raise RecognitionError(f"Recognition failed: {e.message}") from e
        except (RuntimeError, OSError) as e:
            raise RecognitionError(f"Recognition failed: {e}") from e
        logger.debug("recognize: chars=%s", len(text))
        return text

    async def terminate(self) -> None:
        self._closed = True
        logger.info("Tesseract engine terminated")


EngineFactory = Callable[[EngineConfig], Awaitable[TesseractEngine]]


class EngineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class RecognitionEngineManager:
    """
    Lifecycle owner for the shared recognition engine.

    States: UNINITIALIZED -> INITIALIZING -> READY -> (release) ->
    UNINITIALIZED. The in-flight initialization is recorded as a task before
    the first await, so every caller arriving while it runs waits on that same
    task and sees the same engine or the same error.
    """

    def __init__(
        self,
        engine_factory: Optional[EngineFactory] = None,
        config: Optional[EngineConfig] = None,
    ):
        self._factory: EngineFactory = engine_factory or TesseractEngine.create
        self._config = config or default_engine_config()
        self._engine: Optional[TesseractEngine] = None
        self._pending: Optional["asyncio.Task[TesseractEngine]"] = None

    @property
    def state(self) -> EngineState:
        if self._engine is not None:
            return EngineState.READY
        if self._pending is not None:
            return EngineState.INITIALIZING
        return EngineState.UNINITIALIZED

    async def acquire(self) -> TesseractEngine:
        """Return the shared engine, starting it if nobody has yet."""
        if self._engine is not None:
            return self._engine

        task = self._pending
        if task is None:
            task = asyncio.ensure_future(self._initialize())
            self._pending = task
            logger.info("Initializing recognition engine (lang=%s)", self._config.lang)

        # Shield so one waiter being cancelled does not cancel the others.
        return await asyncio.shield(task)

    async def _initialize(self) -> TesseractEngine:
        me = asyncio.current_task()
        try:
            engine = await self._factory(self._config)
        except EngineInitializationError:
            self._clear_pending(me)
            raise
        except Exception as e:
            self._clear_pending(me)
            raise EngineInitializationError(f"Recognition engine failed to start: {e}") from e

        if self._pending is not me:
            # Released while starting up; do not install a handle nobody owns.
            await engine.terminate()
            raise EngineInitializationError("Recognition engine was released during initialization")

        self._engine = engine
        self._pending = None
        logger.info("Recognition engine ready")
        return engine

    def _clear_pending(self, task: Optional[asyncio.Task]) -> None:
        if self._pending is task:
            self._pending = None

    async def release(self) -> None:
        """Terminate the engine if there is one. Safe to call repeatedly."""
        engine = self._engine
        self._engine = None
        self._pending = None
        if engine is None:
            return
        logger.info("Releasing recognition engine")
        await engine.terminate()


# Singleton instance
engine_manager = RecognitionEngineManager()
