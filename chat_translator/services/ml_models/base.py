"""
Base classes and configuration for ML models.

Provides the abstract base class shared by the translation and OCR models:
device/precision configuration, a one-shot lazy load guarded by a lock,
warmup, health checks and unloading.
"""

import logging
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, TypeVar, Generic

# Lazy import for torch to allow module loading without torch installed
try:
    import torch
    TORCH_AVAILABLE = True
except ImportError:
    torch = None  # type: ignore
    TORCH_AVAILABLE = False

logger = logging.getLogger(__name__)


class DeviceType(str, Enum):
    """Supported compute devices."""
    CPU = "cpu"
    CUDA = "cuda"
    MPS = "mps"  # Apple Silicon


class PrecisionMode(str, Enum):
    """Precision modes for inference."""
    FP32 = "fp32"
    FP16 = "fp16"
    BF16 = "bf16"


@dataclass
class ModelConfig:
    """
    Configuration for ML models.

    Attributes:
        model_name: HuggingFace model identifier or local path
        device_type: Target device (cpu, cuda, mps)
        precision_mode: Inference precision mode
        warmup_iterations: Number of warmup runs after loading
    """
    model_name: str
    device_type: DeviceType = DeviceType.CPU
    precision_mode: PrecisionMode = PrecisionMode.FP32
    warmup_iterations: int = 0

    def __post_init__(self):
        """Validate and adjust configuration based on device capabilities."""
        self.device_type = DeviceType(self.device_type)
        self.precision_mode = PrecisionMode(self.precision_mode)

        if not TORCH_AVAILABLE:
            self.device_type = DeviceType.CPU
            return

        self._validate_device()
        self._validate_precision()

    def _validate_device(self) -> None:
        """Validate and adjust device based on availability."""
        if self.device_type == DeviceType.CUDA:
            if not torch.cuda.is_available():
                logger.warning(
                    "CUDA requested but not available, falling back to CPU"
                )
                self.device_type = DeviceType.CPU

        if self.device_type == DeviceType.MPS:
            if not (
                hasattr(torch.backends, 'mps') and
                torch.backends.mps.is_available()
            ):
                logger.warning(
                    "MPS requested but not available, falling back to CPU"
                )
                self.device_type = DeviceType.CPU

    def _validate_precision(self) -> None:
        """Validate and adjust precision based on device."""
        if self.device_type == DeviceType.CPU:
            if self.precision_mode == PrecisionMode.FP16:
                logger.info("FP16 not optimal on CPU, using BF16")
                self.precision_mode = PrecisionMode.BF16

        if self.precision_mode == PrecisionMode.BF16:
            if self.device_type == DeviceType.CUDA:
                if not torch.cuda.is_bf16_supported():
                    logger.warning("BF16 not supported, using FP16")
                    self.precision_mode = PrecisionMode.FP16

    @property
    def torch_dtype(self) -> Any:
        """Get torch dtype for the configured precision."""
        if not TORCH_AVAILABLE:
            return None
        dtype_map = {
            PrecisionMode.FP32: torch.float32,
            PrecisionMode.FP16: torch.float16,
            PrecisionMode.BF16: torch.bfloat16,
        }
        return dtype_map.get(self.precision_mode, torch.float32)


T = TypeVar('T')


class BaseMLModel(ABC, Generic[T]):
    """
    Abstract base class for all ML models.

    The model is loaded lazily on first inference. The first caller of
    ``load()`` starts one shared load task; every caller awaits it through
    ``asyncio.shield``, so a cancelled caller never aborts or duplicates an
    in-flight ``_load_model()``. A failed load clears the task and the next
    caller retries.
    """

    def __init__(self, config: ModelConfig):
        """
        Initialize the base ML model.

        Args:
            config: Model configuration
        """
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self._model: Any = None
        self._is_loaded = False
        self._load_lock = asyncio.Lock()
        self._load_task: Optional[asyncio.Future] = None

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    @property
    def dtype(self) -> Any:
        """Get the torch dtype."""
        return self.config.torch_dtype

    @abstractmethod
    async def _load_model(self) -> None:
        """
        Load the model and processor.

        Must be implemented by subclasses to load their specific model.
        """

    @abstractmethod
    async def _run_inference(self, inputs: T, **kwargs) -> Any:
        """
        Run model inference.

        Args:
            inputs: Model inputs (type varies by model)

        Returns:
            Model outputs
        """

    async def load(self) -> None:
        """Load the model once and run warmup."""
        async with self._load_lock:
            if self._is_loaded:
                return
            if self._load_task is None:
                self._load_task = asyncio.ensure_future(self._load_once())
            task = self._load_task

        await asyncio.shield(task)

    async def _load_once(self) -> None:
        self.logger.info(f"Loading model: {self.config.model_name}")

        try:
            await self._load_model()
        except BaseException:
            self._load_task = None
            raise
        self._is_loaded = True

        await self._warmup()

        self.logger.info(f"Model loaded successfully on {self.config.device_type.value}")

    async def _warmup(self) -> None:
        if self.config.warmup_iterations <= 0:
            return

        self.logger.info(f"Running {self.config.warmup_iterations} warmup iterations")

        for i in range(self.config.warmup_iterations):
            try:
                await self._run_warmup_iteration()
            except Exception as e:
                self.logger.warning(f"Warmup iteration {i} failed: {e}")

    async def _run_warmup_iteration(self) -> None:
        """
        Run a single warmup iteration.

        Override in subclasses for model-specific warmup.
        """

    async def inference(self, inputs: T, **kwargs) -> Any:
        """
        Run inference, loading the model first if needed.

        Args:
            inputs: Model inputs
            **kwargs: Model-specific options passed to _run_inference

        Returns:
            Model outputs
        """
        if not self._is_loaded:
            await self.load()

        return await self._run_inference(inputs, **kwargs)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get model statistics and configuration.

        Returns:
            Dictionary with model stats
        """
        stats = {
            "model_name": self.config.model_name,
            "device": self.config.device_type.value,
            "precision": self.config.precision_mode.value,
            "is_loaded": self._is_loaded,
        }

        if TORCH_AVAILABLE and self.config.device_type == DeviceType.CUDA:
            stats["gpu_memory_allocated_mb"] = torch.cuda.memory_allocated() / 1024 / 1024
            stats["gpu_memory_reserved_mb"] = torch.cuda.memory_reserved() / 1024 / 1024

        return stats

    async def unload(self) -> None:
        """
        Unload the model and free resources.
        """
        async with self._load_lock:
            self._model = None
            self._is_loaded = False
            self._load_task = None

        if TORCH_AVAILABLE and torch.cuda.is_available():
            torch.cuda.empty_cache()

        self.logger.info("Model unloaded")
