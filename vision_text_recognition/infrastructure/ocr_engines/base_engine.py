"""
Abstract base class for recognition engines
"""
import platform
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

import numpy as np

from vision_text_recognition.core.enums import CoordinateUnits, OriginConvention
from vision_text_recognition.models.domain import PlatformInfo, RecognitionConfig


@dataclass(frozen=True)
class RawObservation:
    """Recognized fragment in the engine's own box convention"""
    text: str
    confidence: float
    box: Tuple[float, float, float, float]  # x, y, width, height


@dataclass
class EngineOutput:
    """Everything an engine reports for one image"""
    observations: List[RawObservation]
    origin: OriginConvention = OriginConvention.TOP_LEFT
    units: CoordinateUnits = CoordinateUnits.PIXELS
    extras: Dict[str, Any] = field(default_factory=dict)


class ModelCache:
    """
    Bounded LRU cache of loaded models

    Models are built outside the cache lock, so a slow load does not
    hold up lookups of models already in memory. When two threads build
    the same key at once, the first one stored wins.
    """

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._models: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._models)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._models

    def get_or_create(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._models:
                self._models.move_to_end(key)
                return self._models[key]

        model = factory()

        with self._lock:
            if key in self._models:
                self._models.move_to_end(key)
                return self._models[key]
            self._models[key] = model
            while len(self._models) > self.max_size:
                self._models.popitem(last=False)
            return model

    def clear(self) -> None:
        with self._lock:
            self._models.clear()


class BaseOCREngine(ABC):
    """
    Abstract base class for all recognition engines
    Defines one interface over the different OCR libraries
    """

    #: Engine identifier, also used as the result's platform label
    name: str = "base"

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the engine"""
        pass

    @abstractmethod
    def build_request_params(
        self,
        config: RecognitionConfig,
        image_height: int
    ) -> Dict[str, Any]:
        """
        Map a backend-agnostic config onto engine call parameters

        Args:
            config: Normalized recognition config
            image_height: Height of the raster in pixels

        Returns:
            Keyword arguments understood by the engine
        """
        pass

    @abstractmethod
    def recognize(
        self,
        image: np.ndarray,
        config: RecognitionConfig
    ) -> Optional[EngineOutput]:
        """
        Detect text on an image

        Args:
            image: Image as numpy array (RGB)
            config: Normalized recognition config

        Returns:
            EngineOutput, or None when the engine produced no result at all
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check whether the engine is ready

        Returns:
            True if the engine can serve requests
        """
        pass

    @abstractmethod
    def platform_info(self) -> PlatformInfo:
        """Static description of the engine"""
        pass

    @abstractmethod
    def supported_languages(self) -> List[str]:
        """Language codes the engine can read"""
        pass

    def cleanup(self) -> None:
        """Release resources (optional)"""
        pass

    @staticmethod
    def host_platform() -> Tuple[str, str]:
        """Host operating system name and release"""
        return platform.system() or "unknown", platform.release() or "unknown"
