"""Centralized constants and configuration loader.

This module provides access to configuration values and sensible defaults
for the matching thresholds, storage location, embedding model and face
localization. Values are loaded from config/config.yaml when available,
otherwise defaults are used.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. Uses default if None.

    Returns:
        Configuration dictionary.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    try:
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if isinstance(data, dict):
                return data
            logger.warning(f"Ignoring config {path}: top level is not a mapping")
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")

    return {}


def _get_nested(config: Dict, *keys: str, default: Any = None) -> Any:
    """Get nested config value with default fallback."""
    value = config
    for key in keys:
        if isinstance(value, dict):
            value = value.get(key)
        else:
            return default
        if value is None:
            return default
    return value


# ============================================================
# Matching Constants
# ============================================================

@dataclass
class MatchingConfig:
    """Acceptance thresholds for the match engine.

    A probe is accepted only when the best cosine similarity is strictly
    above ``cosine_threshold`` and the Euclidean distance of that same
    candidate is strictly below ``euclidean_threshold``.
    """
    cosine_threshold: float = 0.6
    euclidean_threshold: float = 3.0
    # Length of every stored and probe embedding
    embedding_dim: int = 128

    def __post_init__(self):
        if not -1.0 <= self.cosine_threshold <= 1.0:
            raise ValueError(f"cosine_threshold must be in [-1, 1], got {self.cosine_threshold}")
        if self.euclidean_threshold <= 0:
            raise ValueError(f"euclidean_threshold must be positive, got {self.euclidean_threshold}")
        if self.embedding_dim <= 0:
            raise ValueError(f"embedding_dim must be positive, got {self.embedding_dim}")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from config dictionary."""
        m = _get_nested(config, "matching") or {}

        return cls(
            cosine_threshold=float(m.get("cosine_threshold", 0.6)),
            euclidean_threshold=float(m.get("euclidean_threshold", 3.0)),
            embedding_dim=int(m.get("embedding_dim", 128)),
        )


# ============================================================
# Storage Constants
# ============================================================

@dataclass
class StorageConfig:
    """Where enrolled embeddings are persisted."""
    directory: str = "data/embeddings"
    suffix: str = ".embedding"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "StorageConfig":
        """Create from config dictionary."""
        s = _get_nested(config, "storage") or {}

        return cls(
            directory=str(s.get("directory", "data/embeddings")),
            suffix=str(s.get("suffix", ".embedding")),
        )


# ============================================================
# Embedding Model Constants
# ============================================================

@dataclass
class EmbeddingConfig:
    """Embedding model constants."""
    # Key into EMBEDDING_BACKENDS
    backend: str = "facenet"
    model_path: str = "data/models/facenet.tflite"
    # Input size for the FaceNet network
    input_size: Tuple[int, int] = (160, 160)
    # Pixels are normalized as (pixel - mean) * scale
    mean: float = 127.5
    scale: float = 1.0 / 128.0
    # Model expects RGB, OpenCV images are BGR
    swap_rb: bool = True

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "EmbeddingConfig":
        """Create from config dictionary."""
        e = _get_nested(config, "embedding") or {}
        input_size = e.get("input_size", [160, 160])

        return cls(
            backend=str(e.get("backend", "facenet")).lower(),
            model_path=str(e.get("model_path", "data/models/facenet.tflite")),
            input_size=tuple(input_size),
            mean=float(e.get("mean", 127.5)),
            scale=float(e.get("scale", 1.0 / 128.0)),
            swap_rb=bool(e.get("swap_rb", True)),
        )


# ============================================================
# Face Localization Constants
# ============================================================

@dataclass
class LocalizationConfig:
    """Haar cascade face localization constants."""
    scale_factor: float = 1.1
    min_neighbors: int = 5
    min_size: Tuple[int, int] = (30, 30)
    # Padding added around the detected face as a fraction of its width
    padding_ratio: float = 0.1
    # Size of the returned face crop
    output_size: Tuple[int, int] = (112, 112)
    # Use a centered square crop when no face is detected
    center_crop_fallback: bool = True

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LocalizationConfig":
        """Create from config dictionary."""
        loc = _get_nested(config, "localization") or {}
        min_size = loc.get("min_size", [30, 30])
        output_size = loc.get("output_size", [112, 112])

        return cls(
            scale_factor=float(loc.get("scale_factor", 1.1)),
            min_neighbors=int(loc.get("min_neighbors", 5)),
            min_size=tuple(min_size),
            padding_ratio=float(loc.get("padding_ratio", 0.1)),
            output_size=tuple(output_size),
            center_crop_fallback=bool(loc.get("center_crop_fallback", True)),
        )


@dataclass
class LivenessConfig:
    """Anti-spoof constants."""
    # A face is live when the spoof probability is below this value
    spoof_threshold: float = 0.5
    model_path: str = "data/models/spoof_model_scale_2_7.tflite"
    input_size: Tuple[int, int] = (80, 80)
    # Pixels are normalized as (pixel - mean) * scale, i.e. into [-1, 1]
    mean: float = 127.5
    scale: float = 1.0 / 127.5
    swap_rb: bool = True
    # Position of the spoof class in the model output
    spoof_index: int = 1

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LivenessConfig":
        """Create from config dictionary."""
        lv = _get_nested(config, "liveness") or {}
        input_size = lv.get("input_size", [80, 80])

        return cls(
            spoof_threshold=float(lv.get("spoof_threshold", 0.5)),
            model_path=str(lv.get("model_path", "data/models/spoof_model_scale_2_7.tflite")),
            input_size=tuple(input_size),
            mean=float(lv.get("mean", 127.5)),
            scale=float(lv.get("scale", 1.0 / 127.5)),
            swap_rb=bool(lv.get("swap_rb", True)),
            spoof_index=int(lv.get("spoof_index", 1)),
        )


@dataclass
class LoggingConfig:
    """Logging setup used by the command line."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LoggingConfig":
        """Create from config dictionary."""
        lg = _get_nested(config, "logging") or {}

        return cls(
            level=str(lg.get("level", "INFO")).upper(),
            format=str(lg.get("format", cls.format)),
        )


# ============================================================
# Global Config Instance (lazy loaded)
# ============================================================

class Config:
    """Configuration container with lazily parsed sections."""

    _instance: Optional["Config"] = None

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._config: Dict[str, Any] = data or {}
        self._reset()

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> "Config":
        """Build a standalone configuration from a YAML file."""
        return cls(load_config(config_path))

    def _reset(self) -> None:
        self._matching: Optional[MatchingConfig] = None
        self._storage: Optional[StorageConfig] = None
        self._embedding: Optional[EmbeddingConfig] = None
        self._localization: Optional[LocalizationConfig] = None
        self._liveness: Optional[LivenessConfig] = None
        self._logging: Optional[LoggingConfig] = None

    def reload(self, config_path: Optional[Path] = None) -> None:
        """Reload configuration from file."""
        self._config = load_config(config_path)
        # Reset cached configs
        self._reset()

    @property
    def matching(self) -> MatchingConfig:
        """Get matching config."""
        if self._matching is None:
            self._matching = MatchingConfig.from_config(self._config)
        return self._matching

    @property
    def storage(self) -> StorageConfig:
        """Get storage config."""
        if self._storage is None:
            self._storage = StorageConfig.from_config(self._config)
        return self._storage

    @property
    def embedding(self) -> EmbeddingConfig:
        """Get embedding model config."""
        if self._embedding is None:
            self._embedding = EmbeddingConfig.from_config(self._config)
        return self._embedding

    @property
    def localization(self) -> LocalizationConfig:
        """Get face localization config."""
        if self._localization is None:
            self._localization = LocalizationConfig.from_config(self._config)
        return self._localization

    @property
    def liveness(self) -> LivenessConfig:
        """Get liveness config."""
        if self._liveness is None:
            self._liveness = LivenessConfig.from_config(self._config)
        return self._liveness

    @property
    def logging(self) -> LoggingConfig:
        """Get logging config."""
        if self._logging is None:
            self._logging = LoggingConfig.from_config(self._config)
        return self._logging

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get a config value by key path."""
        return _get_nested(self._config, *keys, default=default)


def get_config() -> Config:
    """Get the process-wide configuration, loading the default file once."""
    if Config._instance is None:
        Config._instance = Config.from_file()
    return Config._instance
