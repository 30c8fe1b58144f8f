"""Collector configuration and loading."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    CONFIG_FILE,
    DEFAULT_MAX_CONTENT_BYTES,
    DEFAULT_MAX_TEXT_BYTES,
    DEFAULT_VCS_TIMEOUT,
    OUTPUT_DIR,
)
from .core import SnapshotMode
from .errors import ConfigError


DEFAULT_IGNORED_DIRS = [
    # Version control
    ".git",
    # IDE and editors
    ".idea",
    ".vscode",
    "nbproject",
    # JVM build tooling
    ".gradle",
    ".mvn",
    "target",
    "build",
    "out",
    "nbbuild",
    "dist",
    # Node.js
    "node_modules",
    # Python
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".eggs",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    # Our own output
    OUTPUT_DIR,
]

DEFAULT_IGNORED_FILES = [
    "mvnw",
    "mvnw.cmd",
    "gradlew",
    "gradlew.bat",
    "snapshot.json",
    "project_snapshot.py",
]

DEFAULT_SECRET_PATTERNS = [
    ".env", "secrets", "secret", "credentials", "keystore", "key", "pem", "p12", "pfx",
]

DEFAULT_BINARY_EXTENSIONS = [
    ".jar", ".class", ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".pdf",
    ".zip", ".tar", ".gz", ".rar", ".7z", ".mp4", ".mp3", ".wav", ".mov",
    ".exe", ".dll", ".pyc", ".pyo", ".so", ".whl",
]

DEFAULT_TEXT_EXTENSIONS = [
    ".java", ".kt", ".kts", ".scala", ".groovy",
    ".py", ".rb", ".go", ".rs",
    ".js", ".jsx", ".ts", ".tsx",
    ".json", ".yml", ".yaml", ".xml", ".properties", ".toml", ".ini", ".gradle",
    ".md", ".txt", ".html", ".htm", ".css",
    ".cfg", ".sh", ".sql", ".rst",
]


def _default_caps() -> Dict[SnapshotMode, int]:
    return {
        SnapshotMode.FULL: DEFAULT_MAX_CONTENT_BYTES,
        SnapshotMode.DIFF: DEFAULT_MAX_CONTENT_BYTES,
    }


class CollectorConfig(BaseModel):
    """Denylists, allow-lists and caps consumed by the collector.

    Stored (optionally) in ``.project-snapshot.yaml`` at the project root.
    """

    model_config = {"extra": "forbid", "frozen": True}

    ignored_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_DIRS))
    ignored_files: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_FILES))
    secret_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_SECRET_PATTERNS))
    binary_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_BINARY_EXTENSIONS))
    text_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_TEXT_EXTENSIONS))
    # mode -> exclusive upper bound on attached content size (bytes)
    max_content_bytes: Dict[SnapshotMode, int] = Field(default_factory=_default_caps)
    max_text_bytes: int = Field(DEFAULT_MAX_TEXT_BYTES, gt=0)
    vcs_timeout: float = Field(DEFAULT_VCS_TIMEOUT, gt=0)
    output_dir: str = Field(OUTPUT_DIR, min_length=1)

    @field_validator("ignored_files", "secret_patterns")
    @classmethod
    def _lowercase(cls, values: List[str]) -> List[str]:
        return [v.lower() for v in values if v]

    @field_validator("binary_extensions", "text_extensions")
    @classmethod
    def _normalize_extensions(cls, values: List[str]) -> List[str]:
        normalized = []
        for v in values:
            v = v.strip().lower()
            if not v:
                continue
            normalized.append(v if v.startswith(".") else f".{v}")
        return normalized

    @field_validator("max_content_bytes")
    @classmethod
    def _positive_caps(cls, caps: Dict[SnapshotMode, int]) -> Dict[SnapshotMode, int]:
        bad = sorted(mode.value for mode, cap in caps.items() if cap <= 0)
        if bad:
            raise ValueError(f"content caps must be positive (got non-positive caps for {bad})")
        merged = _default_caps()
        merged.update(caps)
        return merged

    def content_cap(self, mode: SnapshotMode) -> Optional[int]:
        """Size cap for attaching content in ``mode`` (None: mode attaches nothing)."""
        return self.max_content_bytes.get(mode)


_LIST_KEYS = ("ignored_dirs", "ignored_files", "secret_patterns", "binary_extensions", "text_extensions")


def config_from_mapping(data: Dict[str, Any], source: str = "<mapping>") -> CollectorConfig:
    """Build a config from a plain mapping.

    List keys replace the defaults; ``extend_<key>`` lists are appended to
    whatever the key resolves to.
    """
    data = dict(data)
    extensions = {}
    for key in _LIST_KEYS:
        extra = data.pop(f"extend_{key}", None)
        if extra is None:
            continue
        if not isinstance(extra, list):
            raise ConfigError(source, f"extend_{key} must be a list")
        extensions[key] = extra

    for key, extra in extensions.items():
        base = data.get(key)
        if base is None:
            base = list(CollectorConfig.model_fields[key].default_factory())
        elif not isinstance(base, list):
            raise ConfigError(source, f"{key} must be a list")
        data[key] = list(base) + list(extra)

    try:
        return CollectorConfig(**data)
    except ValidationError as e:
        raise ConfigError(source, str(e)) from e


def load_collector_config(root: Path, path: Optional[Path] = None) -> CollectorConfig:
    """Load configuration from ``path`` or from ``<root>/.project-snapshot.yaml``.

    Missing default file means defaults. A missing explicit file, unparsable
    YAML or unknown keys raise ConfigError.
    """
    cfg_path = path if path is not None else root / CONFIG_FILE
    if not cfg_path.exists():
        if path is not None:
            raise ConfigError(str(cfg_path), "file not found")
        return CollectorConfig()

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(str(cfg_path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(str(cfg_path), "top level must be a mapping")

    return config_from_mapping(data, source=str(cfg_path))
