"""Server configuration for techbadges.

Settings live in a YAML file. Every key is optional; missing keys fall
back to the dataclass defaults.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from techbadges.config.constants import (
    ICONS_PER_LINE,
    MAX_ICONS_PER_LINE,
    MIN_ICONS_PER_LINE,
    SVG_CACHE_TTL,
)

ENVIRONMENTS = ("development", "staging", "production")
CACHE_BACKENDS = ("none", "memory", "redis")


@dataclass
class ServerConfig:
    """techbadges server configuration."""

    host: str = "localhost"
    port: int = 8787
    environment: str = "production"
    registry_path: Optional[str] = None  # None = packaged sample registry
    per_line: int = ICONS_PER_LINE
    cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    svg_cache_ttl: int = SVG_CACHE_TTL
    memory_cache_size: int = 1024
    analytics_enabled: bool = False

    def __post_init__(self):
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{self.environment}' "
                f"(expected one of: {', '.join(ENVIRONMENTS)})"
            )
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"Unknown cache backend '{self.cache_backend}' "
                f"(expected one of: {', '.join(CACHE_BACKENDS)})"
            )
        if not MIN_ICONS_PER_LINE <= self.per_line <= MAX_ICONS_PER_LINE:
            raise ValueError(
                f"per_line must be between {MIN_ICONS_PER_LINE} and {MAX_ICONS_PER_LINE}, "
                f"got {self.per_line}"
            )

    @property
    def is_dev(self) -> bool:
        return self.environment == "development"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "environment": self.environment,
            "registry_path": self.registry_path,
            "per_line": self.per_line,
            "cache_backend": self.cache_backend,
            "redis_url": self.redis_url,
            "svg_cache_ttl": self.svg_cache_ttl,
            "memory_cache_size": self.memory_cache_size,
            "analytics_enabled": self.analytics_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ServerConfig":
        """Create from dictionary (parsed YAML)."""
        return cls(
            host=data.get("host", "localhost"),
            port=int(data.get("port", 8787)),
            environment=data.get("environment", "production"),
            registry_path=data.get("registry_path"),
            per_line=int(data.get("per_line", ICONS_PER_LINE)),
            cache_backend=data.get("cache_backend", "memory"),
            redis_url=data.get("redis_url", "redis://localhost:6379/0"),
            svg_cache_ttl=int(data.get("svg_cache_ttl", SVG_CACHE_TTL)),
            memory_cache_size=int(data.get("memory_cache_size", 1024)),
            analytics_enabled=bool(data.get("analytics_enabled", False)),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "ServerConfig":
        """Load from a YAML file. A missing file yields the defaults."""
        if not path.exists():
            return cls()
        data = yaml.safe_load(path.read_text()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return cls.from_dict(data)

    def save_yaml(self, path: Path) -> None:
        """Write this configuration to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False))
