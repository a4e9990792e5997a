"""
BumpBoard Configuration Module

Handles loading, validation, and management of configuration settings.
"""

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DAY = 24 * 60 * 60


@dataclass
class ForumConfig:
    """Forum-wide settings."""
    name: str = "Fifa's Cool Forum Software"
    default_board: str = "fifa-2022"


@dataclass
class BoardConfig:
    """Single board: name, description and limits."""
    name: str
    description: str = ""
    max_threads: int = 20
    max_replies: int = 20
    expiry_seconds: int = 30 * DAY


def default_boards() -> list[BoardConfig]:
    return [
        BoardConfig("fifa-2022", "Fifa-2022 World Cup", 20, 10, 7 * DAY),
        BoardConfig("ticket-booking", "Dates, Prices, and Booking", 20, 20, 14 * DAY),
        BoardConfig("rules_and_regulations", "Rules and Regulations", 20, 5, DAY),
        BoardConfig("merchandise", "Merchandise", 20, 20, 14 * DAY),
        BoardConfig("other", "Other Stuff", 20, 20, 30 * DAY),
    ]


@dataclass
class IdentityConfig:
    """Poster identity hashing settings."""
    bucket_seconds: int = DAY  # 0 = one bucket for the whole process lifetime
    tag_length: int = 10
    origin_header: str = "X-Forwarded-For"


@dataclass
class CacheConfig:
    """Render cache settings."""
    max_entries: int = 20


@dataclass
class RateLimitsConfig:
    """Rate limiting settings, per origin."""
    threads_per_minute: int = 3
    replies_per_minute: int = 10


@dataclass
class WebConfig:
    """HTTP server settings."""
    host: str = "localhost"
    port: int = 3000
    cors_origin: str = "*"
    max_title_length: int = 256
    max_text_length: int = 65536


@dataclass
class MaintenanceConfig:
    """Background maintenance settings."""
    interval_seconds: int = 300
    stats_interval_seconds: int = 1800


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: str = ""
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class Config:
    """Main configuration container."""
    forum: ForumConfig = field(default_factory=ForumConfig)
    boards: list[BoardConfig] = field(default_factory=default_boards)
    identity: IdentityConfig = field(default_factory=IdentityConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    rate_limits: RateLimitsConfig = field(default_factory=RateLimitsConfig)
    web: WebConfig = field(default_factory=WebConfig)
    maintenance: MaintenanceConfig = field(default_factory=MaintenanceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        # Board validation
        if not self.boards:
            errors.append("at least one board must be configured")

        seen = set()
        for board in self.boards:
            if not board.name:
                errors.append("board name cannot be empty")
                continue
            if board.name in seen:
                errors.append(f"duplicate board name '{board.name}'")
            seen.add(board.name)

            if board.max_threads < 1:
                errors.append(f"boards.{board.name}.max_threads must be positive")
            if board.max_replies < 1:
                errors.append(f"boards.{board.name}.max_replies must be positive")
            if board.expiry_seconds < 1:
                errors.append(f"boards.{board.name}.expiry_seconds must be positive")

        if self.forum.default_board not in seen:
            errors.append(f"forum.default_board '{self.forum.default_board}' is not a configured board")

        # Identity validation
        if not 4 <= self.identity.tag_length <= 64:
            errors.append("identity.tag_length must be between 4 and 64")
        if self.identity.bucket_seconds < 0:
            errors.append("identity.bucket_seconds cannot be negative")

        # Cache validation
        if self.cache.max_entries < 1:
            errors.append("cache.max_entries must be positive")

        # Rate limit validation
        if self.rate_limits.threads_per_minute < 1 or self.rate_limits.replies_per_minute < 1:
            errors.append("rate_limits values must be positive")

        # Web validation
        if not 0 < self.web.port < 65536:
            errors.append("web.port must be between 1 and 65535")

        return errors

    def save(self, path: Path):
        """Save configuration to TOML file."""
        import toml  # For writing

        with open(path, "w") as f:
            toml.dump(self._to_dict(), f)

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)


def load_config(path: Path) -> Config:
    """Load configuration from TOML file."""
    config = Config()

    if not path.exists():
        return config

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Map TOML sections to config dataclasses
    if "forum" in data:
        config.forum = ForumConfig(**data["forum"])

    if "boards" in data:
        config.boards = [BoardConfig(**board) for board in data["boards"]]

    if "identity" in data:
        config.identity = IdentityConfig(**data["identity"])

    if "cache" in data:
        config.cache = CacheConfig(**data["cache"])

    if "rate_limits" in data:
        config.rate_limits = RateLimitsConfig(**data["rate_limits"])

    if "web" in data:
        config.web = WebConfig(**data["web"])

    if "maintenance" in data:
        config.maintenance = MaintenanceConfig(**data["maintenance"])

    if "logging" in data:
        config.logging = LoggingConfig(**data["logging"])

    return config


def create_default_config(path: Path):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
