"""
BumpBoard Entry Point

Usage:
    python -m bumpboard              # Run the board server
    python -m bumpboard config       # Inspect or create configuration
    python -m bumpboard --help       # Show help
"""

import argparse
import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import __version__


def setup_logging(level: str, log_file: str | None = None, max_size_mb: int = 10, backup_count: int = 3):
    """Configure logging for the application."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count
        ))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
        force=True
    )


def run_config(args, logger: logging.Logger) -> int:
    """Handle the config subcommand."""
    from .config import load_config, create_default_config

    if args.init:
        if args.config.exists():
            logger.error(f"{args.config} already exists")
            return 1
        create_default_config(args.config)
        print(f"Wrote default configuration to {args.config}")
        return 0

    config = load_config(args.config)

    if args.validate:
        errors = config.validate()
        for error in errors:
            print(f"  - {error}")
        if errors:
            return 1
        print("Configuration OK")
        return 0

    import toml
    print(toml.dumps(config._to_dict()))
    return 0


def serve(args, logger: logging.Logger) -> int:
    """Load configuration and run the HTTP server."""
    from .config import load_config
    from .core.forum import Forum
    from .core.maintenance import MaintenanceManager
    from .web.app import create_app

    config = load_config(args.config)

    # Re-apply logging with file settings from config
    setup_logging(
        args.log_level or config.logging.level,
        config.logging.file or None,
        config.logging.max_size_mb,
        config.logging.backup_count
    )

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        return 1

    forum = Forum(config)
    maintenance = MaintenanceManager(forum)
    app = create_app(forum, config)

    logger.info(f"Starting BumpBoard v{__version__} on {config.web.host}:{config.web.port}")
    maintenance.start()
    try:
        app.run(host=config.web.host, port=config.web.port, threaded=True)
    finally:
        maintenance.stop()
    return 0


def main():
    """Main entry point for BumpBoard."""
    parser = argparse.ArgumentParser(
        prog="bumpboard",
        description="BumpBoard - Minimal ephemeral discussion boards"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"BumpBoard {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("serve", help="Run the board server (default)")

    config_parser = subparsers.add_parser("config", help="Configuration interface")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--validate", action="store_true", help="Validate config")
    config_parser.add_argument("--init", action="store_true", help="Write a default config file")

    args = parser.parse_args()

    setup_logging(args.log_level or "INFO")
    logger = logging.getLogger("bumpboard")

    if args.command == "config":
        sys.exit(run_config(args, logger))

    try:
        sys.exit(serve(args, logger))
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
