"""Main entry point for the character sheet editor."""

import logging
import sys

from .config import AppConfig, load_config


def setup_paths(config: AppConfig) -> None:
    """Ensure required directories exist."""
    config.paths.exports.mkdir(parents=True, exist_ok=True)
    config.logging.file.parent.mkdir(parents=True, exist_ok=True)


def setup_logging(config: AppConfig) -> None:
    """Send log records to the configured file.

    The terminal belongs to the UI, so nothing is logged to stderr.
    """
    logging.basicConfig(
        filename=config.logging.file,
        level=config.logging.level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        encoding="utf-8",
    )


def main() -> int:
    """Main entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        config = load_config()
        setup_paths(config)
        setup_logging(config)

        # Import and run the UI app
        from .ui.app import CharacterSheetApp

        app = CharacterSheetApp(config)
        app.run()

        return 0

    except KeyboardInterrupt:
        print("\nFarewell, adventurer!")
        return 0
    except Exception as e:
        logging.getLogger(__name__).exception("Fatal error")
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
