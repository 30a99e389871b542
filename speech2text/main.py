"""Main application entry point for speech2text."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from . import __version__
from .config import Speech2TextConfig
from .ui.transcription_screen import TranscriptionScreen

logger = logging.getLogger(__name__)


def setup_logging(config: Speech2TextConfig, level: str = "INFO") -> None:
    """Set up logging configuration from the loaded config."""
    log_file_path = config.get('logging.file_path', 'data/logs/speech2text.log')
    console_output = config.get('logging.console_output', False)

    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - stderr only, the screen belongs to the UI
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("speech2text starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="speech2text - extract audio and transcribe speech from video/audio files",
        epilog="Keys: arrows/j/k navigate, enter selects, q quits"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config, default: INFO)"
    )

    parser.add_argument(
        "--directory",
        type=str,
        help="Directory the file browser starts in (default: current directory)"
    )

    parser.add_argument(
        "--model",
        type=str,
        help="Whisper model name, e.g. tiny, base, small (overrides config)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"speech2text v{__version__}"
    )

    return parser


def apply_overrides(config: Speech2TextConfig, args: argparse.Namespace) -> None:
    """Copy command line values over the loaded configuration."""
    if args.log_level:
        config.set('logging.level', args.log_level)
    if args.directory:
        config.set('ui.start_directory', str(Path(args.directory).expanduser().absolute()))
    if args.model:
        config.set('pipeline.model', args.model)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for speech2text. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    console = Console()
    error_console = Console(stderr=True)

    try:
        config = Speech2TextConfig(args.config)
    except (FileNotFoundError, ValueError) as e:
        error_console.print(f"Error: {e}", style="bold red")
        return 1

    apply_overrides(config, args)
    setup_logging(config, config.get('logging.level', 'INFO'))

    if not sys.stdin.isatty() or not console.is_terminal:
        error_console.print("Error: speech2text needs an interactive terminal", style="bold red")
        logger.error("stdin/stdout is not a terminal, exiting")
        return 1

    console.print("[bold]Speech-to-Text CLI[/bold]")
    console.print("A tool to extract audio and transcribe speech from video/audio files")

    try:
        screen = TranscriptionScreen(config, console=console)
        screen.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        error_console.print(f"Error: {e}", style="bold red")
        logger.error(f"Application error: {e}", exc_info=True)
        return 1

    logger.info("speech2text exited normally")
    return 0


if __name__ == "__main__":
    sys.exit(main())
