"""
Command line interface for trimerge.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading
- Reading the three inputs and writing the merged result
- Exception handling
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from trimerge import __version__
from trimerge.core.merge.conflict_resolver import (
    ConflictLabels,
    ConflictMarkerParser,
    ConflictMarkerWriter,
    MergeStrategy,
)
from trimerge.core.merge.three_way import ThreeWayMergeEngine
from trimerge.services.file_io import FileIOService, LineEnding
from trimerge.services.settings import ApplicationSettings, SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "trimerge"

EXIT_CLEAN = 0
EXIT_CONFLICTS = 1
EXIT_ERROR = 2


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    mine_path: str = ""
    base_path: str = ""
    yours_path: str = ""
    output_path: Optional[str] = None
    strategy: Optional[str] = None
    show_base: Optional[bool] = None
    mine_label: Optional[str] = None
    base_label: Optional[str] = None
    yours_label: Optional[str] = None
    config_file: Optional[str] = None
    log_level: Optional[str] = None
    debug: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    # stdout carries the merged text
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """Global handler that logs unhandled exceptions."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Line-based three-way text merge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s mine.txt base.txt yours.txt             Print merged text
  %(prog)s mine.txt base.txt yours.txt -o out.txt  Write merged text to a file
  %(prog)s --strategy yours mine.txt base.txt yours.txt

Exit status is 0 for a clean merge, 1 if conflicts remain and 2 on error.
        """
    )

    parser.add_argument('mine', help='My version of the file')
    parser.add_argument('base', help='Common ancestor of both versions')
    parser.add_argument('yours', help='Your version of the file')

    parser.add_argument(
        '-o', '--output',
        help='Output file (default: standard output)'
    )
    parser.add_argument(
        '-s', '--strategy',
        choices=[strategy.value for strategy in MergeStrategy],
        default=None,
        help='How to write conflicts (default: manual markers)'
    )
    parser.add_argument(
        '--no-base',
        action='store_true',
        help='Omit the base section from conflict markers'
    )

    # Labels
    parser.add_argument('--label-mine', help='Label for the mine conflict marker')
    parser.add_argument('--label-base', help='Label for the base conflict marker')
    parser.add_argument('--label-yours', help='Label for the yours conflict marker')

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Configuration file path'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {__version__}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs(
        mine_path=parsed.mine,
        base_path=parsed.base,
        yours_path=parsed.yours,
        output_path=parsed.output,
        strategy=parsed.strategy,
        show_base=False if parsed.no_base else None,
        mine_label=parsed.label_mine,
        base_label=parsed.label_base,
        yours_label=parsed.label_yours,
        config_file=parsed.config,
        debug=parsed.debug,
    )

    if parsed.debug:
        result.log_level = "DEBUG"
    elif parsed.verbose:
        result.log_level = "INFO"

    return result


# =============================================================================
# Merge
# =============================================================================

def load_settings(args: CommandLineArgs) -> ApplicationSettings:
    """Load settings from the configured file."""
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)
    return manager.settings


def build_writer(args: CommandLineArgs, settings: ApplicationSettings) -> ConflictMarkerWriter:
    """Create the conflict writer, command line values overriding settings."""
    merge_settings = settings.merge
    labels = ConflictLabels(
        mine=args.mine_label or args.mine_path,
        base=args.base_label or args.base_path,
        yours=args.yours_label or args.yours_path,
    )
    strategy = MergeStrategy.from_string(args.strategy or merge_settings.strategy)
    show_base = merge_settings.show_base_in_conflicts if args.show_base is None else args.show_base

    return ConflictMarkerWriter(
        labels=labels,
        strategy=strategy,
        show_base=show_base,
        marker_size=merge_settings.marker_size,
    )


def output_line_ending(line_ending: LineEnding) -> LineEnding:
    """Line ending for the merged file; only consistent CRLF input is kept."""
    return LineEnding.CRLF if line_ending == LineEnding.CRLF else LineEnding.LF


def run_merge(args: CommandLineArgs, settings: ApplicationSettings) -> int:
    """
    Merge the three input files and write the result.

    Returns:
        Exit code
    """
    logger = logging.getLogger(APP_NAME)
    file_io = FileIOService()

    texts = {}
    for name, path in (('base', args.base_path), ('mine', args.mine_path), ('yours', args.yours_path)):
        read = file_io.read_file(path)
        if not read.success:
            logger.error("Cannot read %s file: %s", name, read.error)
            return EXIT_ERROR
        texts[name] = read.content

    try:
        writer = build_writer(args, settings)
    except ValueError as e:
        logger.error("Invalid merge settings: %s", e)
        return EXIT_ERROR

    parser = ConflictMarkerParser(writer.marker_size)
    for name, text in texts.items():
        if parser.has_conflict_markers(text.content):
            logger.warning("The %s file already contains conflict markers", name)

    result = ThreeWayMergeEngine().merge_result(
        texts['base'].content,
        texts['mine'].content,
        texts['yours'].content,
    )
    merged = writer.render(result)

    stats = result.statistics
    logger.info(
        "Merged with %d change(s) and %d conflict(s)",
        stats.total_changes - stats.conflicts, stats.conflicts
    )

    if args.output_path:
        written = file_io.write_file(
            args.output_path,
            merged,
            encoding=texts['mine'].encoding,
            line_ending=output_line_ending(texts['mine'].line_ending),
            create_backup=settings.merge.create_backup,
            backup_extension=settings.merge.backup_extension,
        )
        if not written.success:
            logger.error("Cannot write output: %s", written.error)
            return EXIT_ERROR
    else:
        sys.stdout.write(merged)
        sys.stdout.flush()

    if result.has_conflicts and writer.strategy == MergeStrategy.MANUAL:
        return EXIT_CONFLICTS
    return EXIT_CLEAN


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Returns:
        Exit code (0 for a clean merge)
    """
    args = parse_arguments(argv)
    settings = load_settings(args)

    level = args.log_level or settings.logging.level
    log_file = Path(settings.logging.log_file) if settings.logging.log_file else None
    try:
        logger = setup_logging(level, log_file)
    except OSError as e:
        logging.getLogger(APP_NAME).error("Cannot open log file %s: %s", log_file, e)
        return EXIT_ERROR
    logger.debug(f"Starting {APP_NAME} v{__version__}")

    return run_merge(args, settings)


# =============================================================================
# Entry Point
# =============================================================================

def run() -> None:
    """Console script entry point."""
    exception_handler = ExceptionHandler(logging.getLogger(APP_NAME))
    sys.excepthook = exception_handler.handle_exception
    try:
        code = main()
    except Exception:
        exception_handler.handle_exception(*sys.exc_info())
        code = EXIT_ERROR
    sys.exit(code)
