"""Blog Core Entry Point.

Loads configuration, sets up logging and storage, builds a BlogContext and
runs the interactive console.
"""

import sys
import argparse
import getpass
import logging
from pathlib import Path

from config.config_manager import ConfigManager
from core.db_manager import DBManager
from logic.blog_context import BlogContext
from logic.content_store import ContentStore
from ui.console import BlogConsole


def setup_logging(log_level: str, log_path: Path):
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_path: Path to log file
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # stdout belongs to the console prompt
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_path, encoding='utf-8'),
            stream_handler
        ]
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at level {log_level}")
    logger.info(f"Log file: {log_path}")


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Blog core console',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with the default configuration
  python main.py

  # Keep everything in memory for this run
  python main.py --in-memory

  # Specify custom config file
  python main.py --config /path/to/settings.yaml
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Override logging level from config'
    )

    parser.add_argument(
        '--in-memory',
        action='store_true',
        help='Do not persist posts and comments'
    )

    return parser.parse_args(argv)


def build_context(config_manager: ConfigManager, in_memory: bool = False) -> BlogContext:
    """
    Build a BlogContext with storage and seed posts per configuration.

    Args:
        config_manager: Loaded configuration
        in_memory: Skip storage even if the configuration enables it

    Returns:
        Ready BlogContext
    """
    logger = logging.getLogger(__name__)
    storage_config = config_manager.get_storage_config()
    content_config = config_manager.get_content_config()

    storage = None
    if storage_config.persist and not in_memory:
        db_path = config_manager.expand_path(storage_config.db_path)
        storage = DBManager(db_path)
        storage.initialize_database()
        logger.info(f"Database initialized: {db_path}")

    content_store = ContentStore(
        storage=storage,
        default_comment_author=content_config.default_comment_author
    )

    if len(content_store) == 0 and content_config.seed_posts:
        content_store.seed(content_config.seed_posts)

    return BlogContext.from_config(config_manager, content_store=content_store)


def main(argv=None):
    """Main application entry point."""
    args = parse_arguments(argv)

    config_path = Path(args.config) if args.config else None
    config_manager = ConfigManager(config_path)

    logging_config = config_manager.get_logging_config()
    if args.log_level:
        logging_config.level = args.log_level

    log_path = config_manager.expand_path(logging_config.log_path)
    setup_logging(logging_config.level, log_path)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Blog Core Starting")
    logger.info("=" * 60)

    context = build_context(config_manager, in_memory=args.in_memory)
    console = BlogConsole(context, password_func=getpass.getpass)

    try:
        console.run()
    except KeyboardInterrupt:
        pass

    logger.info("Application shutdown complete")
    return 0


if __name__ == '__main__':
    sys.exit(main())
