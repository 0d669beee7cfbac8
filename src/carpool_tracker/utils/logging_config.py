"""
Centralized logging configuration for Carpool Tracker.

Every component (model, commands, storage, cli, main) gets its own
``carpool.<component>`` logger. When file logging is enabled each session
writes to its own directory:

    <log_dir>/<YYYYmmdd_HHMMSS>/
        session_info.txt
        <component>.log
        errors.log
        unified.log      (every component interleaved)

Errors from ``main`` and ``error`` are also echoed to stderr.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_config, get_log_directory as get_configured_log_directory

LOGGER_PREFIX = "carpool"

FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - '
    '%(funcName)s() - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
CONSOLE_FORMAT = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')

COMPONENT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
UNIFIED_MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 3

# Module packages that log under a shared component name
MODULE_COMPONENTS = {
    'store': 'model',
    'domain': 'model',
    'commands': 'commands',
    'logic': 'commands',
    'cli': 'cli',
    'display': 'cli',
}


def _rotating_handler(path: Path, level: int, max_bytes: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=BACKUP_COUNT, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


class ComponentLogger:
    """Manages component-specific loggers with separate files."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None
    _log_to_file = True
    _debug = False
    _unified_handler: Optional[logging.Handler] = None

    # Default level per component
    COMPONENTS = {
        'model': logging.INFO,
        'commands': logging.INFO,
        'storage': logging.INFO,
        'cli': logging.INFO,
        'main': logging.INFO,
        'error': logging.ERROR,  # Centralized error log
    }
    CONSOLE_COMPONENTS = ('main', 'error')
    LOG_FILES = {'error': 'errors.log'}

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
        """
        Set up every component logger once per process.

        Args:
            log_dir: Base directory for session folders. Defaults to the configured one
            debug: Log everything at DEBUG. Defaults to the configured flag
        """
        if cls._initialized:
            return

        config = get_config()
        cls._debug = config.app.debug if debug is None else debug
        cls._log_to_file = config.app.log_to_file

        session = datetime.now().strftime("%Y%m%d_%H%M%S")
        if cls._log_to_file:
            base_dir = Path(log_dir) if log_dir else get_configured_log_directory()
            cls._log_dir = base_dir / session
            cls._log_dir.mkdir(parents=True, exist_ok=True)
            cls._write_session_info(config)
            cls._unified_handler = _rotating_handler(
                cls._log_dir / 'unified.log', cls._level(logging.INFO), UNIFIED_MAX_BYTES
            )

        for component, default_level in cls.COMPONENTS.items():
            cls._loggers[component] = cls._build_logger(component, default_level)

        unified = logging.getLogger(f'{LOGGER_PREFIX}.unified')
        unified.handlers.clear()
        unified.propagate = False
        unified.setLevel(cls._level(logging.INFO))
        if cls._unified_handler is not None:
            unified.addHandler(cls._unified_handler)
        cls._loggers['unified'] = unified

        # Set before the first message so get_logger does not recurse
        cls._initialized = True

        main_logger = cls._loggers['main']
        main_logger.info(f"Carpool Tracker logging started (session {session})")
        main_logger.info(f"Log directory: {cls._log_dir or 'disabled'}; debug: {cls._debug}")

    @classmethod
    def _level(cls, default: int) -> int:
        return logging.DEBUG if cls._debug else default

    @classmethod
    def _write_session_info(cls, config) -> None:
        lines = [
            f"Session started: {datetime.now().isoformat()}",
            f"Version: {config.app.version}",
            f"Debug mode: {cls._debug}",
            f"Home directory: {config.app.home_dir}",
            f"Address book: {config.storage.data_file}",
            f"Log directory: {cls._log_dir}",
        ]
        (cls._log_dir / "session_info.txt").write_text("\n".join(lines) + "\n", encoding='utf-8')

    @classmethod
    def _build_logger(cls, component: str, default_level: int = logging.INFO) -> logging.Logger:
        logger = logging.getLogger(f"{LOGGER_PREFIX}.{component}")
        logger.handlers.clear()
        logger.propagate = False

        level = cls._level(default_level)
        logger.setLevel(level)

        if cls._log_to_file and cls._log_dir is not None:
            file_name = cls.LOG_FILES.get(component, f'{component}.log')
            logger.addHandler(_rotating_handler(cls._log_dir / file_name, level, COMPONENT_MAX_BYTES))
            if cls._unified_handler is not None:
                logger.addHandler(cls._unified_handler)

        if component in cls.CONSOLE_COMPONENTS:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(logging.ERROR)
            console.setFormatter(CONSOLE_FORMAT)
            logger.addHandler(console)

        return logger

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """
        Get the logger for a component.

        Args:
            component: Component name, or a module path such as
                       ``carpool_tracker.store.model``
        """
        if not cls._initialized:
            cls.initialize()

        if component.startswith('carpool_tracker.'):
            package = component.split('.')[1]
            component = MODULE_COMPONENTS.get(package, package)

        if component not in cls._loggers:
            cls._loggers[component] = cls._build_logger(component)
        return cls._loggers[component]

    @classmethod
    def log_exception(cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an exception to its component log and the central error log.

        Args:
            component: Component where the exception occurred
            exc: The exception to log
            context: Additional key/value details
        """
        details = ""
        if context:
            details = " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())

        summary = f"{type(exc).__name__}: {exc}{details}"
        cls.get_logger(component).error(f"Exception in {component}: {summary}", exc_info=exc)
        cls._loggers['error'].error(f"[{component}] {summary}", exc_info=exc)

    @classmethod
    def get_log_directory(cls) -> Optional[Path]:
        """Directory of the current session, or None when file logging is off."""
        return cls._log_dir

    @classmethod
    def shutdown(cls) -> None:
        """Close all handlers and allow a fresh initialize()."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
        cls._loggers = {}
        cls._log_dir = None
        cls._unified_handler = None
        cls._initialized = False


# Convenience functions
def get_logger(component: str) -> logging.Logger:
    """Get a logger for a specific component."""
    return ComponentLogger.get_logger(component)


def initialize_logging(log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
    """Initialize the logging system."""
    ComponentLogger.initialize(log_dir=log_dir, debug=debug)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context."""
    ComponentLogger.log_exception(component, exc, context)


def get_log_directory() -> Optional[Path]:
    """Get the current session log directory."""
    return ComponentLogger.get_log_directory()
