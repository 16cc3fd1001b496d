"""
Logging utilities for the salesim package.
Gives every module the same console/file setup and a few helpers for run summaries.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime


class SimLogger:
    """
    Thin wrapper around a stdlib logger sharing one package-wide configuration.

    Features:
    - One named logger per module
    - Console output on stdout
    - Optional rotating log file
    - Helpers for timings, metrics and errors with context
    """

    # Package-wide configuration
    _global_config: Dict[str, Any] = {
        'level': 'INFO',
        'log_file': None,
        'console_output': True,
        'file_output': True,
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
        'max_file_size': 5 * 1024 * 1024,  # 5MB
        'backup_count': 3
    }

    # Registry of created loggers
    _loggers: Dict[str, 'SimLogger'] = {}

    def __init__(self, name: str, level: str = None, log_file: Optional[str] = None):
        """
        Initialize the logger

        Args:
            name: Logger name (usually __name__)
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for logging
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self._level = level
        self._log_file = log_file
        self._configure_handlers()

        # Handlers live on this logger, the root would print every line twice
        self.logger.propagate = False

        SimLogger._loggers[name] = self

    def _configure_handlers(self):
        """(Re)build handlers from the global configuration"""
        level = self._level or self._global_config['level']
        log_file = self._log_file or self._global_config['log_file']

        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            self._global_config['format'],
            datefmt=self._global_config['date_format']
        )

        if self._global_config['console_output']:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self._global_config['file_output'] and log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Setup rotating file handler"""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self._global_config['max_file_size'],
            backupCount=self._global_config['backup_count']
        )
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def debug(self, message: str):
        self.logger.debug(message)

    def info(self, message: str):
        self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def log_step_completion(self, step_name: str, duration: float,
                            details: Dict[str, Any] = None):
        """Log step completion with timing and details"""
        message = f"✅ {step_name} completed in {duration:.2f}s"
        if details:
            detail_str = ", ".join([f"{k}: {v}" for k, v in details.items()])
            message += f" - {detail_str}"
        self.info(message)

    def log_performance_metrics(self, operation: str, metrics: Dict[str, Any]):
        """Log a flat mapping of metrics on one line"""
        metric_str = ", ".join([f"{k}: {v}" for k, v in metrics.items()])
        self.info(f"📈 {operation}: {metric_str}")

    def log_error_with_context(self, error: Exception, context: str = ""):
        """Log error with context information"""
        message = f"❌ {context}: {error}" if context else f"❌ Error: {error}"
        self.error(message)

    @classmethod
    def configure_global(cls, **kwargs):
        """Update global settings and rebuild every registered logger"""
        cls._global_config.update(kwargs)

        for logger in cls._loggers.values():
            logger._configure_handlers()

    @classmethod
    def set_level(cls, level: str):
        """Set global log level"""
        cls.configure_global(level=level)


def get_logger(name: str = None, level: str = None,
               log_file: Optional[str] = None) -> SimLogger:
    """
    Get or create a logger instance

    Args:
        name: Logger name (defaults to 'salesim')
        level: Logging level
        log_file: Optional log file path

    Returns:
        SimLogger instance
    """
    if name is None:
        name = "salesim"

    if name in SimLogger._loggers:
        logger = SimLogger._loggers[name]
        if level and level != logger._level:
            logger._level = level
            logger._configure_handlers()
        return logger

    return SimLogger(name, level, log_file)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  console_output: bool = True, file_output: bool = True):
    """
    Setup global logging configuration

    Args:
        level: Logging level
        log_file: Optional log file path
        console_output: Enable console output
        file_output: Enable file output
    """
    SimLogger.configure_global(
        level=level,
        log_file=log_file,
        console_output=console_output,
        file_output=file_output
    )

    # Third-party libraries log through the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        SimLogger._global_config['format'],
        datefmt=SimLogger._global_config['date_format']
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)


def configure_workflow_logging(workflow_name: str, log_level: str = "INFO",
                               log_dir: str = "output/logs") -> SimLogger:
    """
    Configure logging for one CLI run, writing a timestamped log file

    Args:
        workflow_name: Name used for the log file and the first log line
        log_level: Logging level
        log_dir: Directory for log files

    Returns:
        The 'workflow' logger
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = f"{log_dir}/{workflow_name}_{timestamp}.log"

    setup_logging(
        level=log_level,
        log_file=log_file,
        console_output=True,
        file_output=True
    )

    logger = get_logger("workflow")
    logger.info(f"🚀 {workflow_name} started")
    logger.info(f"📝 Log file: {log_file}")
    return logger
