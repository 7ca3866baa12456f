"""
Configuration Management for StarForm

🔧 Unified Configuration System:
Library-wide settings, currently the logging setup of the ``starform``
logger, with presets per environment.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum
import logging
import os

LOGGER_NAME = "starform"

class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None

@dataclass
class StarFormConfig:
    """Complete library configuration"""
    environment: Environment = Environment.DEVELOPMENT
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'StarFormConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.logging.level = "DEBUG"
        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"
        elif environment == Environment.PRODUCTION:
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StarFormConfig':
        """Create configuration from dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        for key, value in config_dict.get("logging", {}).items():
            if hasattr(config.logging, key):
                setattr(config.logging, key, value)

        return config

    @classmethod
    def from_environment(cls) -> 'StarFormConfig':
        """Create configuration from environment variables"""
        env_name = os.getenv('STARFORM_ENV', 'development')
        config = cls.for_environment(Environment(env_name))

        if os.getenv('STARFORM_LOG_LEVEL'):
            config.logging.level = os.getenv('STARFORM_LOG_LEVEL').upper()

        if os.getenv('STARFORM_LOG_FILE'):
            config.logging.file_path = os.getenv('STARFORM_LOG_FILE')

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file_path": self.logging.file_path,
            },
        }

def configure_logging(config: Optional[StarFormConfig] = None) -> logging.Logger:
    """Attach a handler to the ``starform`` logger according to ``config``"""
    config = config or get_config()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.logging.level)

    for handler in list(logger.handlers):
        if getattr(handler, "_starform_handler", False):
            logger.removeHandler(handler)
            handler.close()

    if config.logging.file_path:
        handler = logging.FileHandler(config.logging.file_path)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))
    handler._starform_handler = True
    logger.addHandler(handler)
    return logger

# Global configuration management
_current_config: Optional[StarFormConfig] = None

def set_config(config: StarFormConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config

def get_config() -> StarFormConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        # Auto-create from environment if not set
        _current_config = StarFormConfig.from_environment()

    return _current_config

def configure_from_dict(config_dict: Dict[str, Any]) -> StarFormConfig:
    """Configure the library from a dictionary and apply its logging setup"""
    config = StarFormConfig.from_dict(config_dict)
    set_config(config)
    configure_logging(config)
    return config

# Export main components
__all__ = [
    "StarFormConfig", "Environment", "LoggingConfig", "LOGGER_NAME",
    "configure_logging", "set_config", "get_config", "configure_from_dict",
]
