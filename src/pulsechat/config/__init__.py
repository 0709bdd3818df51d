"""設定管理モジュール"""

from pulsechat.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from pulsechat.config.models import (
    AgentConfig,
    Config,
    DatabaseConfig,
    LoggingConfig,
    OrchestratorConfig,
)

__all__ = [
    "AgentConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DatabaseConfig",
    "EnvironmentVariableError",
    "LoggingConfig",
    "OrchestratorConfig",
    "expand_env_vars",
    "load_config",
]
