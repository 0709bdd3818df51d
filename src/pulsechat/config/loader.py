"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from pulsechat.config.models import (
    AgentConfig,
    Config,
    DatabaseConfig,
    LoggingConfig,
    OrchestratorConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _load_agents(agents_data: dict[str, Any]) -> dict[str, AgentConfig]:
    """agents セクションを読み込む（default は必須）"""
    if not isinstance(agents_data, dict):
        raise ConfigValidationError("'agents' must be a mapping")
    _validate_required_field(agents_data, "default", "agents")
    agents: dict[str, AgentConfig] = {}
    for key, agent_item in agents_data.items():
        if not isinstance(agent_item, dict):
            raise ConfigValidationError(f"'agents.{key}' must be a mapping")
        model_id = _validate_required_field(agent_item, "model_id", f"agents.{key}")
        agents[key] = AgentConfig(
            model_id=model_id,
            params=agent_item.get("params") or {},
            client_args=agent_item.get("client_args") or {},
        )
    return agents


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    # 環境変数を展開
    data = _expand_recursive(raw_data)

    # DatabaseConfig
    database_data = _validate_required_field(data, "database")
    database = DatabaseConfig(
        path=_validate_required_field(database_data, "path", "database"),
    )

    # AgentConfig (optional, 無い場合は AI 無効)
    agents: dict[str, AgentConfig] = {}
    agents_data = data.get("agents")
    if agents_data:
        agents = _load_agents(agents_data)

    # OrchestratorConfig (optional)
    orchestrator = OrchestratorConfig()
    orchestrator_data = data.get("orchestrator")
    if orchestrator_data:
        history_depth = orchestrator_data.get("history_depth", 5)
        if not isinstance(history_depth, int) or history_depth < 0:
            raise ConfigValidationError(
                "'orchestrator.history_depth' must be a non-negative integer"
            )
        orchestrator = OrchestratorConfig(history_depth=history_depth)

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
        )

    return Config(
        database=database,
        agents=agents,
        orchestrator=orchestrator,
        logging=logging_config,
    )
