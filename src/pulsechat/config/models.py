"""設定データクラス"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DatabaseConfig:
    """データベース設定"""

    path: str


@dataclass
class AgentConfig:
    """strands-agents の LiteLLMModel に渡す設定

    Attributes:
        model_id: LiteLLM のモデル ID（例: gemini/gemini-2.5-flash-lite）
        params: completion パラメータ（temperature など）
        client_args: クライアント引数（api_key など）
    """

    model_id: str
    params: dict[str, Any] = field(default_factory=dict)
    client_args: dict[str, Any] = field(default_factory=dict)


@dataclass
class OrchestratorConfig:
    """メッセージ処理パイプライン設定

    Attributes:
        history_depth: コンテキストとして取得する過去メッセージ数
    """

    history_depth: int = 5


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """アプリケーション設定

    agents が空の場合は AI が利用できないものとして扱い、
    ルールベースのフォールバックで処理する。
    """

    database: DatabaseConfig
    agents: dict[str, AgentConfig] = field(default_factory=dict)
    orchestrator: OrchestratorConfig = field(default_factory=OrchestratorConfig)
    logging: LoggingConfig | None = None

    @property
    def ai_enabled(self) -> bool:
        """AI エージェント設定が存在するか"""
        return "default" in self.agents

    def agent_for(self, role: str) -> AgentConfig | None:
        """役割ごとのエージェント設定を取得する

        役割固有の設定がなければ default を返す。

        Args:
            role: router / priority / calendar / analysis

        Returns:
            AgentConfig（AI 無効時は None）
        """
        return self.agents.get(role, self.agents.get("default"))
