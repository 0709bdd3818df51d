"""アプリケーションのエントリポイント

Usage:
    python -m pulsechat [--config FILE] process [payload.json | -]
    python -m pulsechat [--config FILE] projections (--chat ID | --user ID)
    python -m pulsechat [--config FILE] summary --chat ID [--group] [--force-refresh]
    python -m pulsechat [--config FILE] action-items --chat ID [--group] [--force-refresh]
    python -m pulsechat [--config FILE] decisions --chat ID [--group] [--subject TEXT]
    python -m pulsechat [--config FILE] search --chat ID [--group] QUERY
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from pulsechat.application.actions import CalendarAction, PriorityAction
from pulsechat.application.handlers import NewMessageEventHandler
from pulsechat.application.services import (
    ActionExecutor,
    ContextFetcher,
    create_action_registry,
)
from pulsechat.application.use_cases import AnalyzeChatUseCase, ProcessMessageUseCase
from pulsechat.config import Config, ConfigError, LoggingConfig, load_config
from pulsechat.domain.entities import CollectionType
from pulsechat.domain.exceptions import AIUnavailableError
from pulsechat.domain.services import AIClient
from pulsechat.infrastructure.events import EventDispatcher
from pulsechat.infrastructure.llm import (
    LLMActionRouter,
    LLMCalendarExtractor,
    LLMChatAnalyzer,
    LLMError,
    LLMPriorityDetector,
)
from pulsechat.infrastructure.llm.strands import StrandsAgentFactory, StrandsAIClient
from pulsechat.infrastructure.persistence import (
    DatabaseError,
    DatabaseManager,
    SQLiteCalendarRepository,
    SQLiteChatAnalysisRepository,
    SQLiteChatRepository,
    SQLiteMessageRepository,
    SQLitePriorityRepository,
    SQLiteUserRepository,
)
from pulsechat.presentation.trigger import (
    InvalidTriggerPayloadError,
    build_new_message_event,
)

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def create_ai_client(config: Config, role: str) -> AIClient | None:
    """役割ごとの AI クライアントを生成する（AI 無効時は None）"""
    agent_config = config.agent_for(role)
    if agent_config is None:
        return None
    factory = StrandsAgentFactory()
    return StrandsAIClient(factory.create_model(agent_config), factory)


def build_dispatcher(config: Config, db_manager: DatabaseManager) -> EventDispatcher:
    """依存関係を組み立て、NEW_MESSAGE ハンドラを登録した dispatcher を返す

    Args:
        config: アプリケーション設定
        db_manager: 初期化済みの DatabaseManager

    Returns:
        EventDispatcher
    """
    user_repository = SQLiteUserRepository(db_manager.get_session)
    chat_repository = SQLiteChatRepository(db_manager.get_session)
    message_repository = SQLiteMessageRepository(db_manager.get_session)
    priority_repository = SQLitePriorityRepository(db_manager.get_session)
    calendar_repository = SQLiteCalendarRepository(db_manager.get_session)

    router_client = create_ai_client(config, "router")
    action_router = LLMActionRouter(router_client) if router_client else None
    if action_router is None:
        logger.info("No agents configured, using rule-based routing only")

    registry = create_action_registry(
        PriorityAction(
            LLMPriorityDetector(create_ai_client(config, "priority")),
            priority_repository,
        ),
        CalendarAction(
            LLMCalendarExtractor(create_ai_client(config, "calendar")),
            calendar_repository,
        ),
    )

    process_message = ProcessMessageUseCase(
        context_fetcher=ContextFetcher(
            user_repository, chat_repository, message_repository
        ),
        action_executor=ActionExecutor(registry),
        action_router=action_router,
        history_depth=config.orchestrator.history_depth,
    )

    dispatcher = EventDispatcher()
    handler = NewMessageEventHandler(message_repository, process_message)
    dispatcher.register_handler(handler.handle)
    return dispatcher


def read_payload(source: str) -> dict[str, Any]:
    """トリガーペイロード（JSON）を読み込む

    Args:
        source: ファイルパス、または "-"（標準入力）

    Raises:
        InvalidTriggerPayloadError: JSON オブジェクトではない
    """
    if source == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(source).read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidTriggerPayloadError(f"Invalid JSON payload: {e}") from e
    if not isinstance(payload, dict):
        raise InvalidTriggerPayloadError("Payload must be a JSON object")
    return payload


async def process(config: Config, db_manager: DatabaseManager, source: str) -> int:
    """1 件のメッセージを処理する

    処理の失敗はログに記録するのみで、終了コードには反映しない。
    """
    try:
        event = build_new_message_event(read_payload(source))
    except (InvalidTriggerPayloadError, OSError) as e:
        logger.error("Failed to read trigger payload: %s", e)
        return 1

    dispatcher = build_dispatcher(config, db_manager)
    await dispatcher.dispatch(event)
    return 0


def _section(key: str, items: list[Any] | None, last_updated: int) -> dict[str, Any]:
    return {key: [item.to_dict() for item in items or []], "lastUpdated": last_updated}


async def show_projections(
    db_manager: DatabaseManager,
    chat_id: str | None = None,
    user_id: str | None = None,
) -> dict[str, Any]:
    """保存済みのプロジェクションを取得する

    未作成のプロジェクションは None として返す。
    """
    priority_repository = SQLitePriorityRepository(db_manager.get_session)
    calendar_repository = SQLiteCalendarRepository(db_manager.get_session)

    if chat_id is not None:
        result: dict[str, Any] = {"chatId": chat_id}
        priorities = await priority_repository.find_by_chat(chat_id)
        calendar = await calendar_repository.find_by_chat(chat_id)
    else:
        assert user_id is not None
        result = {"userId": user_id}
        priorities = await priority_repository.find_by_user(user_id)
        calendar = await calendar_repository.find_by_user(user_id)

    result["priorities"] = (
        _section("priorities", priorities.priorities, priorities.last_updated)
        if priorities
        else None
    )
    result["calendar"] = (
        _section("events", calendar.events, calendar.last_updated)
        if calendar
        else None
    )
    return result


ANALYSIS_COMMANDS = ("summary", "action-items", "decisions", "search")


def build_analyze_use_case(
    config: Config, db_manager: DatabaseManager
) -> AnalyzeChatUseCase:
    """分析ユースケースを組み立てる（AI 無効時は analyzer なし）"""
    client = create_ai_client(config, "analysis")
    return AnalyzeChatUseCase(
        message_repository=SQLiteMessageRepository(db_manager.get_session),
        user_repository=SQLiteUserRepository(db_manager.get_session),
        analysis_repository=SQLiteChatAnalysisRepository(db_manager.get_session),
        analyzer=LLMChatAnalyzer(client) if client else None,
    )


async def analyze(
    config: Config, db_manager: DatabaseManager, args: argparse.Namespace
) -> int:
    """チャット分析コマンドを実行し、結果を JSON で出力する

    AI 無効・AI エラー・書き込み失敗・空の検索語は終了コード 1 とする。
    """
    use_case = build_analyze_use_case(config, db_manager)
    collection_type = CollectionType.GROUPS if args.group else CollectionType.CHATS
    result: dict[str, Any] = {"chatId": args.chat}

    try:
        if args.command == "summary":
            result["summary"] = await use_case.generate_summary(
                args.chat, collection_type, force_refresh=args.force_refresh
            )
        elif args.command == "action-items":
            items = await use_case.extract_action_items(
                args.chat, collection_type, force_refresh=args.force_refresh
            )
            result["actionItems"] = [item.to_dict() for item in items]
        elif args.command == "decisions":
            decisions = await use_case.extract_decisions(
                args.chat, collection_type, subject=args.subject
            )
            result["decisions"] = [d.to_dict() for d in decisions]
        else:
            hits = await use_case.search_messages(
                args.chat, collection_type, args.query
            )
            result["results"] = [hit.to_dict() for hit in hits]
    except (AIUnavailableError, LLMError, DatabaseError, ValueError) as e:
        logger.error("Failed to run %s: %s", args.command, e)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def _add_chat_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--chat", required=True, help="チャット ID")
    parser.add_argument(
        "--group",
        action="store_true",
        help="グループとして扱う (groups コレクション)",
    )


def create_parser() -> argparse.ArgumentParser:
    """CLIパーサーを作成"""
    parser = argparse.ArgumentParser(
        prog="pulsechat",
        description="pulsechat メッセージ処理パイプライン",
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="config.yaml のパス (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="コマンド")

    # process
    process_parser = subparsers.add_parser(
        "process", help="トリガーペイロードを 1 件処理する"
    )
    process_parser.add_argument(
        "payload",
        nargs="?",
        default="-",
        help="ペイロード JSON のパス、または - で標準入力 (default: -)",
    )

    # projections
    projections_parser = subparsers.add_parser(
        "projections", help="優先度・カレンダーのプロジェクションを表示"
    )
    target = projections_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--chat", help="チャット ID")
    target.add_argument("--user", help="ユーザー ID")

    # chat analysis
    summary_parser = subparsers.add_parser("summary", help="チャットを要約する")
    _add_chat_arguments(summary_parser)
    summary_parser.add_argument(
        "--force-refresh", action="store_true", help="キャッシュを使わず再生成"
    )

    action_items_parser = subparsers.add_parser(
        "action-items", help="アクションアイテムを抽出する"
    )
    _add_chat_arguments(action_items_parser)
    action_items_parser.add_argument(
        "--force-refresh", action="store_true", help="キャッシュを使わず再抽出"
    )

    decisions_parser = subparsers.add_parser("decisions", help="決定事項を抽出する")
    _add_chat_arguments(decisions_parser)
    decisions_parser.add_argument("--subject", help="対象とする話題")

    search_parser = subparsers.add_parser("search", help="メッセージを検索する")
    _add_chat_arguments(search_parser)
    search_parser.add_argument("query", help="検索語")

    return parser


async def main(argv: list[str] | None = None) -> int:
    """メインエントリポイント

    Returns:
        終了コード
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return 1

    configure_logging(config.logging)

    db_manager = DatabaseManager(config.database.path)
    await db_manager.create_tables()

    try:
        if args.command == "process":
            return await process(config, db_manager, args.payload)

        if args.command in ANALYSIS_COMMANDS:
            return await analyze(config, db_manager, args)

        projections = await show_projections(
            db_manager, chat_id=args.chat, user_id=args.user
        )
        print(json.dumps(projections, indent=2, ensure_ascii=False))
        return 0
    finally:
        await db_manager.close()


def run() -> None:
    """Run the async main function."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
