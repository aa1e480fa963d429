"""Command line entry point.

    league-gpt run      # poll the League client, type "r" then Enter for a manual query
    league-gpt serve    # same pipelines behind the HTTP API
"""
import argparse
import asyncio
import logging
import sys
import threading
from typing import Optional

from league_gpt.config import ConfigurationError, Settings, get_settings
from league_gpt.services.assistant import LeagueAssistant
from league_gpt.services.league_client import LeagueClientError

logger = logging.getLogger("league_gpt")


def setup_logging(level: str = "INFO"):
    """Configure console logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    # httpx logs every poll request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _listen_for_manual_queries(assistant: LeagueAssistant, loop: asyncio.AbstractEventLoop):
    """Read stdin lines; "r" requests a manual recommendation."""
    for line in sys.stdin:
        if line.strip().lower() != "r":
            continue
        if assistant.controller is None:
            continue
        asyncio.run_coroutine_threadsafe(assistant.controller.request_manual(), loop)


async def run_console(settings: Settings):
    """Run both pipelines until interrupted."""
    assistant = LeagueAssistant(settings)
    await assistant.start()
    logger.info("Type 'r' and press Enter anytime to manually request an AI recommendation")

    loop = asyncio.get_running_loop()
    threading.Thread(
        target=_listen_for_manual_queries,
        args=(assistant, loop),
        daemon=True,
        name="manual-query-input",
    ).start()

    try:
        await asyncio.Event().wait()
    finally:
        await assistant.stop()


def cmd_run(args, settings: Settings) -> int:
    try:
        asyncio.run(run_console(settings))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except LeagueClientError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    return 0


def cmd_serve(args, settings: Settings) -> int:
    import uvicorn

    from league_gpt.main import app

    app.state.settings = settings
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="league-gpt",
        description="AI champion select assistant for the League of Legends client",
    )
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--mock", action="store_true", help="Use canned recommendations instead of the API")
    parser.add_argument("--no-auto-accept", action="store_true", help="Disable ready check auto accept")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser(
        "run",
        help="Watch champion select from the console",
        description='Watch champion select from the console. Type "r" (or "R") and press Enter '
        "to request a recommendation manually; input is line buffered.",
    )
    p_serve = sub.add_parser("serve", help="Start the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)
    settings = get_settings()
    overrides = {}
    if args.mock:
        overrides["use_mock_recommendations"] = True
    if args.no_auto_accept:
        overrides["auto_accept_enabled"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)
    setup_logging(args.log_level or settings.log_level)

    commands = {
        "run": cmd_run,
        "serve": cmd_serve,
    }
    if args.command not in commands:
        parser.print_help()
        return 1
    return commands[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
