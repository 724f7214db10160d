#!/usr/bin/env python3
"""
VoiceDesk Command Line Interface

Main entry point for the `voicedesk` command. Typed lines stand in for
final speech recognition results.

Usage:
    voicedesk run                          # Interactive session against the API
    voicedesk run --dry-run                # Interactive session, in-memory services
    voicedesk run -c "add expense 12 for lunch"
    voicedesk parse "create task call mom tomorrow"
    voicedesk commands                     # List available voice commands
    voicedesk --version
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv


def _build_services(args, config):
    """Return (ServiceContext, ApiClient or None) for the chosen backend."""
    from voicedesk.voice.services import QueryCache, ServiceContext
    from voicedesk.voice.services.memory import (
        EchoAIService,
        InMemoryFinanceService,
        InMemoryTaskService,
        RecordingNavigator,
    )

    class PrintNavigator(RecordingNavigator):
        def navigate(self, path: str) -> None:
            super().navigate(path)
            print(f"-> {path}")

    if args.dry_run:
        services = ServiceContext(
            tasks=InMemoryTaskService(),
            finance=InMemoryFinanceService(),
            ai=EchoAIService(),
            navigator=PrintNavigator(),
            cache=QueryCache(),
        )
        return services, None

    from voicedesk.voice.services.http_client import ApiClient

    api = ApiClient(
        base_url=args.base_url or config.services.base_url,
        timeout=config.services.request_timeout_seconds,
        headers=config.services.headers,
    )
    services = ServiceContext(
        tasks=api.tasks,
        finance=api.finance,
        ai=api.ai,
        navigator=PrintNavigator(),
        cache=QueryCache(),
    )
    return services, api


async def _run_session(args) -> int:
    from voicedesk.voice.config import load_voice_config
    from voicedesk.voice.models import RecognitionEvent
    from voicedesk.voice.parser.command_router import create_default_router
    from voicedesk.voice.recognition.console import PrintSpeaker, TypedRecognizer
    from voicedesk.voice.session.controller import SessionController

    config = load_voice_config()
    if args.language:
        config.session.language = args.language

    services, api = _build_services(args, config)
    controller = SessionController(
        recognizer=TypedRecognizer(),
        speaker=PrintSpeaker(),
        router=create_default_router(services),
        config=config.session,
        speech_config=config.speech,
        on_error=lambda e: print(f"Voice unavailable: {e}", file=sys.stderr),
    )
    # Every typed line is a command, so keep listening between them
    controller.update_settings(continuous=True)

    try:
        if not await controller.start_session():
            return 1

        commands = [args.command] if args.command else None
        if commands is None:
            print("Type a command (empty line or Ctrl-D to quit).")

        while True:
            if commands is not None:
                if not commands:
                    break
                line = commands.pop(0)
            else:
                try:
                    line = await asyncio.to_thread(input, "> ")
                except EOFError:
                    break
                if not line.strip():
                    break

            await controller.handle_recognition_result(
                RecognitionEvent(transcript=line, confidence=1.0, is_final=True)
            )
    finally:
        await controller.stop_session()
        if api is not None:
            await api.aclose()

    return 0


def cmd_run(args):
    """Handle run subcommand."""
    return asyncio.run(_run_session(args))


def cmd_parse(args):
    """Handle parse subcommand: print the parsed command without executing it."""
    from voicedesk.voice.parser.intent_parser import parse_command

    command = parse_command(args.text, confidence=1.0)
    print(json.dumps(command.to_dict(), indent=2))
    return 0


def cmd_commands(args):
    """Handle commands subcommand."""
    from voicedesk.voice.parser.intent_parser import AVAILABLE_COMMANDS

    for category, commands in AVAILABLE_COMMANDS.items():
        print(f"{category}:")
        for entry in commands:
            print(f"  {entry['command']:<42} e.g. \"{entry['example']}\"")
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="voicedesk",
        description="VoiceDesk - voice commands for tasks and finances",
    )
    parser.add_argument(
        "--version", "-V", action="store_true", help="Show version and exit"
    )
    parser.add_argument(
        "--log-level", default=None, help="Log level (default: $VOICEDESK_LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    # Run subcommand
    run_parser = subparsers.add_parser("run", help="Start a voice session driven by typed input")
    run_parser.add_argument(
        "--command", "-c", default=None, help="Run a single command and exit"
    )
    run_parser.add_argument(
        "--dry-run", action="store_true", help="Use in-memory services instead of the API"
    )
    run_parser.add_argument(
        "--base-url", default=None, help="API base URL (default: from args/voice.yaml)"
    )
    run_parser.add_argument(
        "--language", choices=["en", "ar"], default=None, help="Feedback language"
    )
    run_parser.set_defaults(func=cmd_run)

    # Parse subcommand
    parse_parser = subparsers.add_parser("parse", help="Show how a transcript is interpreted")
    parse_parser.add_argument("text", help="Transcript to parse")
    parse_parser.set_defaults(func=cmd_parse)

    # Commands subcommand
    commands_parser = subparsers.add_parser("commands", help="List available voice commands")
    commands_parser.set_defaults(func=cmd_commands)

    args = parser.parse_args()

    if args.version:
        from voicedesk import __version__

        print(f"voicedesk {__version__}")
        return 0

    if not args.subcommand:
        parser.print_help()
        return 0

    load_dotenv()

    from voicedesk.logging_config import setup_logging

    setup_logging(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
