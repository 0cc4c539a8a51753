"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

EXIT_WORDS = {"exit", "quit", ":q"}


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML (default: environment variables only)",
    )
    common.add_argument(
        "--boards-file",
        type=Path,
        default=None,
        help="Serve boards from a local JSON/YAML file instead of monday.com",
    )
    common.add_argument(
        "--provider",
        choices=["groq", "openai", "stub"],
        default=None,
        help="Completion provider (overrides ASTRA_BI_LLM_PROVIDER)",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(prog="astra-bi", description="Conversational business intelligence")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # chat
    chat_parser = subparsers.add_parser("chat", parents=[common], help="Ask one question")
    chat_parser.add_argument("query", help="Natural-language question")
    chat_parser.add_argument(
        "--show-trace",
        action="store_true",
        help="Print the execution trace after the answer",
    )
    chat_parser.add_argument(
        "--json",
        action="store_true",
        help="Print {response, trace} as JSON",
    )

    # repl
    repl_parser = subparsers.add_parser("repl", parents=[common], help="Interactive chat session")
    repl_parser.add_argument(
        "--show-trace",
        action="store_true",
        help="Print the execution trace after each answer",
    )
    repl_parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not send earlier turns of the session to the completion service",
    )

    # boards
    subparsers.add_parser("boards", parents=[common], help="List available boards")

    # analyze
    analyze_parser = subparsers.add_parser(
        "analyze", parents=[common], help="Run one analytics function without the LLM"
    )
    analyze_parser.add_argument("target", choices=["deals", "work-orders"])
    analyze_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON result to file (default: stdout)",
    )
    analyze_parser.add_argument(
        "--show-trace",
        action="store_true",
        help="Print the execution trace to stderr",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from astra_bi.errors import AstraBIError

    try:
        if args.command == "chat":
            _run_chat(args)
        elif args.command == "repl":
            _run_repl(args)
        elif args.command == "boards":
            _run_boards(args)
        elif args.command == "analyze":
            _run_analyze(args)
    except AstraBIError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)


def _load_settings(args: argparse.Namespace):
    from astra_bi.config import Settings

    overrides = {"llm_provider": args.provider}
    if args.config:
        return Settings.from_yaml(args.config, **overrides)
    return Settings.from_env(**overrides)


def _build_gateway(args: argparse.Namespace, settings):
    from astra_bi.connectors import GatewayRegistry

    return GatewayRegistry.for_settings(settings, boards_file=args.boards_file)


def _build_agent(args: argparse.Namespace):
    from astra_bi.agent import BIAgent
    from astra_bi.completion import get_completion_client

    settings = _load_settings(args)
    return BIAgent(
        _build_gateway(args, settings),
        get_completion_client(settings),
        max_workers=settings.max_workers,
    )


def _print_trace(trace: list[str], file=None) -> None:
    print("\n--- Trace ---", file=file)
    for i, step in enumerate(trace, 1):
        print(f"  {i}. {step}", file=file)


def _run_chat(args: argparse.Namespace) -> None:
    """Run chat command."""
    agent = _build_agent(args)
    result = agent.chat(args.query)
    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return
    print(result.response)
    if args.show_trace:
        _print_trace(result.trace)


def _run_repl(args: argparse.Namespace) -> None:
    """Run interactive session. Failed turns are shown but not kept in history."""
    from astra_bi.agent import PROTOCOL_EXCEPTION
    from astra_bi.models.conversation import ConversationTurn

    agent = _build_agent(args)
    history: list[ConversationTurn] = []
    failure_prefix = PROTOCOL_EXCEPTION.split("{", 1)[0]
    print("AstraBI ready. Type 'exit' to quit.")
    while True:
        try:
            query = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not query:
            continue
        if query.lower() in EXIT_WORDS:
            break

        result = agent.chat(query, history=None if args.no_history else history)
        print(f"\n{result.response}")
        if args.show_trace:
            _print_trace(result.trace)
        if not result.response.startswith(failure_prefix):
            history.append(ConversationTurn.user(query))
            history.append(ConversationTurn.assistant(result.response))


def _run_boards(args: argparse.Namespace) -> None:
    """Run boards command."""
    settings = _load_settings(args)
    gateway = _build_gateway(args, settings)
    for board in gateway.list_boards():
        print(f"  [{board.id}] {board.name}")


def _run_analyze(args: argparse.Namespace) -> None:
    """Run analyze command."""
    from astra_bi.analytics import analyze_deals, analyze_work_orders
    from astra_bi.models.conversation import ExecutionTrace

    settings = _load_settings(args)
    gateway = _build_gateway(args, settings)
    trace = ExecutionTrace()
    fn = analyze_deals if args.target == "deals" else analyze_work_orders
    result = fn(gateway, trace)

    output = json.dumps(result.model_dump(mode="json", by_alias=True), indent=2)
    if args.show_trace:
        _print_trace(trace.entries, file=sys.stderr)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {args.target} analysis to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
