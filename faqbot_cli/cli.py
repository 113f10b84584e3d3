from __future__ import annotations

import argparse
import json

from services.shared.config import ConfigStore
from services.shared.matcher import FaqEngine
from services.shared.models import MatchResult
from services.shared.runtime import get_runtime_config

from .prompts import format_meta, read_message


def _engine_from_args(args: argparse.Namespace) -> FaqEngine:
    runtime = get_runtime_config(service_name="faqbot-cli")
    store = ConfigStore(args.config)
    settings = store.engine_settings(kb_path_override=args.kb or runtime.kb_path)
    engine = FaqEngine(settings)
    engine.load()
    return engine


def _print_result(result: MatchResult, *, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(result.model_dump(), ensure_ascii=False))
        return
    print(result.reply)
    print(format_meta(result.confidence, result.intent))


def cmd_ask(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    if not engine.context.entries:
        print("Knowledge base is empty. Check --kb or knowledge_base.path in the config.")
        return 2

    _print_result(engine.submit_query(" ".join(args.text).strip()), as_json=args.json)
    return 0


def cmd_chat(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    if not engine.context.entries:
        print("Knowledge base is empty. Check --kb or knowledge_base.path in the config.")
        return 2

    print(f"FAQ bot ready ({len(engine.context.entries)} questions). Type 'quit' to leave.\n")
    while True:
        msg = read_message()
        if msg is None:
            break
        if not msg:
            continue
        _print_result(engine.submit_query(msg))
        print()
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    for q in engine.suggest(" ".join(args.text)):
        print(q)
    return 0


def cmd_vocab(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    for term in engine.context.vocabulary.terms:
        print(term)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="faqbot", description="Keyword FAQ retrieval from the terminal")
    p.add_argument("--kb", help="Knowledge base file or URL (overrides config and FAQBOT_KB_PATH)")
    p.add_argument("--config", help="Path to config.yaml (default: FAQBOT_CONFIG_PATH or config/config.yaml)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ask = sub.add_parser("ask", help="Answer a single question")
    p_ask.add_argument("text", nargs="+", help="Question text")
    p_ask.add_argument("--json", action="store_true", help="Print the match result as JSON")
    p_ask.set_defaults(func=cmd_ask)

    p_chat = sub.add_parser("chat", help="Interactive question/answer session")
    p_chat.set_defaults(func=cmd_chat)

    p_suggest = sub.add_parser("suggest", help="List questions matching a typed fragment")
    p_suggest.add_argument("text", nargs="+", help="Fragment to look for")
    p_suggest.set_defaults(func=cmd_suggest)

    p_vocab = sub.add_parser("vocab", help="Print the keyword vocabulary")
    p_vocab.set_defaults(func=cmd_vocab)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    return int(ns.func(ns))


if __name__ == "__main__":
    raise SystemExit(main())
