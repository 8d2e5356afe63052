# cli.py
# ============================================================
# Interactive console for the chat client.
#   1) Asks one sample question (stateless)
#   2) Loops: read a line, reply, print, until "exit"
# Failed exchanges are printed and the loop keeps going; the
# transcript is left as it was before the failed turn.
# ============================================================

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from loguru import logger

from src.chat import ChatSession, ConfigurationError, CompletionError, format_error
from src.logging_utils import configure_logging
from src.settings import get_settings

EXIT_WORDS = {"exit", "quit"}


def run_interactive(session: ChatSession, system_prompt: Optional[str], model: Optional[str],
                    stdin: TextIO, stdout: TextIO) -> int:
    transcript = session.new_transcript(system_prompt)
    print("=== Interactive Conversation ===", file=stdout)
    print("Type your messages (type 'exit' to quit):", file=stdout)

    turns = 0
    while True:
        print("\nYou: ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        user_input = line.strip()
        if user_input.lower() in EXIT_WORDS:
            logger.info("User exited interactive conversation")
            break
        if not user_input:
            continue
        try:
            reply = session.reply(transcript, user_input, model=model)
        except CompletionError as e:
            print(format_error(e), file=stdout)
            continue
        turns += 1
        print(f"Assistant: {reply}", file=stdout)
    return turns


def main(argv: Optional[Sequence[str]] = None, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    ap = argparse.ArgumentParser(description="Chat with a completion API from the terminal.")
    ap.add_argument("--model", default=None, help="Model id (default from config.yaml / CHAT_MODEL)")
    ap.add_argument("--system", default=None, help="System prompt for the conversation")
    ap.add_argument("--question", default=None, help="Ask one question before the interactive loop")
    ap.add_argument("--no-interactive", action="store_true", help="Skip the interactive loop")
    ap.add_argument("--log-level", default=None, help="Log level (default from LOG_LEVEL)")
    args = ap.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.LOG_LEVEL)
    try:
        session = ChatSession.from_settings(settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.question:
        print(f"Question: {args.question}", file=stdout)
        try:
            print(f"Answer: {session.ask_question(args.question, model=args.model)}", file=stdout)
        except CompletionError as e:
            print(format_error(e), file=stdout)
            return 1

    if not args.no_interactive:
        run_interactive(session, args.system, args.model, stdin, stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
