"""Interactive console entrypoint for streamchat.

Usage::

    DEEPINFRA_API_KEY=... streamchat
    streamchat --model meta-llama/Llama-3.3-70B-Instruct --debug
"""

import argparse
import sys
from typing import List, Optional, TextIO

import httpx
from dotenv import load_dotenv

from streamchat.exceptions import ConfigurationError
from streamchat.http.client import ChatCompletionClient
from streamchat.shared.config import ClientSettings
from streamchat.shared.entities import DiagnosticKind

FIRST_PROMPT = "Enter your question (type 'quit' or 'exit' to stop):\n"
NEXT_PROMPT = "\nEnter your next question (type 'quit' or 'exit' to stop):\n"
EXIT_WORDS = {"quit", "exit"}

_REPORTED_KINDS = {DiagnosticKind.NON_SUCCESS_STATUS, DiagnosticKind.TRANSPORT_FAILURE}


def run_chat_loop(client: ChatCompletionClient, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    """Read one prompt per line and stream each reply to ``stdout``."""

    def write(text: str) -> None:
        stdout.write(text)
        stdout.flush()

    write(FIRST_PROMPT)
    for raw in stdin:
        user_input = raw.rstrip("\r\n")
        if user_input in EXIT_WORDS:
            write("Exiting...\n")
            return
        if not user_input.strip():
            continue

        try:
            _, diagnostics = client.complete(user_input, on_delta=write)
        except httpx.HTTPError as exc:
            write(f"Error: {exc}\n")
        else:
            write("\n")
            for diagnostic in diagnostics:
                if diagnostic.kind in _REPORTED_KINDS:
                    write(f"Error: {diagnostic.message}\n")
        write(NEXT_PROMPT)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="streamchat", description="Stream chat completions in the console")
    parser.add_argument("--model", help="Model identifier sent with each request")
    parser.add_argument("--base-url", help="OpenAI-compatible API base URL")
    parser.add_argument("--max-tokens", type=int, help="Maximum tokens per reply")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    load_dotenv()

    try:
        settings = ClientSettings.from_env().with_overrides(
            model=args.model,
            base_url=args.base_url,
            max_tokens=args.max_tokens,
            timeout=args.timeout,
            debug=args.debug,
        )
    except ConfigurationError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    with ChatCompletionClient(settings) as client:
        try:
            run_chat_loop(client)
        except KeyboardInterrupt:
            sys.stdout.write("\nExiting...\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
