"""Example: Chat client with streaming (SSE).

Sends prompts to DeepInfra's OpenAI-compatible endpoint and prints tokens
as they arrive.

    DEEPINFRA_API_KEY=... uv run python examples/stream_chat_example.py
"""

import sys

from dotenv import load_dotenv

from streamchat import ChatCompletionClient, ClientSettings


def _print_token(token):
    sys.stdout.write(token)
    sys.stdout.flush()


def chat_loop():
    load_dotenv()
    settings = ClientSettings.from_env()

    with ChatCompletionClient(settings) as client:
        sys.stdout.write(f"Connected to {settings.base_url} ({settings.model})\n\n")

        while True:
            try:
                user_input = input("You: ")
            except (EOFError, KeyboardInterrupt):
                sys.stdout.write("\nBye!\n")
                break

            if not user_input.strip():
                continue

            sys.stdout.write("AI: ")
            sys.stdout.flush()

            text, diagnostics = client.complete(user_input, on_delta=_print_token)
            if not text and diagnostics:
                sys.stdout.write(diagnostics[-1].message)

            sys.stdout.write("\n\n")


if __name__ == "__main__":
    chat_loop()
