#!/usr/bin/env python3
"""
Interactive CLI demo for the LND channel agent.

Ask questions about your node's channels from the terminal. Set
USE_MOCK_LND=true to try it without a node.
"""
import json
import sys

from lnd_channel_agent import LndChannelAgentApp, load_config_from_env
from lnd_channel_agent.exceptions import LndAgentError
from lnd_channel_agent.utils.logging_setup import configure_logging


def print_banner(mock: bool):
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  LND Channel Agent - Interactive CLI Demo")
    print("=" * 60)
    if mock:
        print("\n(using mock LND data)")
    print("\nAsk me about your channels, for example:")
    print("  • list my channels")
    print("  • how healthy are my channels")
    print("  • how is my channel liquidity")
    print("\nType 'json' to toggle structured output, 'quit' or 'exit' to end the session.")
    print("-" * 60 + "\n")


def print_response(result, show_data: bool):
    """Print formatted response."""
    print(f"\n[{result['type']}]")
    print(result["response"])

    if show_data and result.get("data"):
        print("\n" + json.dumps(result["data"], indent=2))

    print("-" * 60)


def main():
    """Main CLI loop."""
    try:
        config = load_config_from_env()
    except LndAgentError as e:
        print(f"\nConfiguration error: {e}")
        return 1

    configure_logging("WARNING")

    app = LndChannelAgentApp(config)
    try:
        app.initialize()
    except LndAgentError as e:
        print(f"\nFailed to initialize agent: {e}")
        print("Please check your environment variables and configuration.")
        return 1

    print_banner(config.use_mock_lnd)
    show_data = False

    while True:
        try:
            query = input("You: ").strip()

            if not query:
                continue

            if query.lower() in ["quit", "exit", "q"]:
                print("\nGoodbye!\n")
                break

            if query.lower() == "json":
                show_data = not show_data
                print(f"Structured output {'on' if show_data else 'off'}.")
                continue

            print_response(app.query(query), show_data)

        except KeyboardInterrupt:
            print("\n\nInterrupted. Goodbye!\n")
            break
        except EOFError:
            print("\n\nGoodbye!\n")
            break

    app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
