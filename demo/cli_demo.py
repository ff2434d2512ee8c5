#!/usr/bin/env python3
"""
Interactive CLI demo for the CalmaLink chat service.

Keeps the conversation locally and sends the full history with every
turn, exactly as the web client does.
"""
import sys

# Imports assume PYTHONPATH=src is set (e.g., PYTHONPATH=src python demo/cli_demo.py)
from calmalink.app import CalmaLinkApp
from calmalink.config_loader import load_config_from_env


def print_banner():
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  CalmaLink - Interactive CLI Demo")
    print("=" * 60)
    print("\nTalk to me in English or Spanish. You can say:")
    print("  • \"english\" or \"español\" to start a Calm Breath practice")
    print("  • \"show library\" / \"biblioteca\"")
    print("  • \"help\" / \"ayuda\"")
    print("  • \"just talk\" / \"solo hablar\"")
    print("\nType 'quit' or 'exit' to end the session.")
    print("-" * 60 + "\n")


def print_response(envelope):
    """Print formatted response."""
    print(f"\n💬 CalmaLink: {envelope.message}")

    if envelope.tool:
        result = envelope.tool.result
        print(f"🎧 {result['title']} ({result['language']}) - {result['audioUrl']}")
        print(f"📜 {result['script']}")

    if envelope.intent:
        print(f"🔧 Intent: {envelope.intent}")

    print("-" * 60)


def setup_app() -> CalmaLinkApp:
    """Set up and initialize the chat service."""
    print("🚀 Initializing CalmaLink...")
    app = CalmaLinkApp(load_config_from_env())
    app.initialize()
    print("✅ Ready!\n")
    return app


def main():
    """Main CLI loop."""
    print_banner()

    try:
        app = setup_app()
    except Exception as e:
        print(f"\n❌ Failed to initialize service: {e}")
        print("Please check your environment variables and configuration.")
        return 1

    history = []
    while True:
        try:
            message = input("You: ").strip()

            if not message:
                continue

            if message.lower() in ['quit', 'exit', 'q']:
                print("\n👋 Take care! / ¡Cuídate!\n")
                break

            history.append({"role": "user", "content": message})
            try:
                envelope = app.chat(history)
            except Exception as e:
                print(f"\n❌ Error: {e}")
                print("-" * 60)
                history.pop()
                continue

            print_response(envelope)
            turn = {"role": "assistant", "content": envelope.message}
            if envelope.intent:
                turn["intent"] = envelope.intent
            history.append(turn)

        except KeyboardInterrupt:
            print("\n\n👋 Interrupted. Goodbye!\n")
            break
        except EOFError:
            print("\n\n👋 Goodbye!\n")
            break

    return 0


if __name__ == "__main__":
    sys.exit(main())
