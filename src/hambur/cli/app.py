"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..llm import ChatClient
from ..session import ChatSession
from ..terminal import Screen, TerminalError, TerminalKeySource
from .debug import DebugTracer
from .settings import load_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="hambur",
    help="Terminal chat client that streams model replies as they are generated",
    add_completion=False,
)

# Console for rich output
console = Console()


@app.command()
def chat():
    """Interactive chat with streamed, interruptible replies."""
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(code=1)

    async def _chat():
        keys = TerminalKeySource()
        async with ChatClient() as client:
            session = ChatSession(
                client,
                Screen(console),
                keys,
                model_id=settings.model_id,
                char_delay=settings.char_delay,
            )
            session.set_debug_callback(DebugTracer(settings.debug))
            await session.run()

    try:
        asyncio.run(_chat())
    except TerminalError as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
