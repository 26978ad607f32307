"""
Terminal client for the Gemini prompt proxy.
Runs a prompt through the same handler the serverless function uses and
renders the outcome with rich. Usage: python app_for_terminal.py "your prompt"
"""

import asyncio
import json
import sys

from rich.console import Console
from rich.panel import Panel
from rich.spinner import Spinner
from rich.live import Live

from config import load_settings
from core.proxy_handler import ProxyHandler

# Initialize Rich Console
console = Console()


def render_response(response):
    """Print a ProxyResponse as a coloured panel."""
    if response.content_type != 'application/json':
        console.print(f"[bold red]❌ {response.status_code}: {response.body}[/bold red]")
        return

    payload = json.loads(response.body)
    if response.status_code == 200:
        console.print(Panel(
            payload['text'],
            title="[bold green]✅ Gemini[/bold green]",
            border_style="green",
            padding=(1, 2)
        ))
    else:
        console.print(Panel(
            f"[red]{payload.get('error')}[/red]",
            title=f"[bold red]❌ Error {response.status_code}[/bold red]",
            border_style="red",
            padding=(1, 2)
        ))


async def ask(prompt, handler=None):
    handler = handler or ProxyHandler(load_settings())
    with Live(Spinner("dots", text="[cyan]Waiting for Gemini...[/cyan]"), console=console, transient=True):
        response = await handler.handle('POST', json.dumps({'prompt': prompt}))
    render_response(response)
    return response


if __name__ == "__main__":
    if len(sys.argv) > 1:
        prompt = " ".join(sys.argv[1:])
    else:
        prompt = console.input("[bold cyan]💬 Prompt:[/bold cyan] ")

    try:
        result = asyncio.run(ask(prompt))
    except KeyboardInterrupt:
        console.print("\n[bold yellow]👋 Cancelled[/bold yellow]")
        sys.exit(130)

    sys.exit(0 if result.status_code == 200 else 1)
