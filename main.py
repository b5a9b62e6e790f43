"""
Entry point for the App Runner demo container.

Usage:
    # Default port 8080
    python main.py

    # As App Runner runs it
    PORT=8080 COMMIT_SHA=$(git rev-parse HEAD) python main.py
"""
import uvicorn
from rich.console import Console
from rich.panel import Panel

from src.config import config

console = Console()


def main() -> None:
    config.validate()

    console.print(
        Panel(
            "[bold]App Runner Demo[/bold]\n"
            f"Port: [cyan]{config.PORT}[/cyan]  "
            f"Commit: [cyan]{config.COMMIT_SHA}[/cyan]",
            border_style="blue",
        )
    )

    uvicorn.run(
        "src.api.server:app",
        host=config.HOST,
        port=config.port(),
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
