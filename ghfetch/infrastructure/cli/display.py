import json
import logging
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.box import ROUNDED
from rich.text import Text

from ghfetch.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        """Initializes the rich consoles.

        Data goes to stdout so it can be piped; messages go to stderr.
        """
        self._console = console or Console()
        self._err_console = err_console or Console(stderr=True)

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_data(self, data: Any, **kwargs: Any) -> None:
        """Renders a decoded JSON value as highlighted, indented JSON.

        Args:
            data: The decoded value to render.
            **kwargs: Additional arguments including:
                - indent: JSON indentation (default: 2)
        """
        indent = kwargs.get("indent", 2)
        try:
            self.console.print_json(data=data, indent=indent)
        except (TypeError, ValueError) as e:
            # Fallback to plain output if the value cannot be highlighted
            logger.error(f"Error rendering JSON output: {e}")
            self.console.print(json.dumps(data, indent=indent, default=str), markup=False, highlight=False)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a red panel on stderr."""
        title = kwargs.get("title", "Error")
        self._err_console.print(
            Panel(Text(error_message), title=f"[bold red]{title}[/bold red]", title_align="left",
                  border_style="red", box=ROUNDED, padding=(0, 1))
        )

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message on stderr."""
        style = kwargs.get("style", "cyan")
        self._err_console.print(Text(info_message, style=style))
