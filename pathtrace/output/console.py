"""
Rich console output for pathtrace - with real-time per-probe printing
"""

from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.text import Text


TIMEOUT_MARKER = "*"


class ConsoleOutput:
    """
    Line-oriented trace output.

    One line per hop: the hop number, then one entry per probe, printed
    as soon as the probe completes. end_hop() also terminates the line of
    the hop where the destination answered, so the output always ends
    with a newline.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self._line_open = False

    def print_header(self, resolved_ip: str, hostname: Optional[str] = None):
        """Print trace header"""
        header = Text("trace route to ")
        header.append(resolved_ip, style="bold")
        if hostname:
            header.append(f" ({hostname})", style="dim")
        self.console.print(header)

    def start_hop(self, ttl: int):
        """Open the line for a hop"""
        self.console.print(Text(f"{ttl} ", style="dim"), end="")
        self._line_open = True

    def print_probe(self, rtt_ms: float, responder_ip: Optional[str] = None,
                    hostname: Optional[str] = None):
        """
        Print one answered probe.

        responder_ip is given only when the responder changed within the hop.
        """
        line = Text()
        if responder_ip:
            line.append(responder_ip, style="bold")
            if hostname:
                line.append(f" ({hostname})", style="cyan")
            line.append(" ")
        line.append(f"{self._format_rtt(rtt_ms)} ")
        self.console.print(line, end="")

    def print_timeout(self):
        """Print the marker of a lost probe"""
        self.console.print(Text(f"{TIMEOUT_MARKER} ", style="yellow"), end="")

    def end_hop(self):
        """Close the line for a hop"""
        if self._line_open:
            self.console.print()
            self._line_open = False

    def print_error(self, message: str):
        """Print error message"""
        self.end_hop()
        self.console.print(f"[bold red]Error:[/] {escape(message)}")

    def print_warning(self, message: str):
        """Print warning message"""
        self.console.print(f"[yellow]Warning:[/] {escape(message)}")

    def _format_rtt(self, rtt_ms: float) -> str:
        """Format RTT values"""
        return f"{rtt_ms:.3f}ms"
