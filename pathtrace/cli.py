import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import TraceConfig, default_identifier, DEFAULT_PROBES_PER_HOP, MAX_TTL_LIMIT
from .enrichment import DnsResolver, NameResolver, NullResolver, SystemResolver
from .errors import TracerError
from .output import ConsoleOutput
from .probe import RawSocketTransport, Tracer


log = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Send log records to stderr through rich"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )


def create_resolver(kind: str, dns: bool, timeout: float) -> NameResolver:
    """Pick the reverse-lookup strategy for hop names"""
    if not dns:
        return NullResolver()
    if kind == 'dns':
        return DnsResolver(timeout=timeout)
    return SystemResolver()


@click.command()
@click.argument('destination')
@click.argument('max_ttl', type=click.IntRange(1, MAX_TTL_LIMIT))
@click.argument('timeout', type=click.IntRange(min=1))
@click.option('-q', '--probes', default=DEFAULT_PROBES_PER_HOP, type=click.IntRange(min=1),
              help=f'Probes per hop (default: {DEFAULT_PROBES_PER_HOP})')
@click.option('--identifier', type=click.IntRange(0, 0xFFFF),
              help='ICMP identifier for this session (default: process id)')
@click.option('--dns/--no-dns', default=True,
              help='Enable/disable hop name lookups (default: enabled)')
@click.option('--resolver', 'resolver_kind', default='system',
              type=click.Choice(['system', 'dns'], case_sensitive=False),
              help='Hop name lookups via the system resolver or direct DNS (default: system)')
@click.option('-v', '--verbose', is_flag=True,
              help='Log every probe to stderr')
@click.version_option(version=__version__)
def main(destination: str, max_ttl: int, timeout: int, probes: int,
         identifier: int, dns: bool, resolver_kind: str, verbose: bool):
    """
    pathtrace - ICMP traceroute.

    Trace route to DESTINATION (IP address or hostname), probing hops
    1 to MAX_TTL - 1 and waiting TIMEOUT seconds for each probe.

    Examples:

        pathtrace 8.8.8.8 30 2

        pathtrace example.com 16 1 -q 1 --no-dns
    """
    setup_logging(verbose)
    output = ConsoleOutput()

    try:
        config = TraceConfig(
            max_ttl=max_ttl,
            timeout=timeout,
            probes_per_hop=probes,
            identifier=default_identifier() if identifier is None else identifier
        )

        if max_ttl == 1:
            output.print_warning("a maximum TTL of 1 probes no hops")

        tracer = Tracer(
            destination=destination,
            config=config,
            transport=RawSocketTransport(),
            resolver=create_resolver(resolver_kind, dns, float(timeout)),
            output=output
        )

        hops = tracer.trace()
        log.debug("trace finished after %d hops", len(hops))

    except TracerError as e:
        output.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        output.end_hop()
        output.console.print("[yellow]Interrupted[/]")
        sys.exit(130)


if __name__ == '__main__':
    main()
