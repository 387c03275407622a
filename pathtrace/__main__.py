"""
pathtrace - ICMP Traceroute Tool

Entry point for running as a module:
    python -m pathtrace <destination> <max_ttl> <timeout>
"""

from .cli import main

if __name__ == '__main__':
    main()
