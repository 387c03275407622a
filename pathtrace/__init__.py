"""
pathtrace - ICMP Traceroute Tool

Discovers the hops between this host and a destination by sending
ICMP echo requests with increasing TTL values.
"""

__version__ = "1.0.0"
__author__ = "pathtrace"
