"""
Name resolution for pathtrace
"""

from .resolver import (
    NameResolver, SystemResolver, DnsResolver, NullResolver, StaticResolver
)

__all__ = [
    'NameResolver', 'SystemResolver', 'DnsResolver', 'NullResolver',
    'StaticResolver'
]
