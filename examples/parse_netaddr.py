"""
Read a network address from optional '-ip' and '-p' patterns.

    $ python examples/parse_netaddr.py -ip 10.0.0.1 -p 8080
    The network address is 10.0.0.1:8080

The address is printed as-is, so IPv6 hosts are not bracketed ("::1:1024").
"""
import ipaddress
import re
from dataclasses import dataclass, field

from patternparse import PatternCategory, Registry, invoke

__prog__ = "parse-netaddr"

INT32 = re.compile(r"[+-]?[0-9]+")


@dataclass
class Address:
    addr: ipaddress.IPv4Address | ipaddress.IPv6Address = field(default_factory=lambda: ipaddress.ip_address("127.0.0.1"))
    port: int = 1024


def on_address(argument, address):
    """ip address"""
    try:
        address.addr = ipaddress.ip_address(argument)
    except ValueError:
        raise ValueError("fail to parse argument %r" % argument) from None


def on_port(argument, address):
    """port"""
    if not INT32.fullmatch(argument) or not -2 ** 31 <= int(argument) < 2 ** 31:
        raise ValueError("fail to parse argument %r" % argument)
    port = int(argument)
    if not 0 <= port <= 65535:
        raise ValueError("port number %d is invalid" % port)
    address.port = port


def main():
    registry = Registry(Address())
    registry.register("-ip", PatternCategory.OPTIONAL_WITH_ARG, callback=on_address)
    registry.register("-p", PatternCategory.OPTIONAL_WITH_ARG, callback=on_port)

    address = invoke(registry)
    print("The network address is %s:%d" % (address.addr, address.port))


if __name__ == '__main__':
    main()
