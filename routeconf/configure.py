"""Apply interface, route and DNS settings described in a TOML file."""

from __future__ import annotations

import argparse
import subprocess
import sys
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Sequence

from .document import Table
from .parser import parse_file
from .text import TomlError

DEFAULT_CONFIG = "config.toml"
DEFAULT_RESOLV_CONF = "/etc/resolv.conf"
# Commands are built in a fixed-size buffer; longer ones are cut short.
_MAX_COMMAND_LENGTH = 256


@dataclass(frozen=True)
class NetworkSettings:
    """Interface address, route and name servers to apply."""

    interface: str
    ip: str
    destination: str
    gateway: str
    dns_servers: tuple[str, ...] = ()


def unquote(raw: str | None) -> str:
    """Return the text between the leading double quote and the next one."""
    if not raw or raw[0] != '"':
        raise ValueError(f"expected a double-quoted string, got {raw!r}")
    body = raw[1:].split('"', 1)[0]
    if not body:
        raise ValueError(f"empty string value {raw!r}")
    return body


def _section(doc: Table, name: str) -> Table:
    table = doc.table(name)
    if table is None:
        raise ValueError(f"missing [{name}] table")
    return table


def load_settings(path: str | PathLike[str] = DEFAULT_CONFIG) -> NetworkSettings:
    """Read the network settings from the TOML file at ``path``."""
    doc = parse_file(path)
    interface = _section(doc, "interface")
    route = _section(doc, "route")
    dns = _section(doc, "dns")
    servers = dns.array("servers")
    if servers is None:
        raise ValueError("missing servers array in [dns]")
    return NetworkSettings(
        interface=unquote(interface.raw("name")),
        ip=unquote(interface.raw("ip")),
        destination=unquote(route.raw("destination")),
        gateway=unquote(route.raw("gateway")),
        dns_servers=tuple(unquote(servers.raw(index)) for index in range(len(servers))),
    )


def _limit(command: str) -> str:
    return command[:_MAX_COMMAND_LENGTH - 1]


def build_commands(settings: NetworkSettings) -> list[str]:
    """The shell commands that configure the interface and default route."""
    name = settings.interface
    return [
        _limit(f"ip addr flush dev {name}"),
        _limit(f"ip addr add {settings.ip} dev {name}"),
        _limit(f"ip link set {name} up"),
        "ip route flush default",
        _limit(f"ip route add {settings.destination} via {settings.gateway} dev {name}"),
    ]


def run_command(command: str) -> None:
    """Run ``command`` through the shell; raise ``CalledProcessError`` on failure."""
    print(f"Running: {command}", flush=True)
    result = subprocess.run(command, shell=True, check=False)
    if result.returncode != 0:
        raise subprocess.CalledProcessError(result.returncode, command)


def write_resolv_conf(
    servers: Iterable[str], path: str | PathLike[str] = DEFAULT_RESOLV_CONF
) -> None:
    """Write one ``nameserver`` line per server to ``path``."""
    with open(path, "w", encoding="utf-8") as handle:
        for server in servers:
            handle.write(f"nameserver {server}\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Apply the configuration; return the process exit status."""
    parser = argparse.ArgumentParser(
        description="Configure an interface, default route and DNS from a TOML file."
    )
    parser.add_argument("config", nargs="?", default=DEFAULT_CONFIG)
    parser.add_argument("--resolv-conf", default=DEFAULT_RESOLV_CONF)
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except OSError as exc:
        print(f"Error opening {args.config}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except TomlError as exc:
        print(f"TOML parse error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    for command in build_commands(settings):
        try:
            run_command(command)
        except subprocess.CalledProcessError:
            print(f"Command failed: {command}", file=sys.stderr)
            return 1

    try:
        write_resolv_conf(settings.dns_servers, args.resolv_conf)
    except OSError as exc:
        print(
            f"Failed to open {args.resolv_conf}: {exc.strerror or exc}",
            file=sys.stderr,
        )
        return 1

    print("Configuration applied.")
    return 0


if __name__ == "__main__":
    sys.exit(main())