# routeconf

`routeconf` sets up a Linux host's network from a small TOML file. It
configures one interface, one route and the DNS resolvers:

1. flushes the addresses on the interface and assigns the configured one,
2. brings the interface up,
3. flushes the default route and adds the configured route through a gateway,
4. writes the DNS servers to a resolver file, `/etc/resolv.conf` by default.

The `ip` commands are run one at a time through the shell, and each one is
printed (`Running: ...`) before it runs. If a command exits with a non-zero
status, `routeconf` prints `Command failed: ...` and stops at once with exit
status 1; the resolver file is not written in that case.

## Installation

```
pip install .
```

The package needs no third-party libraries. The `ip` tool from iproute2
must be installed on the host. To run the tests:

```
pip install .[test]
pytest
```

## The configuration file

All values must be double-quoted strings:

```toml
[interface]
name = "eth0"
ip = "192.0.2.10/24"

[route]
destination = "0.0.0.0/0"
gateway = "192.0.2.1"

[dns]
servers = ["192.0.2.53", "198.51.100.53"]
```

The `[interface]`, `[route]` and `[dns]` tables and the `servers` array must
be present. A value that is missing, not double-quoted, or empty is reported
as `Invalid configuration: ...`; a malformed document as
`TOML parse error: ...`. Either way nothing is run and the exit status is 1.

With the file above, the commands run are:

```
ip addr flush dev eth0
ip addr add 192.0.2.10/24 dev eth0
ip link set eth0 up
ip route flush default
ip route add 0.0.0.0/0 via 192.0.2.1 dev eth0
```

The resolver file then holds one `nameserver` line for each server, in the
order they are listed. It is overwritten, not appended to.

## Running it

Changing addresses, routes and `/etc/resolv.conf` needs root:

```
sudo routeconf
```

```
usage: routeconf [-h] [--resolv-conf RESOLV_CONF] [config]
```

- `config` is the TOML file to read; it defaults to `config.toml` in the
  current directory.
- `--resolv-conf` names the resolver file to write; it defaults to
  `/etc/resolv.conf`.

On success it prints `Configuration applied.` and exits with status 0.
`python -m routeconf.configure` does the same as `routeconf`.

## Using it as a library

The steps are available as functions in `routeconf.configure`:

```python
from routeconf.configure import build_commands, load_settings

settings = load_settings("config.toml")
for command in build_commands(settings):
    print(command)
```

- `load_settings(path)` returns a `NetworkSettings` with `interface`, `ip`,
  `destination`, `gateway` and `dns_servers` (a tuple).
- `build_commands(settings)` returns the five `ip` commands as strings.
- `run_command(command)` prints and runs one command through the shell and
  raises `subprocess.CalledProcessError` if it fails.
- `write_resolv_conf(servers, path)` writes the `nameserver` lines.
- `unquote(raw)` returns the text of a raw double-quoted value.
- `main(argv)` is the command itself and returns its exit status.

### The TOML reader

`routeconf.parser` has `parse`, which takes a document as text, and
`parse_file`, which takes a path. Both return a `routeconf.document.Table`:

```python
from routeconf.parser import parse

doc = parse('''
[interface]
name = "eth0"
mtu = 1500

[dns]
servers = ["192.0.2.53"]
''')

iface = doc.table("interface")
print(iface.string("name"))   # eth0
print(iface.int("mtu"))       # 1500
servers = doc.table("dns").array("servers")
print(len(servers), servers.string(0))
```

Scalars are kept as the raw text they had in the document and interpreted
on demand. A `Table` has `keys()`, `in` checks, `raw()`, `table()` and
`array()`, and the typed accessors `string()`, `bool()`, `int()`, `float()`
and `timestamp()`; a typed accessor raises `KeyError` for a key that holds
no value. An `Array` has `len()`, `raw()`, `array()`, `table()` and the same
typed accessors by index, raising `IndexError` out of range. Timestamps come
back as `routeconf.values.Timestamp`, whose fields are `None` where the
value did not give them.

A malformed document, or a value that does not fit the accessor used,
raises `routeconf.text.TomlError` (a `ValueError`); for document errors the
message names the line at fault.

## What it does not do

- It handles exactly one interface, one route and one list of resolvers.
- It does not undo earlier steps when a later command fails.
- It does not validate addresses; they are passed to `ip` as written.
- The TOML reader only reads; there is no way to write a document back.