# tpzero

A small TCP client and server that trade two kinds of operations:

- **message**: a single string, sent on its own;
- **package**: a list of values, each stored with its own length.

## Wire format

Every frame has three parts, in this order:

1. a 4-byte operation code: `0` for a message, `1` for a package;
2. a 4-byte payload size;
3. the payload.

All integers are signed 32-bit little-endian.

A package payload is a run of entries. Each entry is a 4-byte length followed by that many bytes. Text is sent UTF-8 encoded, with a terminating NUL byte.

## Installation

```
pip install .
```

## Running the server

```
tpzero-server [--port PORT] [--log-file FILE]
```

The server listens on port 4444 by default and accepts one client. Its log file is `log.log` by default; log lines also go to the console.

For each frame the client sends, the server does the following:

- for a message, it logs `Me llego el mensaje <text>`;
- for a package, it logs every value;
- for an unknown operation code, it logs a warning and reads nothing more for that frame.

When the client disconnects, the server logs an error and exits with status 1.

## Running the client

```
tpzero-client [CONFIG] [--log-file FILE]
```

`CONFIG` defaults to `cliente.config` and `--log-file` defaults to `tp0.log`. The config file holds `KEY=value` lines. Blank lines, lines starting with `#` and lines without `=` are ignored. The client needs these three keys:

```
IP=127.0.0.1
PUERTO=4444
CLAVE=hello
```

The client does the following, in order:

1. It logs a greeting, then the value of `CLAVE`.
2. It connects to `IP`:`PUERTO` and sends `CLAVE` as a message.
3. It reads lines at the `> ` prompt until an empty line or end of input.
4. It sends those lines as one package and closes the connection.

Log lines go to the console and to the log file. If the config file is missing, the client stops with the `OSError` from opening it. If a key is absent, it stops with a `KeyError`.

## Using the library

```python
from tpzero.protocol import OpCode, Package, decode_values, encode_message, serialize

package = Package()
package.add("first")       # text: UTF-8 encoded, NUL added
package.add(b"raw bytes")  # bytes: stored as given
frame = package.serialize()

message_frame = encode_message("hello")
custom = serialize(OpCode.MESSAGE, b"payload")

values = decode_values(bytes(package.payload))  # list of bytes
```

`decode_values` raises `tpzero.protocol.ProtocolError`, a `ValueError`, when a payload is truncated or holds a negative length. `as_text` reads a value up to its first NUL byte.

### Client helpers

`tpzero.client` provides:

- `create_logger`, `load_config`, `read_lines` and `log_console`;
- `create_connection`, `send_message` and `send_package`;
- `build_package`, which turns an iterable of lines into a `Package`.

### Server helpers

`tpzero.server` provides:

- `start_server`, which returns a listening socket;
- `wait_for_client`, which accepts one connection;
- `receive_operation`, which returns an `OpCode`, a plain `int` for unknown codes, or `None` after the peer disconnects (it then closes the socket);
- `receive_buffer`, `receive_message` and `receive_package`, the last of which returns the package values as text;
- `serve`, which runs the loop described above.

## Limits

The server handles a single client and then exits; it does not accept further connections. Nothing is stored beyond the log files.