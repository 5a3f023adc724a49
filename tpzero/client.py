"""Client: reads its configuration, greets the server and sends a package."""

from __future__ import annotations

import argparse
import logging
import socket
from collections.abc import Iterable, Iterator

from tpzero.protocol import Package, encode_message

_FORMAT = "[%(levelname)s] %(asctime)s %(name)s: %(message)s"


def create_logger(path: str = "tp0.log") -> logging.Logger:
    """Return the client logger, writing to ``path`` and to the console."""
    logger = logging.getLogger("cliente")
    _close_logger(logger)
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(_FORMAT)
    for handler in (logging.FileHandler(path), logging.StreamHandler()):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def _close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def load_config(path: str = "cliente.config") -> dict[str, str]:
    """Read ``KEY=VALUE`` lines; blank lines and ``#`` comments are skipped."""
    config: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\r\n")
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            config[key] = value
    return config


def read_lines(prompt: str = "> ") -> Iterator[str]:
    """Yield lines typed at the console until an empty line or end of input."""
    while True:
        try:
            line = input(prompt)
        except EOFError:
            return
        if line == "":
            return
        yield line


def log_console(logger: logging.Logger, prompt: str = "> ") -> None:
    """Log every line typed at the console until an empty one."""
    for line in read_lines(prompt):
        logger.info(line)


def create_connection(ip: str, port: str | int) -> socket.socket:
    """Open a TCP connection to the server."""
    return socket.create_connection((ip, int(port)))


def send_message(message: str, sock: socket.socket) -> None:
    """Send a text message as a MESSAGE frame."""
    sock.sendall(encode_message(message))


def send_package(package: Package, sock: socket.socket) -> None:
    """Send a package frame."""
    sock.sendall(package.serialize())


def build_package(lines: Iterable[str]) -> Package:
    """Collect lines into a package."""
    package = Package()
    for line in lines:
        package.add(line)
    return package


def main(argv: list[str] | None = None) -> int:
    """Run the client."""
    parser = argparse.ArgumentParser(prog="tpzero-client")
    parser.add_argument("config", nargs="?", default="cliente.config")
    parser.add_argument("--log-file", default="tp0.log")
    args = parser.parse_args(argv)

    logger = create_logger(args.log_file)
    try:
        logger.info("Soy un log :)")
        config = load_config(args.config)
        value = config["CLAVE"]
        port = config["PUERTO"]
        ip = config["IP"]
        logger.info(value)

        with create_connection(ip, port) as sock:
            send_message(value, sock)
            send_package(build_package(read_lines()), sock)
    finally:
        _close_logger(logger)
    return 0