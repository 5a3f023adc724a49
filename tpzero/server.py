"""Server: accepts one client and logs the messages and packages it sends."""

from __future__ import annotations

import argparse
import logging
import socket

from tpzero.protocol import INT_SIZE, OpCode, ProtocolError, as_text, decode_values

PORT = 4444

logger = logging.getLogger("Servidor")

_FORMAT = "[%(levelname)s] %(asctime)s %(name)s: %(message)s"


def start_server(host: str | None = None, port: int = PORT) -> socket.socket:
    """Create a listening TCP socket on ``host``:``port``."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    reuse = getattr(socket, "SO_REUSEPORT", socket.SO_REUSEADDR)
    listener.setsockopt(socket.SOL_SOCKET, reuse, 1)
    try:
        listener.bind((host or "", int(port)))
        listener.listen(socket.SOMAXCONN)
    except OSError:
        listener.close()
        raise
    logger.debug("Listo para escuchar a mi cliente")
    return listener


def wait_for_client(listener: socket.socket) -> socket.socket:
    """Accept one client connection."""
    conn, _ = listener.accept()
    logger.info("Se conecto un cliente!")
    return conn


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise ConnectionError("connection closed by peer")
        data += chunk
    return bytes(data)


def _recv_int(sock: socket.socket) -> int:
    return int.from_bytes(_recv_exact(sock, INT_SIZE), "little", signed=True)


def receive_operation(sock: socket.socket) -> int | None:
    """Read an operation code; on disconnect close the socket and return None."""
    try:
        code = _recv_int(sock)
    except (ConnectionError, OSError):
        sock.close()
        return None
    try:
        return OpCode(code)
    except ValueError:
        return code


def receive_buffer(sock: socket.socket) -> bytes:
    """Read a size-prefixed payload."""
    size = _recv_int(sock)
    if size < 0:
        raise ProtocolError(f"negative payload size {size}")
    return _recv_exact(sock, size)


def receive_message(sock: socket.socket) -> str:
    """Read and log a text message."""
    message = as_text(receive_buffer(sock))
    logger.info("Me llego el mensaje %s", message)
    return message


def receive_package(sock: socket.socket) -> list[str]:
    """Read a package and return its values as text."""
    return [as_text(value) for value in decode_values(receive_buffer(sock))]


def serve(sock: socket.socket) -> int:
    """Handle operations from a client until it disconnects; return exit status."""
    while True:
        code = receive_operation(sock)
        if code is None:
            logger.error("el cliente se desconecto. Terminando servidor")
            return 1
        if code == OpCode.MESSAGE:
            receive_message(sock)
        elif code == OpCode.PACKAGE:
            values = receive_package(sock)
            logger.info("Me llegaron los siguientes valores:\n")
            for value in values:
                logger.info("%s", value)
        else:
            logger.warning("Operacion desconocida. No quieras meter la pata")


def main(argv: list[str] | None = None) -> int:
    """Run the server for a single client."""
    parser = argparse.ArgumentParser(prog="tpzero-server")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--log-file", default="log.log")
    args = parser.parse_args(argv)

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(_FORMAT)
    handlers = [logging.FileHandler(args.log_file), logging.StreamHandler()]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    try:
        with start_server(port=args.port) as listener:
            logger.info("Servidor listo para recibir al cliente")
            with wait_for_client(listener) as conn:
                return serve(conn)
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()