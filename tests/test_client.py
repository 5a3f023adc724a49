import socket

import pytest

from tpzero import client
from tpzero.protocol import OpCode, as_text, decode_values


def _read_exact(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        assert chunk
        data += chunk
    return data


def _read_frame(sock):
    header = _read_exact(sock, 8)
    op = int.from_bytes(header[:4], "little", signed=True)
    size = int.from_bytes(header[4:], "little", signed=True)
    return op, _read_exact(sock, size)


def _feed_input(monkeypatch, lines):
    answers = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


def test_load_config(tmp_path):
    path = tmp_path / "cliente.config"
    path.write_text("# comment\nIP=127.0.0.1\n\nPUERTO=4444\nCLAVE=a=b\n")
    assert client.load_config(str(path)) == {
        "IP": "127.0.0.1",
        "PUERTO": "4444",
        "CLAVE": "a=b",
    }


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        client.load_config(str(tmp_path / "missing.config"))


def test_read_lines_stops_at_empty(monkeypatch):
    _feed_input(monkeypatch, ["uno", "dos", "", "never"])
    assert list(client.read_lines()) == ["uno", "dos"]


def test_read_lines_stops_at_eof(monkeypatch):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    assert list(client.read_lines()) == []


def test_log_console(monkeypatch, caplog, tmp_path):
    logger = client.create_logger(str(tmp_path / "tp0.log"))
    _feed_input(monkeypatch, ["hola", "chau", ""])
    with caplog.at_level("INFO", logger="cliente"):
        client.log_console(logger)
    assert [r.getMessage() for r in caplog.records] == ["hola", "chau"]


def test_build_package_round_trip():
    package = client.build_package(["a", "bc"])
    assert package.op_code == OpCode.PACKAGE
    assert [as_text(v) for v in decode_values(bytes(package.payload))] == ["a", "bc"]


def test_send_message_and_package_over_connection():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        port = listener.getsockname()[1]
        with client.create_connection("127.0.0.1", str(port)) as conn:
            client.send_message("hola", conn)
            client.send_package(client.build_package(["x", "y"]), conn)
            peer, _ = listener.accept()
        with peer:
            op, payload = _read_frame(peer)
            assert op == OpCode.MESSAGE
            assert as_text(payload) == "hola"
            op, payload = _read_frame(peer)
            assert op == OpCode.PACKAGE
            assert [as_text(v) for v in decode_values(payload)] == ["x", "y"]


def test_main_sends_key_and_lines(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    with socket.create_server(("127.0.0.1", 0)) as listener:
        port = listener.getsockname()[1]
        config = tmp_path / "cliente.config"
        config.write_text(f"IP=127.0.0.1\nPUERTO={port}\nCLAVE=clave\n")
        _feed_input(monkeypatch, ["primera", "segunda", ""])
        assert client.main([str(config)]) == 0
        peer, _ = listener.accept()
        with peer:
            op, payload = _read_frame(peer)
            assert (op, as_text(payload)) == (OpCode.MESSAGE, "clave")
            op, payload = _read_frame(peer)
            assert op == OpCode.PACKAGE
            assert [as_text(v) for v in decode_values(payload)] == ["primera", "segunda"]
    log_text = (tmp_path / "tp0.log").read_text()
    assert "Soy un log :)" in log_text
    assert "clave" in log_text


def test_main_missing_key(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "cliente.config"
    config.write_text("IP=127.0.0.1\n")
    with pytest.raises(KeyError):
        client.main([str(config)])