import socket
import logging
from typing import Optional

from dftp_client.config import ClientConfig
from .logger import FTPLogger
from .parser import Reply, read_response

logger = logging.getLogger("dftp.client.connection")


def dial(host: str, port: int, timeout: Optional[float] = None) -> socket.socket:
    """Abre un socket TCP hacia host:port. Los errores de red se propagan sin envolver."""
    logger.info(f"Connecting to {host}:{port} (timeout={timeout}s)")
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(timeout)
    try:
        sock.connect((host, port))
    except OSError as e:
        logger.error(f"✗ Failed to connect to {host}:{port} - {e}")
        sock.close()
        raise
    logger.info(f"✓ Connected to {host}:{port}")
    return sock


class ControlConnectionManager:
    """
    Canal de control: envia lineas de comando y recibe respuestas enmarcadas.

    Every raw send and receive is reported to the optional FTPLogger before the
    caller sees the result, including the transport error if there was one.
    """

    def __init__(self, sock, ftp_logger: Optional[FTPLogger] = None, config: Optional[ClientConfig] = None):
        self.socket = sock
        self.ftp_logger = ftp_logger
        self.config = config or ClientConfig()
        # Bytes already read that belong to the next reply.
        self._pending = bytearray()

    def send_command(self, verb: str, *args: str):
        if self.socket is None:
            raise RuntimeError("No connection established.")
        for word in (verb,) + args:
            if "\r" in word or "\n" in word:
                raise ValueError(f"Line breaks are not allowed in FTP command arguments: {word!r}")
        # Some servers reject a trailing space, so a lone empty argument is dropped.
        if args == ("",):
            args = ()
        line = " ".join((verb,) + args) + "\r\n"
        msg = line.encode(self.config.encoding, errors="surrogateescape")
        logger.debug(f"→ SEND: {_mask(verb, line.strip())}")
        try:
            self.socket.sendall(msg)
        except OSError as e:
            self._notify_sent(msg, e)
            raise
        self._notify_sent(msg, None)

    def receive_response(self) -> Reply:
        if self.socket is None:
            raise RuntimeError("No connection established.")
        try:
            raw = read_response(self.socket, self.config.control_chunk_size, self._pending)
        except OSError as e:
            self._notify_received(b"", e)
            raise
        self._notify_received(raw, None)
        reply = Reply(raw, self.config.encoding)
        logger.debug(f"← RECV: {reply.text.strip()}")
        return reply

    def close(self):
        if self.socket:
            logger.info("Closing control connection")
            sock, self.socket = self.socket, None
            sock.close()

    def _notify_sent(self, msg: bytes, err):
        if self.ftp_logger is not None:
            self.ftp_logger.sent_ftp(msg, err)

    def _notify_received(self, raw: bytes, err):
        if self.ftp_logger is not None:
            self.ftp_logger.received_ftp(raw, err)


def _mask(verb: str, line: str) -> str:
    if verb.upper() == "PASS":
        return "PASS ****"
    return line
