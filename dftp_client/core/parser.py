"""
Reply framing and extraction for the FTP control connection.

A reply is complete when:
    - single line: ``ddd text\\r\\n``
    - multi line:  ``ddd-text\\r\\n ... \\r\\nddd text\\r\\n``
"""

import logging
import re
from typing import NamedTuple, Optional

from .codes import is_success
from .errors import ExtractionError

logger = logging.getLogger("dftp.client.parser")

CRLF = b"\r\n"


class PassiveAddress(NamedTuple):
    host: str
    port: int

    def __str__(self):
        return f"{self.host}:{self.port}"


class Reply:
    """
    Una respuesta completa del servidor tal como llego por el canal de control.

    Campos derivados:
        . code    : los 3 digitos del inicio
        . success : True para 1xx / 2xx
        . message : texto legible, sin codigos ni terminadores
        . text    : la respuesta entera, solo para mostrar

    message (y las rutas de PWD/MKD) conservan los bytes que no son del
    encoding como surrogates, asi vuelven intactos al servidor.
    """

    def __init__(self, raw: bytes, encoding: str = "utf-8"):
        self.raw = raw
        self.encoding = encoding

    @property
    def code(self) -> str:
        return extract_code(self.raw).decode("ascii", errors="replace")

    @property
    def success(self) -> bool:
        return is_success(self.code)

    @property
    def message(self) -> str:
        return remove_control_symbols(self.raw, self.encoding)

    @property
    def text(self) -> str:
        return self.raw.decode(self.encoding, errors="replace")

    def __repr__(self):
        return f"Reply(code={self.code!r}, raw={self.raw!r})"


# ---------------- Framing ----------------

def is_complete_response(msg: bytes) -> bool:
    return is_complete_single_line_response(msg) or is_complete_multi_line_response(msg)


def is_complete_single_line_response(msg: bytes) -> bool:
    return is_single_line_response(msg) and msg.endswith(CRLF)


def is_single_line_response(msg: bytes) -> bool:
    return len(msg) >= 4 and msg[3:4] == b" "


def is_multi_line_response(msg: bytes) -> bool:
    return len(msg) >= 4 and msg[3:4] == b"-"


def is_complete_multi_line_response(msg: bytes) -> bool:
    return is_multi_line_response(msg) and last_line_starts_with_first_code(msg)


def last_line_starts_with_first_code(msg: bytes) -> bool:
    # A terminated reply splits into a trailing empty segment, so the last
    # real line is the second to last segment.
    lines = msg.split(CRLF)
    if len(lines) < 3:
        return False
    first = lines[0]
    last = lines[-2]
    if len(first) < 3 or len(last) < 4:
        return False
    return last[:4] == first[:3] + b" "


def complete_response_length(msg: bytes) -> int:
    """Length of the first complete reply at the start of msg, or 0 if there is none yet."""
    first_end = msg.find(CRLF)
    if first_end < 0:
        return 0
    if is_single_line_response(msg):
        return first_end + 2
    if not is_multi_line_response(msg):
        return 0
    closing = bytes(msg[:3]) + b" "
    start = first_end + 2
    while True:
        end = msg.find(CRLF, start)
        if end < 0:
            return 0
        if msg[start:start + 4] == closing:
            return end + 2
        start = end + 2


def read_response(sock, chunk_size: int = 1024, buffer: Optional[bytearray] = None) -> bytes:
    """
    Lee del socket hasta tener una respuesta completa.
    Los errores de lectura se propagan tal cual.

    Si se pasa ``buffer``, se lee primero de ahi y lo que llegue despues de la
    respuesta (p.ej. un 150 y un 226 en el mismo segmento) queda guardado en el
    para la siguiente llamada.
    """
    if buffer is None:
        buffer = bytearray()
    while True:
        length = complete_response_length(buffer)
        if length:
            reply = bytes(buffer[:length])
            del buffer[:length]
            return reply
        data = sock.recv(chunk_size)
        if not data:
            raise ConnectionError(
                f"Control connection closed before a complete reply was received: {bytes(buffer)!r}")
        buffer.extend(data)


# ---------------- Extraction ----------------

def extract_code(msg: bytes) -> bytes:
    if len(msg) <= 3:
        return bytes(msg)
    return bytes(msg[:3])


def remove_control_symbols(resp: bytes, encoding: str = "utf-8") -> str:
    """Strips the reply code(s) and the final line feed, keeping the human text."""
    text = resp.decode(encoding, errors="surrogateescape")
    no_code_or_new_line = _trim_crlf(text[4:])
    if is_single_line_response(resp):
        return no_code_or_new_line
    last_line_start = no_code_or_new_line.rfind("\r\n")
    if last_line_start < 0:
        return no_code_or_new_line
    start = no_code_or_new_line[:last_line_start + 2]
    end = no_code_or_new_line[last_line_start + 6:]
    return _trim_crlf(start + end)


def _trim_crlf(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    return text


# Quotes inside the path are doubled (RFC 959, appendix II).
PATH_MATCHER = re.compile(rb'[0-9]{3}[ -]"((?:[^"\r\n]|"")+)"[^\r\n]*\r\n')


def get_path_from_response(resp: bytes, encoding: str = "utf-8") -> str:
    match = PATH_MATCHER.search(resp)
    if match is None:
        logger.error(f"No quoted path in reply: {resp!r}")
        raise ExtractionError("path extraction", resp)
    return match.group(1).replace(b'""', b'"').decode(encoding, errors="surrogateescape")


ADDRESS_MATCHER = re.compile(rb"\(([0-9]+),([0-9]+),([0-9]+),([0-9]+),([0-9]+),([0-9]+)\)")


def get_address_of_pasv_response(resp: bytes) -> PassiveAddress:
    """Parses ``227 ... (h1,h2,h3,h4,p1,p2)`` into host and port."""
    match = ADDRESS_MATCHER.search(resp)
    if match is None:
        logger.error(f"Failed to parse PASV response: {resp!r}")
        raise ExtractionError("address extraction", resp)
    parts = [int(p) for p in match.groups()]
    ip = ".".join(str(p) for p in parts[:4])
    port = (parts[4] << 8) + parts[5]
    logger.debug(f"PASV parsed: {ip}:{port}")
    return PassiveAddress(ip, port)


def parse_nlst(data: str) -> list[str]:
    lines = data.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]
    return lines
