import logging
from typing import Optional


class FTPLogger:
    """
    Receptor de los mensajes crudos del canal de control.

    Interfaz:
        - sent_ftp(msg, err): llamado despues de enviar un comando.
        - received_ftp(response, err): llamado despues de recibir una respuesta.
    En ambos casos err es la excepcion de transporte, o None.

    Note: ALL traffic is passed through, including the clear-text password of PASS.
    """

    def sent_ftp(self, msg: bytes, err: Optional[BaseException]) -> None:
        pass

    def received_ftp(self, response: bytes, err: Optional[BaseException]) -> None:
        pass


class ConsoleLogger(FTPLogger):
    """Prints every control message to stdout. Handy while debugging a server."""

    def sent_ftp(self, msg, err):
        _write("--->", msg, err)

    def received_ftp(self, response, err):
        _write("<---", response, err)


def _write(arrow: str, msg: bytes, err):
    if err is not None:
        print(f"{arrow} ERROR:{err}")
    else:
        print(f"{arrow} {msg.decode('utf-8', errors='replace')}", end="")


class LoggingFTPLogger(FTPLogger):
    """Forwards the control traffic to a stdlib logger at DEBUG level."""

    def __init__(self, name: str = "dftp.client.wire"):
        self.logger = logging.getLogger(name)

    def sent_ftp(self, msg, err):
        if err is not None:
            self.logger.warning("---> ERROR: %s", err)
        else:
            self.logger.debug("---> %r", msg)

    def received_ftp(self, response, err):
        if err is not None:
            self.logger.warning("<--- ERROR: %s", err)
        else:
            self.logger.debug("<--- %r", response)
