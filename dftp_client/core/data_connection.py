import logging
from typing import Callable, Optional

from .connection import dial

logger = logging.getLogger("dftp.client.data_connection")


class DataConnectionManager:
    def __init__(self, ip: str, port: int, dialer: Optional[Callable] = None, timeout: Optional[float] = None,
                 chunk_size: int = 4096):
        """
        Maneja la conexión de datos PASV del cliente FTP.
        """
        self.ip = ip
        self.port = port
        self.dialer = dialer or dial
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.data_socket = None

    def connect(self):
        """
        Establece la conexión TCP con el servidor en el canal de datos.
        """
        self.data_socket = self.dialer(self.ip, self.port, self.timeout)
        logger.debug(f"[DATA] Connected to {self.ip}:{self.port}")

    def close(self):
        """
        Cierra la conexión de datos. Se puede llamar más de una vez.
        """
        if self.data_socket:
            sock, self.data_socket = self.data_socket, None
            sock.close()
            logger.debug(f"[DATA] Disconnected from {self.ip}:{self.port}")

    def receive_into(self, dest) -> int:
        """
        Copia todo lo que llega por el canal de datos en dest hasta EOF.
        Retorna la cantidad de bytes copiados.
        """
        total = 0
        while True:
            data = self.data_socket.recv(self.chunk_size)
            if not data:
                break
            dest.write(data)
            total += len(data)
        logger.debug(f"[DATA] Received {total} bytes from {self.ip}:{self.port}")
        return total

    def send_from(self, source) -> int:
        """
        Envía el contenido de source hasta agotarlo.
        """
        total = 0
        while chunk := source.read(self.chunk_size):
            self.data_socket.sendall(chunk)
            total += len(chunk)
        logger.debug(f"[DATA] Sent {total} bytes to {self.ip}:{self.port}")
        return total
