import io
import logging

from .codes import TransferType
from .data_connection import DataConnectionManager
from .errors import ProtocolError
from .parser import parse_nlst

logger = logging.getLogger("dftp.client.transfer")


class DataTransfer:
    """
    Orquesta las operaciones que necesitan conexion de datos (LIST, NLST, RETR, STOR, STOU, APPE).

    Secuencia:
        1. TYPE adecuado (A para listados, I para archivos)
        2. PASV y conexion al puerto anunciado
        3. comando de datos por el canal de control y su respuesta preliminar
        4. copia de bytes
        5. cierre explicito de la conexion de datos
        6. respuesta final por el canal de control

    A transfer is only reported as done once the final reply is a success.
    """

    def __init__(self, client):
        self.client = client

    def enter_passive_mode(self) -> DataConnectionManager:
        address = self.client.run("PASV")
        config = self.client.config
        data_conn = DataConnectionManager(address.host, address.port, dialer=self.client.dialer,
                                          timeout=config.timeout, chunk_size=config.data_chunk_size)
        data_conn.connect()
        return data_conn

    def read_list_data(self, verb: str, path: str = "") -> str:
        self.client.set_transfer_type(TransferType.ASCII)
        buffer = io.BytesIO()
        self._transfer(verb, path, lambda data_conn: data_conn.receive_into(buffer))
        return buffer.getvalue().decode(self.client.config.encoding, errors="surrogateescape")

    def read_name_list(self, path: str = "") -> list[str]:
        return parse_nlst(self.read_list_data("NLST", path))

    def retrieve(self, path: str, dest) -> int:
        self.client.set_transfer_type(TransferType.BINARY)
        return self._transfer("RETR", path, lambda data_conn: data_conn.receive_into(dest))

    def store(self, verb: str, path: str, source) -> int:
        self.client.set_transfer_type(TransferType.BINARY)
        return self._transfer(verb, path, lambda data_conn: data_conn.send_from(source))

    def _transfer(self, verb: str, path: str, copy) -> int:
        data_conn = self.enter_passive_mode()
        try:
            reply = self.client.send_and_receive(verb, path)
            if not reply.success:
                raise ProtocolError(verb, reply.raw)
            copied = copy(data_conn)
            # The server takes the close as the end of the transfer.
            data_conn.close()
        finally:
            data_conn.close()

        reply = self.client.receive()
        if not reply.success:
            logger.warning(f"{verb} {path or '.'} copied {copied} bytes but was not confirmed: {reply.text.strip()}")
            raise ProtocolError(verb, reply.raw)
        logger.info(f"{verb} {path or '.'}: {copied} bytes transferred")
        return copied
