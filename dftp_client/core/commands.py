import logging
from typing import Callable, NamedTuple, Optional

from dftp_client.config import ClientConfig
from .codes import ReplyCode, SessionState, StatusType, TransferType, STATUS_TYPE_BY_CODE
from .connection import ControlConnectionManager, dial
from .errors import AuthenticationError, ProtocolError
from .logger import FTPLogger
from .parser import Reply, get_address_of_pasv_response, get_path_from_response
from .transfer import DataTransfer

logger = logging.getLogger("dftp.client.commands")


def _path(reply: Reply) -> str:
    return get_path_from_response(reply.raw, reply.encoding)


def _message(reply: Reply) -> str:
    return reply.message


def _status(reply: Reply) -> tuple[StatusType, str]:
    return STATUS_TYPE_BY_CODE[reply.code], reply.message


def _address(reply: Reply):
    return get_address_of_pasv_response(reply.raw)


class CommandSpec(NamedTuple):
    expected: tuple
    post_process: Optional[Callable[[Reply], object]] = None


# Tabla de comandos simples: verbo -> codigos aceptados y post-procesado de la respuesta
COMMAND_TABLE = {
    "CWD": CommandSpec((ReplyCode.FILE_ACTION_COMPLETED,)),
    "CDUP": CommandSpec((ReplyCode.COMMAND_OK,)),
    "SMNT": CommandSpec((ReplyCode.FILE_ACTION_COMPLETED,)),
    "REIN": CommandSpec((ReplyCode.SERVICE_READY,)),
    "QUIT": CommandSpec((ReplyCode.SERVICE_CLOSING,)),
    "RNFR": CommandSpec((ReplyCode.FILE_ACTION_PENDING,)),
    "RNTO": CommandSpec((ReplyCode.FILE_ACTION_COMPLETED,)),
    "DELE": CommandSpec((ReplyCode.FILE_ACTION_COMPLETED,)),
    "MKD": CommandSpec((ReplyCode.PATH_CREATED,), _path),
    "RMD": CommandSpec((ReplyCode.FILE_ACTION_COMPLETED,)),
    "NOOP": CommandSpec((ReplyCode.COMMAND_OK,)),
    "HELP": CommandSpec((ReplyCode.SYSTEM_STATUS_OR_HELP, ReplyCode.HELP_MESSAGE), _message),
    "STAT": CommandSpec((ReplyCode.SYSTEM_STATUS_OR_HELP, ReplyCode.DIRECTORY_STATUS, ReplyCode.FILE_STATUS),
                        _status),
    "SYST": CommandSpec((ReplyCode.SYSTEM_NAME,), _message),
    "PWD": CommandSpec((ReplyCode.PATH_CREATED,), _path),
    "TYPE": CommandSpec((ReplyCode.COMMAND_OK,)),
    "PASV": CommandSpec((ReplyCode.ENTERING_PASSIVE_MODE,), _address),
}


class FTPClient:
    """
    Sesion FTP sobre un canal de control ya abierto.

    Un metodo por verbo del protocolo. Cada comando espera un codigo concreto;
    cualquier otro codigo es un ProtocolError y los errores de transporte
    (OSError) se propagan sin reintentos.

    Not safe for concurrent use: one command at a time per session.
    """

    def __init__(self, connection: ControlConnectionManager, dialer: Optional[Callable] = None):
        self.conn = connection
        self.config = connection.config
        self.dialer = dialer or dial
        self.transfer_type = TransferType.ASCII
        self.state = SessionState.UNAUTHENTICATED
        self.transfer = DataTransfer(self)

    # ---------------- Apertura / cierre ----------------

    @classmethod
    def connect(cls, host: str, port: Optional[int] = None, ftp_logger: Optional[FTPLogger] = None,
                config: Optional[ClientConfig] = None, dialer: Optional[Callable] = None) -> "FTPClient":
        """Dials host:port (default port 21) and waits for the service-ready greeting."""
        config = config or ClientConfig.from_env()
        dialer = dialer or dial
        sock = dialer(host, port or config.port, config.timeout)
        try:
            return cls.connect_on(sock, ftp_logger=ftp_logger, config=config, dialer=dialer)
        except BaseException:
            sock.close()
            raise

    @classmethod
    def connect_on(cls, sock, ftp_logger: Optional[FTPLogger] = None, config: Optional[ClientConfig] = None,
                   dialer: Optional[Callable] = None) -> "FTPClient":
        """Uses an already connected socket as the control connection."""
        client = cls(ControlConnectionManager(sock, ftp_logger, config), dialer=dialer)
        reply = client.receive()
        if reply.code != ReplyCode.SERVICE_READY:
            raise ProtocolError("connect", reply.raw)
        logger.info(f"Server ready: {reply.message}")
        return client

    def close(self):
        """Closes the control socket. It does not send QUIT."""
        self.conn.close()
        self.state = SessionState.TERMINATED

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ---------------- Motor comando / respuesta ----------------

    def send_and_receive(self, verb: str, *args: str) -> Reply:
        try:
            self.conn.send_command(verb, *args)
            return self.conn.receive_response()
        except OSError:
            self.state = SessionState.TERMINATED
            raise

    def receive(self) -> Reply:
        try:
            return self.conn.receive_response()
        except OSError:
            self.state = SessionState.TERMINATED
            raise

    def execute_get_response(self, expected, verb: str, *args: str) -> Reply:
        if isinstance(expected, str):
            expected = (expected,)
        reply = self.send_and_receive(verb, *args)
        if reply.code in expected:
            return reply
        logger.warning(f"{verb} failed: {reply.text.strip()}")
        raise ProtocolError(verb, reply.raw)

    def execute(self, expected, verb: str, *args: str) -> None:
        self.execute_get_response(expected, verb, *args)

    def run(self, verb: str, *args: str):
        """Ejecuta un comando de COMMAND_TABLE y devuelve la respuesta post-procesada (o None)."""
        spec = COMMAND_TABLE[verb]
        reply = self.execute_get_response(spec.expected, verb, *args)
        if spec.post_process is None:
            return None
        return spec.post_process(reply)

    # ---------------- Autenticacion ----------------

    def login(self, user: str, password: str = "", account: str = "") -> None:
        """
        Sends USER and, only if the server asks for it, PASS (and ACCT when an
        account is given and requested).
        """
        reply = self.send_and_receive("USER", user)
        if reply.code == ReplyCode.USER_LOGGED_IN:
            self._logged_in(user)
            return
        if reply.code != ReplyCode.NEED_PASSWORD:
            raise AuthenticationError("USER", reply.raw)

        verb = "PASS"
        reply = self.send_and_receive(verb, password)
        if reply.code == ReplyCode.NEED_ACCOUNT and account:
            verb = "ACCT"
            reply = self.send_and_receive(verb, account)
        if reply.code != ReplyCode.USER_LOGGED_IN:
            raise AuthenticationError(verb, reply.raw)
        self._logged_in(user)

    def _logged_in(self, user: str):
        self.state = SessionState.AUTHENTICATED
        logger.info(f"Logged in as {user}")

    def reinitialize(self) -> None:
        """REIN: the server flushes the login; call login again afterwards."""
        self.run("REIN")
        self.state = SessionState.UNAUTHENTICATED

    def quit(self) -> None:
        """QUIT ends the session but leaves the socket open; call close() afterwards."""
        self.run("QUIT")
        self.state = SessionState.TERMINATED

    # ---------------- Navegacion ----------------

    def change_working_dir_to(self, path: str) -> None:
        self.run("CWD", path)

    def change_dir_up(self) -> None:
        self.run("CDUP")

    def structure_mount(self, path: str) -> None:
        self.run("SMNT", path)

    def print_working_directory(self) -> str:
        return self.run("PWD")

    # ---------------- Archivos y directorios ----------------

    def rename_from_to(self, from_path: str, to_path: str) -> None:
        self.run("RNFR", from_path)
        self.run("RNTO", to_path)

    def delete(self, path: str) -> None:
        self.run("DELE", path)

    def make_directory(self, path: str) -> str:
        """Returns the path of the new directory as reported by the server."""
        return self.run("MKD", path)

    def remove_directory(self, path: str) -> None:
        self.run("RMD", path)

    # ---------------- Informacion ----------------

    def no_operation(self) -> None:
        self.run("NOOP")

    def help(self) -> str:
        return self.help_about("")

    def help_about(self, topic: str) -> str:
        return self.run("HELP", topic)

    def status(self) -> tuple[StatusType, str]:
        return self.status_of("")

    def status_of(self, path: str) -> tuple[StatusType, str]:
        return self.run("STAT", path)

    def system(self) -> str:
        return self.run("SYST")

    def abort(self) -> None:
        """
        ABOR. Success is 225 or 226. When a transfer was cut a 426 comes first
        and the following reply must be 226.
        """
        reply = self.send_and_receive("ABOR")
        if reply.code in (ReplyCode.NO_TRANSFER_IN_PROGRESS, ReplyCode.CLOSING_DATA_CONNECTION):
            return
        if reply.code == ReplyCode.CONNECTION_CLOSED_TRANSFER_ABORTED:
            reply = self.receive()
            if reply.code == ReplyCode.CLOSING_DATA_CONNECTION:
                return
        raise ProtocolError("ABOR", reply.raw)

    # ---------------- Tipo de transferencia ----------------

    def set_transfer_type(self, transfer_type: TransferType) -> None:
        if self.transfer_type == transfer_type:
            return
        self.run("TYPE", transfer_type.symbol)
        self.transfer_type = transfer_type

    # ---------------- Conexion de datos ----------------

    def list_files(self) -> str:
        return self.list_files_in("")

    def list_files_in(self, path: str) -> str:
        """Raw LIST output; its format depends on the server so it is not parsed."""
        return self.transfer.read_list_data("LIST", path)

    def list_file_names(self) -> list[str]:
        return self.list_file_names_in("")

    def list_file_names_in(self, path: str) -> list[str]:
        return self.transfer.read_name_list(path)

    def download(self, path: str, dest) -> None:
        """Writes the remote file into dest (anything with write(bytes))."""
        self.transfer.retrieve(path, dest)

    def upload(self, source, path: str) -> None:
        """STOR: source is anything with read(size) -> bytes."""
        self.transfer.store("STOR", path, source)

    def upload_unique(self, source) -> None:
        self.transfer.store("STOU", "", source)

    def append(self, source, path: str) -> None:
        self.transfer.store("APPE", path, source)
