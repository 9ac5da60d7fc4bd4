from enum import Enum


class ReplyCode(str, Enum):
    """Codigos de respuesta conocidos del canal de control (RFC 959)."""

    COMMAND_OK = "200"
    SYSTEM_STATUS_OR_HELP = "211"
    DIRECTORY_STATUS = "212"
    FILE_STATUS = "213"
    HELP_MESSAGE = "214"
    SYSTEM_NAME = "215"
    SERVICE_READY = "220"
    SERVICE_CLOSING = "221"
    NO_TRANSFER_IN_PROGRESS = "225"
    CLOSING_DATA_CONNECTION = "226"
    ENTERING_PASSIVE_MODE = "227"
    USER_LOGGED_IN = "230"
    FILE_ACTION_COMPLETED = "250"
    PATH_CREATED = "257"
    NEED_PASSWORD = "331"
    NEED_ACCOUNT = "332"
    FILE_ACTION_PENDING = "350"
    CONNECTION_CLOSED_TRANSFER_ABORTED = "426"

    def __str__(self):
        return self.value


def is_success(code: str) -> bool:
    """Preliminary (1xx) and completion (2xx) replies count as success."""
    if len(code) != 3:
        return False
    return code[0] in ("1", "2")


class StatusType(Enum):
    GENERAL = "status"
    FILE = "file status"
    DIRECTORY = "directory status"


STATUS_TYPE_BY_CODE = {
    ReplyCode.SYSTEM_STATUS_OR_HELP.value: StatusType.GENERAL,
    ReplyCode.DIRECTORY_STATUS.value: StatusType.DIRECTORY,
    ReplyCode.FILE_STATUS.value: StatusType.FILE,
}


class TransferType(Enum):
    ASCII = "A"
    BINARY = "I"

    @property
    def symbol(self) -> str:
        return self.value


class SessionState(Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATED = "AUTHENTICATED"
    TERMINATED = "TERMINATED"
