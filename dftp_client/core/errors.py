class FTPError(Exception):
    """Base de los errores propios del cliente."""
    pass


class ProtocolError(FTPError):
    """
    The server answered with a reply code the operation did not expect.

    Keeps the command that triggered it and the full raw reply.
    """

    def __init__(self, command: str, response: bytes = b""):
        self.command = command
        self.response = response
        text = response.decode("utf-8", errors="replace")
        super().__init__(f"FTP server responded to {command} with error: {text}")


class AuthenticationError(ProtocolError):
    """USER / PASS / ACCT sequence did not end in a logged-in reply."""
    pass


class ExtractionError(ProtocolError):
    """A reply was missing the quoted path or the passive-mode tuple."""
    pass
