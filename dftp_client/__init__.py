"""
dftp_client: cliente FTP (RFC 959) en modo pasivo.

    from dftp_client import FTPClient

    with FTPClient.connect("ftp.example.com") as ftp:
        ftp.login("anonymous", "guest")
        names = ftp.list_file_names()
"""

__all__ = ["FTPClient", "ClientConfig", "ProtocolError", "AuthenticationError", "ExtractionError",
           "ConsoleLogger", "LoggingFTPLogger", "StatusType"]

def __getattr__(name: str):
	if name == "ClientConfig":
		from .config import ClientConfig
		return ClientConfig
	if name in __all__:
		from . import core
		return getattr(core, name)
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__():
	return __all__
