"""
Core FTP Client logic.
Includes the reply parser, connection managers, command engine and data transfers.
"""

__all__ = ["FTPClient", "ControlConnectionManager", "DataConnectionManager", "DataTransfer",
           "Reply", "PassiveAddress", "ReplyCode", "StatusType", "TransferType", "SessionState",
           "is_success", "FTPError", "ProtocolError", "AuthenticationError", "ExtractionError",
           "FTPLogger", "ConsoleLogger", "LoggingFTPLogger"]

def __getattr__(name: str):
	if name == "FTPClient":
		from .commands import FTPClient
		return FTPClient
	if name == "ControlConnectionManager":
		from .connection import ControlConnectionManager
		return ControlConnectionManager
	if name == "DataConnectionManager":
		from .data_connection import DataConnectionManager
		return DataConnectionManager
	if name == "DataTransfer":
		from .transfer import DataTransfer
		return DataTransfer
	if name in ("Reply", "PassiveAddress"):
		from . import parser
		return getattr(parser, name)
	if name in ("ReplyCode", "StatusType", "TransferType", "SessionState", "is_success"):
		from . import codes
		return getattr(codes, name)
	if name in ("FTPError", "ProtocolError", "AuthenticationError", "ExtractionError"):
		from . import errors
		return getattr(errors, name)
	if name in ("FTPLogger", "ConsoleLogger", "LoggingFTPLogger"):
		from . import logger
		return getattr(logger, name)
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__():
	return __all__
