"""
Client-wide defaults.

Every value can be overridden with an environment variable:

    DFTP_PORT           control port (21)
    DFTP_TIMEOUT        socket timeout in seconds (10.0)
    DFTP_CONTROL_CHUNK  bytes per read on the control connection (1024)
    DFTP_DATA_CHUNK     bytes per read/write on the data connection (4096)
    DFTP_ENCODING       encoding of commands, replies and listings (utf-8)
"""

import os
from dataclasses import dataclass

DEFAULT_PORT = 21


@dataclass
class ClientConfig:
    port: int = DEFAULT_PORT
    timeout: float = 10.0
    control_chunk_size: int = 1024
    data_chunk_size: int = 4096
    encoding: str = "utf-8"

    @staticmethod
    def from_env() -> "ClientConfig":
        return ClientConfig(
            port=int(os.getenv("DFTP_PORT", DEFAULT_PORT)),
            timeout=float(os.getenv("DFTP_TIMEOUT", 10.0)),
            control_chunk_size=int(os.getenv("DFTP_CONTROL_CHUNK", 1024)),
            data_chunk_size=int(os.getenv("DFTP_DATA_CHUNK", 4096)),
            encoding=os.getenv("DFTP_ENCODING", "utf-8"),
        )
