"""Sockets de prueba: un lado servidor guionado, sin red."""


class FakeControlSocket:
    """
    Control socket fed with queued reply chunks.
    Each queued item is returned by at most one recv() call.
    """

    def __init__(self, *chunks, events=None):
        self.chunks = [c.encode() if isinstance(c, str) else c for c in chunks]
        self.sent = []
        self.raw_sent = []
        self.closed = False
        self.events = events if events is not None else []

    def recv(self, size):
        self.events.append("recv")
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        if len(chunk) > size:
            self.chunks.insert(0, chunk[size:])
            chunk = chunk[:size]
        return chunk

    def sendall(self, data):
        line = data.decode(errors="surrogateescape")
        self.raw_sent.append(data)
        self.sent.append(line)
        self.events.append("send " + line.strip())

    def settimeout(self, timeout):
        pass

    def close(self):
        self.closed = True


class FakeDataSocket:
    """Data socket that yields a payload then EOF, and records what is uploaded."""

    def __init__(self, payload=b"", error=None, events=None):
        self.payload = payload
        self.error = error
        self.received = b""
        self.closed = False
        self.close_calls = 0
        self.events = events if events is not None else []

    def recv(self, size):
        if self.error is not None:
            raise self.error
        chunk, self.payload = self.payload[:size], self.payload[size:]
        return chunk

    def sendall(self, data):
        if self.error is not None:
            raise self.error
        self.received += data

    def settimeout(self, timeout):
        pass

    def close(self):
        self.closed = True
        self.close_calls += 1
        self.events.append("data close")


class FakeDialer:
    def __init__(self, *sockets):
        self.sockets = list(sockets)
        self.calls = []

    def __call__(self, host, port, timeout=None):
        self.calls.append((host, port))
        return self.sockets.pop(0)


class RecordingFTPLogger:
    def __init__(self):
        self.sent = []
        self.received = []

    def sent_ftp(self, msg, err):
        self.sent.append((msg, err))

    def received_ftp(self, response, err):
        self.received.append((response, err))
