# Various mocks for testing


class MockSocket:
    """
    A class simulating a readable socket, optionally raising a
    special exception every other read.
    """

    class TestError(BaseException):
        pass

    def __init__(self, data, interrupt_every=0):
        self.data = data
        self.counter = 0
        self.pos = 0
        self.interrupt_every = interrupt_every
        self.timeout = None
        self.sent = []

    def tick(self):
        self.counter += 1
        if not self.interrupt_every:
            return
        if (self.counter % self.interrupt_every) == 0:
            raise self.TestError()

    def recv(self, bufsize):
        self.tick()
        bufsize = min(5, bufsize)  # truncate the read size
        result = self.data[self.pos : self.pos + bufsize]
        self.pos += len(result)
        return result

    def settimeout(self, timeout):
        self.timeout = timeout

    def sendall(self, data):
        self.sent.append(bytes(data))

    def shutdown(self, how):
        pass

    def close(self):
        pass
