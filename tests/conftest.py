import asyncio

import pytest

import ircline.util


@pytest.fixture
def ioloop():
    loop = ircline.util.create_loop()
    yield loop
    loop.close()


class fake_reader:
    """
    hands out the queued chunks one read() at a time, then b'' (EOF).
    with hold_open=True it waits for more chunks instead of hitting EOF
    """

    def __init__(self, chunks=(), hold_open=False):
        self.chunks = list(chunks)
        self.hold_open = hold_open
        self.reads = 0
        self._more = None

    def feed(self, chunk):
        self.chunks.append(chunk)
        if self._more is not None:
            self._more.set()

    async def read(self, n):
        self.reads += 1
        while not self.chunks and self.hold_open:
            self._more = asyncio.Event()
            await self._more.wait()
        if not self.chunks:
            return b''
        chunk = self.chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        if len(chunk) > n:
            self.chunks.insert(0, chunk[n:])
        return chunk[:n]


class fake_writer:
    """
    records every write() and the drain() around it in self.events
    """

    def __init__(self, fail_with=None):
        self.chunks = []
        self.events = []
        self.fail_with = fail_with
        self.is_closed = False

    def write(self, data):
        if self.fail_with is not None:
            raise self.fail_with
        self.chunks.append(bytes(data))
        self.events.append(('write', bytes(data)))

    async def drain(self):
        # give other writers a chance to cut in
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.events.append(('drained', None))

    def close(self):
        self.is_closed = True

    async def wait_closed(self):
        await asyncio.sleep(0)


@pytest.fixture
def make_stream():
    def make(chunks=(), hold_open=False, fail_with=None):
        return fake_reader(chunks, hold_open), fake_writer(fail_with)
    return make
