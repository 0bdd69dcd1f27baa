import asyncio
import logging

import ircline.parse


class connection_closed(ConnectionError):
    """
    the stream hit EOF, or the irc_connection was used after close().
    it's an OSError, so callers catching transport errors catch this too
    """


class irc_connection:

    """
    the class is meant to be used as follows:
    - something else opens the stream (see connect() below, or any
    asyncio.open_connection-like call) and hands the (reader, writer) pair
    to irc_connection, which owns it from now on
    - any number of tasks await irc_connection.read_message(). reads are
    serialized, each one gets the next complete line, parsed
    - any number of tasks await irc_connection.send_line(str) or
    irc_connection.write_raw(bytes). writes are serialized, the bytes of
    one call never mix with another on the wire
    - a pending read doesn't hold up writes and the other way around,
    there is one lock per direction
    - caller awaits irc_connection.close() when done. everything after that
    raises connection_closed
    """

    """
    recv takes a bufsize argument, but nobody bothers to actually research
    what bufsize makes sense on their platform. docs probably recommend
    4096, because kernel pages are often 4k
    """
    RECVSIZE = 4096

    def __init__(self, reader, writer, encoding='utf8'):
        self.logger = logging.getLogger(
            __name__ + '.' + self.__class__.__name__)
        self.reader, self.writer = reader, writer
        self.encoding = encoding

        """
        the stream gives us incomplete irc messages so we queue them
        here until we can pull out a complete one
        """
        self._recv_queue = bytearray()

        self._read_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._closed = False
        self.logger.info('adopted stream %s', writer)

    @property
    def closed(self):
        return self._closed

    def _check_open(self):
        if self._closed:
            raise connection_closed('irc connection is closed')

    def decode(self, rawline):
        # surrogateescape so bytes that aren't valid text survive a round trip
        return rawline.decode(self.encoding, 'surrogateescape')

    def encode(self, line):
        return line.encode(self.encoding, 'surrogateescape')

    async def read_line(self):
        """
        return the next line as bytes, without the \n but with the \r
        if the server sent one. lame ircds send just \n
        """
        self._check_open()
        async with self._read_lock:
            self._check_open()
            foundpos = self._recv_queue.find(b'\n')
            while foundpos == -1:
                more = await self.reader.read(self.RECVSIZE)
                if not len(more):
                    self.logger.warning(
                        'stream closed by peer, dropping %d buffered bytes',
                        len(self._recv_queue))
                    self._recv_queue = bytearray()
                    raise connection_closed('socket connection broken')
                # the search can resume where the old data ended
                start = len(self._recv_queue)
                self._recv_queue += more
                foundpos = self._recv_queue.find(b'\n', start)

            rawline = bytes(self._recv_queue[:foundpos])
            del self._recv_queue[:foundpos + 1]
            self.logger.debug('getline: %r', rawline)
            return rawline

    async def read_message(self):
        """
        block until a complete line arrives, return it parsed.
        raises connection_closed on EOF, other stream errors pass through
        """
        rawline = await self.read_line()
        return ircline.parse.irc_message(self.decode(rawline))

    async def write_raw(self, binmsg):
        """
        write binmsg as is, return the number of bytes written
        """
        self._check_open()
        async with self._write_lock:
            self._check_open()
            self.logger.debug('trying to send: %r', binmsg)
            self.writer.write(binmsg)
            await self.writer.drain()
            return len(binmsg)

    async def send_line(self, line):
        """
        line does NOT have \r\n at the end, we add it here
        """
        await self.write_raw(self.encode(line) + b'\r\n')

    async def close(self):
        """
        close the stream, for good. there is no reopening; a second close()
        raises connection_closed like every other call after the first.
        errors from the transport while closing are raised as is
        """
        self._check_open()
        self._closed = True
        self.logger.info('closing %s', self.writer)
        self.writer.close()
        await self.writer.wait_closed()


async def connect(host, port, use_ssl=False, encoding='utf8'):
    """
    open a tcp connection, or a tls one when use_ssl is True or an
    ssl.SSLContext, and wrap it in an irc_connection.
    no retries, failures are raised to the caller
    """
    logger = logging.getLogger(__name__)
    logger.info('connecting to %s:%s ssl=%s', host, port, bool(use_ssl))
    reader, writer = await asyncio.open_connection(
        host=host,
        port=port,
        ssl=use_ssl if use_ssl else None,
    )
    return irc_connection(reader, writer, encoding)
