"""
Stream decoding for PDF content streams.

Filters are stacked one onto another: each stage reads lazily from the
previous one, and closing the chain closes every stage in order.
"""

import io
import zlib
from typing import BinaryIO, List, Optional

from ..errors import CorruptStream, UnsupportedFilter

FLATE_FILTERS = ("FlateDecode", "Fl")


class FlateReader(io.RawIOBase):
    """Inflates a deflate-compressed source on demand."""

    CHUNK_SIZE = 8192

    def __init__(self, source: BinaryIO):
        self._source = source
        self._inflater = zlib.decompressobj()
        self._pending = b""
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending and not self._eof:
            chunk = self._source.read(self.CHUNK_SIZE)
            try:
                if chunk:
                    self._pending = self._inflater.decompress(chunk)
                else:
                    self._pending = self._inflater.flush()
                    self._eof = True
            except zlib.error as e:
                raise CorruptStream(f"could not inflate stream: {e}") from e
        n = min(len(buffer), len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n


class StreamChain(io.RawIOBase):
    """
    A sequence of readers where reads go to the last one.

    close() closes all of them in registration order and re-raises the last
    error encountered, if any.
    """

    def __init__(self, readers: List[BinaryIO]):
        self.readers = readers

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        data = self.readers[-1].read(len(buffer))
        n = len(data)
        buffer[:n] = data
        return n

    def close(self) -> None:
        if self.closed:
            return
        error: Optional[BaseException] = None
        for reader in self.readers:
            try:
                reader.close()
            except Exception as e:
                error = e
        super().close()
        if error is not None:
            raise error


def decode_stream(raw: BinaryIO, filters: List[str]) -> StreamChain:
    """
    Stack the named filters on top of a raw stream.

    Takes ownership of raw: it is closed with the returned chain, or right
    away if a filter is not supported.
    """
    readers: List[BinaryIO] = [raw]
    current = raw
    for name in filters:
        if name in FLATE_FILTERS:
            current = FlateReader(current)
            readers.append(current)
        else:
            StreamChain(readers).close()
            raise UnsupportedFilter(name)
    return StreamChain(readers)
