import logging
import os
from typing import BinaryIO, Iterator, Optional

from cfbunpack.context import CFBContext
from cfbunpack.difat import CFBDifatMgr
from cfbunpack.directory import CFBDirectoryMgr
from cfbunpack.enums import DirType
from cfbunpack.errors import CFBIOError
from cfbunpack.fat import CFBFatMgr
from cfbunpack.header import CFBHeaderMgr
from cfbunpack.minifat import CFBMinifatMgr
from cfbunpack.ministream import CFBMinistreamMgr
from cfbunpack.stream import CFBStreamMgr
from cfbunpack.types import CfbDirEntry, CfbHeader

log = logging.getLogger(__name__)

class CFBReader:
    """
    Compound File Binary (OLE2 structured storage) reader.

    All tables are read when the reader is constructed; unpack() then walks
    the directory tree and writes storages as directories and streams as
    files. The source is borrowed and must stay open (and must not be moved
    by anyone else) until extraction has finished::

        with open('archive.eif', 'rb') as f:
            CFBReader(f).unpack('archive')
    """
    def __init__(
        self,
        source: BinaryIO
    ):
        self.ctx = CFBContext(source)
        self._we_opened_source = False

        self.header_mgr = CFBHeaderMgr(self.ctx)
        self.difat_mgr = CFBDifatMgr(self.ctx)
        self.fat_mgr = CFBFatMgr(self.ctx)
        self.minifat_mgr = CFBMinifatMgr(self.ctx)
        self.directory_mgr = CFBDirectoryMgr(self.ctx)
        self.ministream_mgr = CFBMinistreamMgr(self.ctx)
        self.stream_mgr = CFBStreamMgr(self.ctx)

        ###########################################################################
        # Read binary structure
        ###########################################################################
        self.header_mgr.read()
        self.difat_mgr.read()
        self.fat_mgr.read()
        self.minifat_mgr.read()
        self.directory_mgr.read()
        self.ministream_mgr.read()

    @classmethod
    def open(cls, path: str) -> 'CFBReader':
        try:
            source = open(path, 'rb')
        except OSError as e:
            raise CFBIOError(f'Failed to open file {path}: {e}') from e
        try:
            reader = cls(source)
        except BaseException:
            source.close()
            raise
        reader._we_opened_source = True
        return reader

    def close(self):
        if self._we_opened_source:
            self.ctx.source.close()
            self._we_opened_source = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def header(self) -> CfbHeader:
        return self.ctx.header

    @property
    def directory(self) -> list[CfbDirEntry]:
        return self.ctx.directory

    def walk(self) -> Iterator[tuple[tuple[str, ...], int, CfbDirEntry]]:
        return self.directory_mgr.walk()

    def list_entries(self) -> list[str]:
        return ['/'.join(path) for path, _, entry in self.walk()
                if entry.type in (DirType.STORAGE, DirType.STREAM)]

    def unpack(self, out_dir: str):
        for path, index, entry in self.walk():
            out_path = os.path.join(out_dir, *path)
            if entry.is_storage:
                self._make_dir(out_path)
            elif entry.is_stream:
                self.stream_mgr.extract(entry, out_path)
            else:
                log.debug('Skipping directory entry %d of type %r', index, entry.type)

    def read_stream(self, path: str) -> Optional[bytes]:
        # '/'-separated path relative to the root entry, None if no such stream
        parts = tuple(x for x in path.split('/') if x)
        for entry_path, _, entry in self.walk():
            if entry_path == parts and entry.is_stream:
                return b''.join(self.stream_mgr.iter_stream(entry))
        return None

    @staticmethod
    def _make_dir(path: str):
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise CFBIOError(f'Failed to create directory {path}: {e}') from e
        log.info('Created %s', path)
