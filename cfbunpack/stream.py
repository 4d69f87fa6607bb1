import logging

from cfbunpack.context import CFBContext
from cfbunpack.errors import CFBFormatError, CFBIOError
from cfbunpack.types import CfbDirEntry

log = logging.getLogger(__name__)

class CFBStreamMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def extract(self, entry: CfbDirEntry, out_path: str):
        try:
            f = open(out_path, 'wb')
        except OSError as e:
            raise CFBIOError(f'Failed to create file {out_path}: {e}') from e

        written = 0
        try:
            # Closing flushes the last buffered bytes, so it can fail too
            with f:
                for chunk in self.iter_stream(entry):
                    written += f.write(chunk)
        except CFBIOError:
            raise
        except OSError as e:
            raise CFBIOError(f'Failed to write file {out_path}: {e}') from e

        if written != entry.size_bytes:
            raise CFBIOError(f'Wrote {written} of {entry.size_bytes} bytes to {out_path}.')
        log.info('Extracted %s (%d bytes)', out_path, written)

    def iter_stream(self, entry: CfbDirEntry):
        if entry.size_bytes < self.ctx.header.ministream_cutoff_size:
            return self._iter_ministream(entry)
        return self._iter_fat(entry)

    def _iter_ministream(self, entry: CfbDirEntry):
        chain = self.ctx.iter_chain(entry.sector_start, self.ctx.minifat, 'MiniFAT')
        remaining = entry.size_bytes
        size = self.ctx.minisector_size_bytes
        while remaining > 0:
            minisector = next(chain, None)
            if minisector is None:
                raise CFBFormatError(f'MiniFAT chain ends with {remaining} bytes of the stream outstanding.')
            chunk_size = min(remaining, size)
            offset = minisector * size
            if offset + chunk_size > len(self.ctx.ministream):
                raise CFBFormatError(f'Mini sector {minisector} lies outside the mini stream ({len(self.ctx.ministream)} bytes).')
            yield self.ctx.ministream[offset : offset + chunk_size]
            remaining -= chunk_size

    def _iter_fat(self, entry: CfbDirEntry):
        chain = self.ctx.iter_chain(entry.sector_start, self.ctx.fat, 'FAT')
        remaining = entry.size_bytes
        while remaining > 0:
            sector = next(chain, None)
            if sector is None:
                raise CFBFormatError(f'FAT chain ends with {remaining} bytes of the stream outstanding.')
            chunk_size = min(remaining, self.ctx.sector_size_bytes)
            yield self.ctx.read_sector(sector, chunk_size)
            remaining -= chunk_size
