import logging

from cfbunpack.constants import *
from cfbunpack.context import CFBContext
from cfbunpack.errors import CFBFormatError
from cfbunpack.types import CfbHeader

log = logging.getLogger(__name__)

class CFBHeaderMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def read(self):
        header = CfbHeader.from_bytes(self.ctx.read_at(0, SIZE_HEADER_BYTES))
        self.validate(header)
        self.ctx.header = header

        log.debug('Version %d.%d, cutoff %d bytes', header.version_major, header.version_minor, header.ministream_cutoff_size)
        log.debug('FAT sectors: %d, first directory sector: %08X', header.sector_count_fat, header.sector_start_directory)
        log.debug('MiniFAT sectors: %d starting at %08X', header.sector_count_minifat, header.sector_start_minifat)
        log.debug('DIFAT sectors: %d starting at %08X', header.sector_count_difat, header.sector_start_difat)
        if header.ministream_cutoff_size != SIZE_MINISTREAM_CUTOFF_BYTES:
            log.warning('Mini stream cutoff is %d bytes instead of %d', header.ministream_cutoff_size, SIZE_MINISTREAM_CUTOFF_BYTES)

    @staticmethod
    def validate(header: CfbHeader):
        if header.header_signature != HEADER_SIGNATURE:
            raise CFBFormatError(f'Invalid signature {header.header_signature.hex()}, not a compound file.')
        if header.byte_order != HEADER_BYTE_ORDER:
            raise CFBFormatError(f'Invalid byte order mark {header.byte_order:04X}.')
        if header.sector_shift != SHIFT_SECTOR_BITS_V3:
            raise CFBFormatError(f'Unsupported sector shift {header.sector_shift}, expected {SHIFT_SECTOR_BITS_V3}.')
        if header.ministream_sector_shift != SHIFT_MINISECTOR_BITS:
            raise CFBFormatError(f'Unsupported mini sector shift {header.ministream_sector_shift}, expected {SHIFT_MINISECTOR_BITS}.')
