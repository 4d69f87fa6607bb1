import logging

from cfbunpack.context import CFBContext
from cfbunpack.errors import CFBFormatError

log = logging.getLogger(__name__)

class CFBFatMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def read(self):
        sector_count = self.ctx.header.sector_count_fat
        if len(self.ctx.difat) < sector_count:
            raise CFBFormatError(f'DIFAT lists {len(self.ctx.difat)} sectors but the header declares {sector_count} FAT sectors.')

        fat: list[int] = []
        for x in range(sector_count):
            fat.extend(self.ctx.unpack_entries(self.ctx.read_sector(self.ctx.difat[x])))
        self.ctx.fat = fat
        log.debug('FAT: %d sectors, %d entries', sector_count, len(fat))
