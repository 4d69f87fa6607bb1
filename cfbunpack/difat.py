import logging

from cfbunpack.constants import HEADER_DIFAT_COUNT
from cfbunpack.context import CFBContext
from cfbunpack.enums import Sector
from cfbunpack.errors import CFBFormatError

log = logging.getLogger(__name__)

class CFBDifatMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def read(self):
        header = self.ctx.header
        self.ctx.difat = list(header.sector_data_difat[:HEADER_DIFAT_COUNT])
        if header.sector_count_difat == 0:
            return

        visited = set()
        sector = header.sector_start_difat
        while sector != Sector.ENDOFCHAIN:
            if sector == Sector.FREESECT:
                log.warning('DIFAT chain terminated by FREESECT instead of ENDOFCHAIN')
                break
            if sector in visited:
                raise CFBFormatError(f'DIFAT chain loops back to sector {sector:08X}.')
            visited.add(sector)

            # 127 FAT sector numbers followed by the next DIFAT sector
            entries = self.ctx.unpack_entries(self.ctx.read_sector(sector))
            self.ctx.difat.extend(entries[:self.ctx.difat_entries_per_sector])
            sector = entries[self.ctx.difat_entries_per_sector]

        if len(visited) != header.sector_count_difat:
            log.warning('Header declares %d DIFAT sectors, chain has %d', header.sector_count_difat, len(visited))
