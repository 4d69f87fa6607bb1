import logging

from cfbunpack.context import CFBContext

log = logging.getLogger(__name__)

class CFBMinifatMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def read(self):
        data = self.ctx.read_chain(self.ctx.header.sector_start_minifat, 'MiniFAT')
        self.ctx.minifat = self.ctx.unpack_entries(data)
        log.debug('MiniFAT: %d entries', len(self.ctx.minifat))
