import logging

from cfbunpack.context import CFBContext

log = logging.getLogger(__name__)

class CFBMinistreamMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def read(self):
        root = self.ctx.directory[0]
        self.ctx.ministream = self.ctx.read_chain(root.sector_start, 'Mini stream')
        log.debug('Mini stream: %d bytes (root entry declares %d)', len(self.ctx.ministream), root.size_bytes)
