import logging
from typing import Iterator

from cfbunpack.constants import *
from cfbunpack.context import CFBContext
from cfbunpack.enums import DirType
from cfbunpack.errors import CFBFormatError
from cfbunpack.types import CfbDirEntry
from cfbunpack.util import check_path_segment

log = logging.getLogger(__name__)

class CFBDirectoryMgr:
    def __init__(
        self,
        ctx: CFBContext
    ):
        self.ctx = ctx

    def read(self):
        data = self.ctx.read_chain(self.ctx.header.sector_start_directory, 'Directory')
        self.ctx.directory = [
            CfbDirEntry.from_bytes(data[offset : offset + SIZE_DIRECTORY_ENTRY_BYTES])
            for offset in range(0, len(data), SIZE_DIRECTORY_ENTRY_BYTES)
        ]

        if not self.ctx.directory:
            raise CFBFormatError('Directory is empty, no root entry.')
        if self.ctx.directory[0].type != DirType.ROOTSTORAGE:
            raise CFBFormatError(f'Directory entry 0 has type {self.ctx.directory[0].type!r}, expected root storage.')
        log.debug('Directory: %d entries', len(self.ctx.directory))

    def get_entry(self, index: int) -> CfbDirEntry:
        if not 0 <= index < len(self.ctx.directory):
            raise CFBFormatError(f'Directory index {index} out of range ({len(self.ctx.directory)} entries).')
        return self.ctx.directory[index]

    def walk(self) -> Iterator[tuple[tuple[str, ...], int, CfbDirEntry]]:
        """
        Yield (path, index, entry) for every entry reachable from the root.

        The path is a tuple of names relative to the root entry, which itself
        is yielded first with an empty path. For each node the order is: the
        node, its child subtree (under the node's path), then its left and
        right sibling subtrees (under the parent's path). Entries of other
        types are yielded with the parent's path and never descended into.
        """
        visited = set()
        stack: list[tuple[int, tuple[str, ...]]] = [(0, ())]
        while stack:
            index, parent_path = stack.pop()
            if index in visited:
                raise CFBFormatError(f'Directory entry {index} is reachable more than once, tree is cyclic.')
            visited.add(index)

            entry = self.get_entry(index)
            if entry.type in (DirType.STORAGE, DirType.STREAM):
                path = parent_path + (check_path_segment(entry.name),)
            else:
                path = parent_path

            yield path, index, entry

            # Pushed in reverse so the child subtree is visited first
            if entry.sibling_id_right is not None:
                stack.append((entry.sibling_id_right, parent_path))
            if entry.sibling_id_left is not None:
                stack.append((entry.sibling_id_left, parent_path))
            if entry.is_storage and entry.child_id is not None:
                stack.append((entry.child_id, path))
