import struct
from typing import BinaryIO, Iterator, Optional

from cfbunpack.constants import *
from cfbunpack.enums import Sector
from cfbunpack.errors import CFBFormatError, CFBIOError
from cfbunpack.types import CfbDirEntry, CfbHeader

class CFBContext:
    """
    Shared state of one decoded container.

    The managers fill the tables in order (header, DIFAT, FAT, MiniFAT,
    directory, mini stream); afterwards everything here is read-only. The
    source is borrowed: the context reads from it but never closes it.
    """
    def __init__(
        self,
        source: BinaryIO
    ):
        self.source = source

        # Calculate sector sizes
        self.sector_size_bytes = 2**(SHIFT_SECTOR_BITS_V3)
        self.minisector_size_bytes = 2**(SHIFT_MINISECTOR_BITS)
        self.fat_entries_per_sector = self.sector_size_bytes // SIZE_FAT_ENTRY_BYTES
        self.difat_entries_per_sector = (self.sector_size_bytes // SIZE_FAT_ENTRY_BYTES) - 1

        self.header: Optional[CfbHeader] = None
        self.difat: list[int] = []
        self.fat: list[int] = []
        self.minifat: list[int] = []
        self.directory: list[CfbDirEntry] = []
        self.ministream = b''

    def get_sector_offset(self, sector_number: int) -> int:
        # The header occupies the slot before sector 0
        return (sector_number + 1) * self.sector_size_bytes

    def read_at(self, offset: int, size: int) -> bytes:
        """
        Read exactly size bytes at offset. Running out of data is a format
        error; the source itself failing is an I/O error.
        """
        try:
            self.source.seek(offset)
            data = self.source.read(size)
        except OSError as e:
            raise CFBIOError(f'Failed to read {size} bytes at offset {offset}: {e}') from e
        if data is None or len(data) != size:
            got = 0 if data is None else len(data)
            raise CFBFormatError(f'Unexpected end of file reading {size} bytes at offset {offset} (got {got}).')
        return data

    def read_sector(self, sector_number: int, size: Optional[int] = None) -> bytes:
        if not Sector.is_regular(sector_number):
            raise CFBFormatError(f'Sector {sector_number:08X} is not a regular sector.')
        if size is None:
            size = self.sector_size_bytes
        return self.read_at(self.get_sector_offset(sector_number), size)

    @staticmethod
    def unpack_entries(data: bytes) -> list[int]:
        # Sector contents read as a run of 32-bit FAT/MiniFAT/DIFAT entries
        return [x for (x,) in struct.iter_unpack(FORMAT_SECTOR_ENTRY, data)]

    def iter_chain(self, start: int, table: list[int], name: str = 'FAT') -> Iterator[int]:
        """
        Lazily yield the sector numbers of the chain beginning at start,
        following table until ENDOFCHAIN. The next entry is only looked up
        when the consumer asks for it.
        """
        visited = set()
        sector = start
        while sector != Sector.ENDOFCHAIN:
            if sector >= len(table):
                raise CFBFormatError(f'{name} chain from {start:08X} reaches sector {sector:08X} outside the table ({len(table)} entries).')
            if sector in visited:
                raise CFBFormatError(f'{name} chain from {start:08X} loops back to sector {sector:08X}.')
            visited.add(sector)
            yield sector
            sector = table[sector]

    def read_chain(self, start: int, name: str = 'FAT') -> bytes:
        # Whole sectors of a main FAT chain, concatenated
        if start in (Sector.ENDOFCHAIN, Sector.FREESECT):
            return b''
        return b''.join(self.read_sector(x) for x in self.iter_chain(start, self.fat, name))
