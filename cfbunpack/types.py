from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import struct
import uuid

from cfbunpack.constants import *
from cfbunpack.enums import DirColor, DirType, Sector
from cfbunpack.errors import CFBFormatError
from cfbunpack.util import decode_entry_name, filetime_to_datetime

@dataclass
class CfbHeader:
    header_signature: bytes             # 8 byte
    header_clsid: bytes                 # 16 byte
    version_minor: int                  # 2 byte, 0x003E if major version is 0x0003 or 0x0004
    version_major: int                  # 2 byte, 0x0003 or 0x0004
    byte_order: int                     # 2 byte
    sector_shift: int                   # 2 byte
    ministream_sector_shift: int        # 2 byte
    # reserved - 6 byte
    sector_count_directory: int         # 4 byte, always 0 in v3.
    sector_count_fat: int               # 4 byte
    sector_start_directory: int         # 4 byte
    transaction_signature_number: int   # 4 byte
    ministream_cutoff_size: int         # 4 byte
    sector_start_minifat: int           # 4 byte
    sector_count_minifat: int           # 4 byte
    sector_start_difat: int             # 4 byte
    sector_count_difat: int             # 4 byte
    sector_data_difat: list[int] = field(repr=False) # 4 byte x 109 in header, extendable via other sectors

    @classmethod
    def from_bytes(cls, data: bytes) -> 'CfbHeader':
        if len(data) != SIZE_HEADER_BYTES:
            raise CFBFormatError(f'Header must be {SIZE_HEADER_BYTES} bytes, got {len(data)}.')
        fields = struct.unpack(FORMAT_HEADER, data)
        (signature, clsid, minor, major, byte_order, sector_shift, mini_shift, _reserved0, _reserved1,
         dir_count, fat_count, dir_start, transaction, cutoff,
         minifat_start, minifat_count, difat_start, difat_count) = fields[:18]
        return cls(
            header_signature=signature,
            header_clsid=clsid,
            version_minor=minor,
            version_major=major,
            byte_order=byte_order,
            sector_shift=sector_shift,
            ministream_sector_shift=mini_shift,
            sector_count_directory=dir_count,
            sector_count_fat=fat_count,
            sector_start_directory=dir_start,
            transaction_signature_number=transaction,
            ministream_cutoff_size=cutoff,
            sector_start_minifat=minifat_start,
            sector_count_minifat=minifat_count,
            sector_start_difat=difat_start,
            sector_count_difat=difat_count,
            sector_data_difat=list(fields[18:])
        )

@dataclass
class CfbDirEntry:
    raw_name: bytes                     # 64 byte, UTF-16 LE, not necessarily null terminated
    name_len: int                       # 2 byte
    type: DirType                       # 1 byte
    color: DirColor                     # 1 byte, red/black flag; not used for traversal
    sibling_id_left: Optional[int]      # 4 byte, None when NOSTREAM
    sibling_id_right: Optional[int]     # 4 byte, None when NOSTREAM
    child_id: Optional[int]             # 4 byte, None when NOSTREAM
    clsid: uuid.UUID                    # 16 byte
    state: int                          # 4 byte
    time_created: int                   # 8 byte, Windows FILETIME in UTC
    time_modified: int                  # 8 byte, Windows FILETIME in UTC
    sector_start: int                   # 4 byte
    size_bytes: int                     # 8 byte

    @classmethod
    def from_bytes(cls, data: bytes) -> 'CfbDirEntry':
        (raw_name, name_len, object_type, color, left, right, child, clsid,
         state, created, modified, sector_start, size_bytes) = struct.unpack(FORMAT_DIRECTORY, data)

        return cls(
            raw_name=raw_name,
            name_len=name_len,
            type=DirType(object_type),
            color=DirColor(color),
            sibling_id_left=_optional_stream_id(left),
            sibling_id_right=_optional_stream_id(right),
            child_id=_optional_stream_id(child),
            clsid=uuid.UUID(bytes_le=clsid),
            state=state,
            time_created=created,
            time_modified=modified,
            sector_start=sector_start,
            size_bytes=size_bytes
        )

    @property
    def name(self) -> str:
        return decode_entry_name(self.raw_name, self.name_len)

    @property
    def is_storage(self) -> bool:
        return self.type in (DirType.STORAGE, DirType.ROOTSTORAGE)

    @property
    def is_stream(self) -> bool:
        return self.type == DirType.STREAM

    @property
    def created(self) -> Optional[datetime]:
        return filetime_to_datetime(self.time_created)

    @property
    def modified(self) -> Optional[datetime]:
        return filetime_to_datetime(self.time_modified)

def _optional_stream_id(value: int) -> Optional[int]:
    return None if value == Sector.NOSTREAM else value
