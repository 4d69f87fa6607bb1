from datetime import datetime, timedelta, timezone
import os
from typing import Optional

from cfbunpack.constants import FILETIME_UNIX_EPOCH_TICKS, SIZE_DIRECTORY_NAME_CHARS
from cfbunpack.errors import CFBFormatError

def decode_entry_name(raw_name: bytes, name_len: int) -> str:
    # The length field is read as UTF-16 code units. Producers that store a byte
    # count including the terminator still decode correctly because the buffer
    # is cut at the first null code unit.
    units = min(name_len, SIZE_DIRECTORY_NAME_CHARS)
    try:
        name = raw_name[:units * 2].decode('utf-16-le')
    except UnicodeDecodeError as e:
        raise CFBFormatError(f'Directory entry name is not valid UTF-16: {raw_name[:units * 2]!r}') from e
    return name.split('\x00', 1)[0]

def check_path_segment(name: str) -> str:
    """
    Ensure a decoded entry name can be used as a single path component,
    so a crafted container cannot write outside the output directory.
    """
    if name in ('', '.', '..'):
        raise CFBFormatError(f'Directory entry name {name!r} cannot be used as a path.')
    for sep in ('/', '\\', '\x00'):
        if sep in name:
            raise CFBFormatError(f'Directory entry name {name!r} contains {sep!r}.')
    return name

def filetime_to_datetime(filetime: int) -> Optional[datetime]:
    if filetime == 0:
        return None
    ticks = filetime - FILETIME_UNIX_EPOCH_TICKS
    try:
        return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(microseconds=ticks // 10)
    except OverflowError as e:
        raise CFBFormatError(f'Timestamp {filetime:016X} is outside the supported date range.') from e

def get_output_dir(input_path: str) -> str:
    # 'archive.eif' -> 'archive'; a path without extension gets a suffix so it
    # does not collide with the input file itself
    root, ext = os.path.splitext(input_path)
    if not ext:
        return f'{root}_extracted'
    return root
