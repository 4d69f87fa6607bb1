from enum import IntEnum

class DirType(IntEnum):
    """Object type byte of a directory entry."""
    UNKNOWN = 0x00      # Unallocated or unknown
    STORAGE = 0x01
    STREAM = 0x02
    LOCKBYTES = 0x03    # Obsolete, never extracted
    PROPERTY = 0x04     # Obsolete, never extracted
    ROOTSTORAGE = 0x05

    @classmethod
    def _missing_(cls, value):
        # Garbage type bytes decode as UNKNOWN so the walker can skip them
        return cls.UNKNOWN

class DirColor(IntEnum):
    RED = 0x0
    BLACK = 0x1

    @classmethod
    def _missing_(cls, value):
        # The color is not used for traversal; anything but red counts as black
        return cls.BLACK

class Sector(IntEnum):
    MAXREGSECT = 0xFFFFFFFA # Maximum regular sector number
    DIFSECT = 0xFFFFFFFC    # Double Indirect FAT Sector
    FATSECT = 0xFFFFFFFD    # File Allocation Table Sector
    ENDOFCHAIN = 0xFFFFFFFE # End of Sector Chain
    FREESECT = 0xFFFFFFFF   # Free/Unallocated Sector
    NOSTREAM = 0xFFFFFFFF   # No Stream

    @staticmethod
    def is_regular(sector: int) -> bool:
        return 0 <= sector <= Sector.MAXREGSECT
