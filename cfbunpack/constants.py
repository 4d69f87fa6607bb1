# Header Constants
HEADER_SIGNATURE = bytes.fromhex('D0CF11E0A1B11AE1')   # OLE2 file signature
HEADER_BYTE_ORDER = 0xFFFE                              # Little Endian byte-order mark
HEADER_DIFAT_COUNT = 109                                # The first 109 entries of DIFAT are always in the header

# Record layouts (little endian)
FORMAT_HEADER = '<8s16s6HI9I109I'
FORMAT_DIRECTORY = '<64sHBBIII16sIQQIQ'
FORMAT_SECTOR_ENTRY = '<I'

# Sizes and byte shifts
SHIFT_MINISECTOR_BITS = 0x0006
SHIFT_SECTOR_BITS_V3 = 0x0009
SIZE_DIRECTORY_ENTRY_BYTES = 128
SIZE_DIRECTORY_NAME_CHARS = 32
SIZE_FAT_ENTRY_BYTES = 4
SIZE_HEADER_BYTES = 512
SIZE_MINISECTOR_BYTES = 64
SIZE_MINISTREAM_CUTOFF_BYTES = 4096
SIZE_SECTOR_BYTES_V3 = 512

# Derived counts
FAT_ENTRIES_PER_SECTOR = SIZE_SECTOR_BYTES_V3 // SIZE_FAT_ENTRY_BYTES                 # 128
DIFAT_ENTRIES_PER_SECTOR = FAT_ENTRIES_PER_SECTOR - 1                                 # 127, last slot chains to the next DIFAT sector
DIRECTORY_ENTRIES_PER_SECTOR = SIZE_SECTOR_BYTES_V3 // SIZE_DIRECTORY_ENTRY_BYTES     # 4

# Windows FILETIME epoch (1601-01-01) expressed in 100ns ticks before the Unix epoch
FILETIME_UNIX_EPOCH_TICKS = 116444736000000000
