from cfbunpack.cfbutility import CFBReader
from cfbunpack.enums import DirType, Sector
from cfbunpack.errors import CFBError, CFBFormatError, CFBIOError
from cfbunpack.types import CfbDirEntry, CfbHeader

__version__ = '0.1.0'
