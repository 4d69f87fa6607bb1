import argparse
import logging
import sys

from cfbunpack.cfbutility import CFBReader
from cfbunpack.errors import CFBError
from cfbunpack.util import get_output_dir

log = logging.getLogger('cfbunpack')

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cfbunpack',
        description='Extract the storages and streams of Compound File Binary (OLE2) containers.'
    )
    parser.add_argument('files', nargs='+', metavar='FILE', help='container(s) to extract')
    parser.add_argument('-o', '--output', help='output directory (single input only, default: input name without extension)')
    parser.add_argument('-l', '--list', action='store_true', help='list entries instead of extracting')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='count', default=0, help='more output (repeat for debug)')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='only report errors')
    return parser

def process_file(path: str, out_dir: str, list_only: bool) -> bool:
    try:
        f = open(path, 'rb')
    except OSError as e:
        log.warning('Failed to open file %s: %s', path, e)
        return False

    with f:
        try:
            reader = CFBReader(f)
            if list_only:
                for name in reader.list_entries():
                    print(f'{path}: {name}')
            else:
                reader.unpack(out_dir)
        except (CFBError, OSError) as e:
            log.error('%s: %s', path, e)
            return False
    return True

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.output and len(args.files) > 1:
        parser.error('--output can only be used with a single input file')

    if args.quiet:
        level = logging.ERROR
    elif args.verbose > 1:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    ok = True
    for path in args.files:
        out_dir = args.output or get_output_dir(path)
        ok = process_file(path, out_dir, args.list) and ok
    return 0 if ok else 1

if __name__ == '__main__':
    sys.exit(main())
