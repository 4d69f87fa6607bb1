from datetime import datetime, timezone
import unittest

from cfbunpack.errors import CFBFormatError
from cfbunpack.util import check_path_segment, decode_entry_name, filetime_to_datetime, get_output_dir

def raw(name: str) -> bytes:
    return name.encode('utf-16-le').ljust(64, b'\x00')

class UtilTests(unittest.TestCase):
    def test_name_length_as_byte_count(self):
        # Typical producers store the byte length including the terminator
        self.assertEqual(decode_entry_name(raw('Root Entry\x00'), 22), 'Root Entry')

    def test_name_length_as_code_units(self):
        self.assertEqual(decode_entry_name(raw('a.txt'), 5), 'a.txt')
        self.assertEqual(decode_entry_name(raw('a.txtJUNK'), 5), 'a.txt')

    def test_name_length_capped(self):
        name = 'x' * 32
        self.assertEqual(decode_entry_name(raw(name), 0xFFFF), name)

    def test_empty_name(self):
        self.assertEqual(decode_entry_name(b'\x00' * 64, 0), '')

    def test_invalid_utf16(self):
        with self.assertRaises(CFBFormatError):
            decode_entry_name(b'\x00\xdc' + b'\x00' * 62, 2)

    def test_check_path_segment(self):
        self.assertEqual(check_path_segment('\x01CompObj'), '\x01CompObj')
        for name in ('', '.', '..', 'a/b', 'a\\b', 'a\x00b'):
            with self.subTest(name=name):
                with self.assertRaises(CFBFormatError):
                    check_path_segment(name)

    def test_filetime(self):
        self.assertIsNone(filetime_to_datetime(0))
        self.assertEqual(filetime_to_datetime(116444736000000000), datetime(1970, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(filetime_to_datetime(132223104000000000), datetime(2020, 1, 1, tzinfo=timezone.utc))

    def test_filetime_out_of_range(self):
        with self.assertRaises(CFBFormatError):
            filetime_to_datetime(0xFFFFFFFFFFFFFFFF)

    def test_get_output_dir(self):
        self.assertEqual(get_output_dir('faces/smile.eif'), 'faces/smile')
        self.assertEqual(get_output_dir('archive.tar.ole'), 'archive.tar')
        self.assertEqual(get_output_dir('noext'), 'noext_extracted')

if __name__ == '__main__':
    unittest.main()
