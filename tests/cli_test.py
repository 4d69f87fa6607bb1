import contextlib
import io
import os
import tempfile
import unittest

from cfbunpack.__main__ import main
from cfb_builder import CFBBuilder

class CLITests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        builder = CFBBuilder()
        docs = builder.add_storage('Docs')
        builder.add_stream('a.txt', b'HelloWorld', parent=docs)
        self.good = self.write('good.eif', builder.build())
        self.bad = self.write('bad.eif', b'not a compound file' * 40)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name: str, data: bytes) -> str:
        path = os.path.join(self._tmp.name, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def test_extract_next_to_input(self):
        self.assertEqual(main(['-q', self.good]), 0)
        with open(os.path.join(self._tmp.name, 'good', 'Docs', 'a.txt'), 'rb') as f:
            self.assertEqual(f.read(), b'HelloWorld')

    def test_output_option(self):
        out_dir = os.path.join(self._tmp.name, 'elsewhere')
        self.assertEqual(main(['-q', '-o', out_dir, self.good]), 0)
        self.assertTrue(os.path.isfile(os.path.join(out_dir, 'Docs', 'a.txt')))

    def test_output_option_needs_single_input(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main(['-o', 'x', self.good, self.good])
        self.assertEqual(cm.exception.code, 2)

    def test_errors_do_not_stop_batch(self):
        missing = os.path.join(self._tmp.name, 'missing.eif')
        with self.assertLogs('cfbunpack', 'WARNING') as logs:
            status = main([missing, self.bad, self.good])
        self.assertEqual(status, 1)
        self.assertTrue(os.path.isfile(os.path.join(self._tmp.name, 'good', 'Docs', 'a.txt')))
        self.assertFalse(os.path.exists(os.path.join(self._tmp.name, 'bad')))
        self.assertEqual(len(logs.records), 2)

    def test_list(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertEqual(main(['-q', '--list', self.good]), 0)
        self.assertEqual(out.getvalue().splitlines(), [f'{self.good}: Docs', f'{self.good}: Docs/a.txt'])
        self.assertFalse(os.path.exists(os.path.join(self._tmp.name, 'good')))

    def test_no_arguments(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main([])
        self.assertEqual(cm.exception.code, 2)

if __name__ == '__main__':
    unittest.main()
