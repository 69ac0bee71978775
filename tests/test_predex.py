import unittest
import unittest.mock

import argparse
import logging

from startup import Startup

import predex


class ConfigureTest(unittest.TestCase):

    def setUp(self):
        self.defaults = predex.D.copy()

    def tearDown(self):
        predex.D.clear()
        predex.D.update(self.defaults)

    def call_startup(self, argv):
        startup = Startup()
        predex.init(startup)
        startup.set(predex.PARSER, argparse.ArgumentParser())
        startup.set(predex.ARGV, argv)
        with unittest.mock.patch('predex.logging.basicConfig') as basic_config:
            varz = startup.call()
        return varz, basic_config

    def test_defaults(self):
        varz, basic_config = self.call_startup(['prog'])
        args = varz[predex.ARGS]
        self.assertEqual(0, args.verbose)
        self.assertEqual('buck-out/gen', args.gen_dir)
        self.assertEqual('buck-out/bin', args.bin_dir)
        self.assertEqual('dx', args.dx)
        self.assertEqual(self.defaults, predex.D)
        self.assertEqual(
            logging.WARNING, basic_config.call_args[1]['level'])

    def test_arguments(self):
        _, basic_config = self.call_startup([
            'prog', '-vv',
            '--gen-dir', 'out/gen',
            '--bin-dir', 'out/bin',
            '--dx', '/opt/android/dx',
        ])
        self.assertEqual(
            {
                'GEN_DIR': 'out/gen',
                'BIN_DIR': 'out/bin',
                'DX': '/opt/android/dx',
            },
            predex.D,
        )
        self.assertEqual(logging.DEBUG, basic_config.call_args[1]['level'])


if __name__ == '__main__':
    unittest.main()
