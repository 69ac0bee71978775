import unittest

from predex import preconds
from predex.preconds import IllegalArgumentException
from predex.preconds import IllegalStateException
from predex.preconds import PreconditionViolation


class PrecondsTest(unittest.TestCase):

    def test_preconds(self):
        for exc, check in (
                (IllegalArgumentException, preconds.check_argument),
                (IllegalStateException, preconds.check_state)):
            with self.assertRaisesRegex(exc, r'^$', msg=check.__name__):
                check(False)
            with self.assertRaisesRegex(exc, r'^Message$', msg=check.__name__):
                check(False, 'Message')
            with self.assertRaisesRegex(exc, r'^X Y$', msg=check.__name__):
                check(False, 'X %s', 'Y')

        preconds.check_argument(True)
        preconds.check_argument(True, 'Message')
        preconds.check_argument(True, 'Message: %s', 'Hello world')

        preconds.check_state(True)
        preconds.check_state(True, 'Message')
        preconds.check_state(True, 'Message: %s', 'Hello world')

    def test_check_not_none(self):
        value = object()
        self.assertIs(value, preconds.check_not_none(value))
        self.assertEqual(0, preconds.check_not_none(0))
        with self.assertRaisesRegex(IllegalArgumentException, r'^expect x$'):
            preconds.check_not_none(None, 'expect %s', 'x')

    def test_taxonomy(self):
        self.assertTrue(
            issubclass(IllegalArgumentException, PreconditionViolation))
        self.assertTrue(
            issubclass(IllegalStateException, PreconditionViolation))


if __name__ == '__main__':
    unittest.main()
