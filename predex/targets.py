"""Build targets, the unique names of rules in the build graph."""

__all__ = [
    'BuildTarget',
]

from collections import namedtuple

from predex import preconds


class BuildTarget(namedtuple('BuildTarget', 'base_path short_name')):
    """A build target is written as "//base/path:short_name".

       The base path is relative to the project root; it is empty for
       targets defined at the root.
    """

    __slots__ = ()

    def __new__(cls, base_path, short_name):
        preconds.check_not_none(base_path, 'expect base path')
        preconds.check_not_none(short_name, 'expect short name')
        preconds.check_argument(
            isinstance(base_path, str) and isinstance(short_name, str),
            'expect str parts: %r, %r', base_path, short_name)
        preconds.check_argument(
            not base_path.startswith('/'),
            'base path must be relative: %r', base_path)
        preconds.check_argument(
            not base_path.endswith('/'),
            'base path must not end with slash: %r', base_path)
        preconds.check_argument(
            short_name and '/' not in short_name and ':' not in short_name,
            'invalid short name: %r', short_name)
        return super().__new__(cls, base_path, short_name)

    @classmethod
    def parse(cls, full_name):
        preconds.check_argument(
            full_name.startswith('//') and ':' in full_name,
            'expect "//base/path:name", not %r', full_name)
        base_path, short_name = full_name[2:].rsplit(':', 1)
        return cls(base_path, short_name)

    @property
    def full_name(self):
        return '//%s:%s' % (self.base_path, self.short_name)

    def __str__(self):
        return self.full_name
