"""SHA-1 hash codes used as cache keys."""

__all__ = [
    'EMPTY_SHA1',
    'Sha1HashCode',
]

import hashlib
import re

from predex import preconds


PATTERN_SHA1 = re.compile(r'[a-f0-9]{40}')


class Sha1HashCode:

    __slots__ = ('_hash',)

    @classmethod
    def of(cls, *chunks):
        hasher = hashlib.sha1()
        for chunk in chunks:
            hasher.update(chunk)
        return cls(hasher.hexdigest())

    def __init__(self, hash):
        preconds.check_argument(
            isinstance(hash, str) and PATTERN_SHA1.fullmatch(hash),
            'not a sha1 hash: %r', hash)
        self._hash = hash

    @property
    def hash(self):
        return self._hash

    def __str__(self):
        return self._hash

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._hash)

    def __eq__(self, other):
        if not isinstance(other, Sha1HashCode):
            return NotImplemented
        return self._hash == other._hash

    def __hash__(self):
        return hash(self._hash)

    def __lt__(self, other):
        if not isinstance(other, Sha1HashCode):
            return NotImplemented
        return self._hash < other._hash


EMPTY_SHA1 = Sha1HashCode.of()
