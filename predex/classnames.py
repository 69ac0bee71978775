"""Class indexes of compiled Java libraries.

A class index maps every class name of a library to the hash of its
class file, and carries the library's ABI key, which summarizes the
library and its transitive dependencies.  A rule that consumes the
library may key its cache on the ABI key instead of on file contents or
timestamps.
"""

__all__ = [
    'ClassIndex',
    'JavaLibrary',
    'accumulate_class_names',
    'compute_abi_key',
    'read_class_index',
    'write_class_index',
]

import logging
import zipfile
from collections import OrderedDict
from collections.abc import Mapping
from pathlib import Path

from predex import preconds
from predex.hashes import Sha1HashCode


LOG = logging.getLogger(__name__)


CLASS_SUFFIX = '.class'
ABI_SUFFIX = '.abi'


class ClassIndex(Mapping):
    """Immutable mapping from class name to content hash, sorted by
       class name.
    """

    def __init__(self, class_names, abi_key):
        preconds.check_argument(
            isinstance(abi_key, Sha1HashCode), 'expect sha1 abi key: %r',
            abi_key)
        class_names = dict(class_names)
        for name, hash_code in class_names.items():
            preconds.check_argument(
                isinstance(hash_code, Sha1HashCode),
                'expect sha1 hash of %s: %r', name, hash_code)
        self._class_names = OrderedDict(sorted(class_names.items()))
        self._abi_key = abi_key

    @classmethod
    def from_class_names(cls, class_names, deps_abi_keys=()):
        """Make an index whose ABI key is derived from its entries and
           the ABI keys of its dependencies.
        """
        class_names = dict(class_names)
        return cls(class_names, compute_abi_key(class_names, deps_abi_keys))

    @property
    def abi_key(self):
        return self._abi_key

    def __getitem__(self, name):
        return self._class_names[name]

    def __iter__(self):
        return iter(self._class_names)

    def __len__(self):
        return len(self._class_names)

    def __repr__(self):
        return '%s(%r, abi_key=%r)' % (
            self.__class__.__name__, list(self._class_names), self._abi_key)


def compute_abi_key(class_names, deps_abi_keys=()):
    chunks = []
    for name, hash_code in sorted(dict(class_names).items()):
        chunks.append(('%s %s\n' % (name, hash_code)).encode('utf8'))
    # Dependency order does not affect the key.
    for abi_key in sorted(set(deps_abi_keys)):
        chunks.append(('dep %s\n' % abi_key).encode('utf8'))
    return Sha1HashCode.of(*chunks)


def accumulate_class_names(path):
    """Hash every class file of a jar (or zip) file or a directory."""
    path = Path(path)
    if path.is_dir():
        pairs = _iter_dir_classes(path)
    else:
        pairs = _iter_zip_classes(path)
    class_names = {}
    for name, content in pairs:
        class_names[name[:-len(CLASS_SUFFIX)]] = Sha1HashCode.of(content)
    LOG.debug('accumulate %d classes from %s', len(class_names), path)
    return class_names


def _iter_dir_classes(dir_path):
    for path in sorted(dir_path.rglob('*' + CLASS_SUFFIX)):
        if path.is_file():
            yield path.relative_to(dir_path).as_posix(), path.read_bytes()


def _iter_zip_classes(zip_path):
    with zipfile.ZipFile(str(zip_path)) as zip_file:
        for info in zip_file.infolist():
            if info.is_dir() or not info.filename.endswith(CLASS_SUFFIX):
                continue
            yield info.filename, zip_file.read(info)


def write_class_index(index, path):
    """Write index as lines of "<class name> <sha1>" and the ABI key
       to a sidecar file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w') as class_list:
        for name, hash_code in index.items():
            class_list.write('%s %s\n' % (name, hash_code))
    _abi_path(path).write_text('%s\n' % index.abi_key)


def read_class_index(path):
    path = Path(path)
    class_names = {}
    with path.open() as class_list:
        for lineno, line in enumerate(class_list, 1):
            line = line.strip()
            if not line:
                continue
            parts = line.split(' ')
            preconds.check_argument(
                len(parts) == 2, 'malformed line %d of %s: %r',
                lineno, path, line)
            class_names[parts[0]] = Sha1HashCode(parts[1])
    abi_key = Sha1HashCode(_abi_path(path).read_text().strip())
    return ClassIndex(class_names, abi_key)


def _abi_path(path):
    return path.with_name(path.name + ABI_SUFFIX)


class JavaLibrary:
    """Compiled Java library that another rule depends on.

       The output path is known up front, but the class index is only
       known after the library is built; asking for it earlier is a
       programming error of the caller.
    """

    def __init__(self, target, output_path):
        self.target = preconds.check_not_none(target, 'expect target')
        self.output_path = Path(
            preconds.check_not_none(output_path, 'expect output path'))
        self._class_index = None

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self.target)

    @property
    def is_built(self):
        return self._class_index is not None

    @property
    def class_index(self):
        preconds.check_state(
            self.is_built, 'library %s has not been built', self.target)
        return self._class_index

    def set_class_index(self, class_index):
        preconds.check_argument(
            isinstance(class_index, ClassIndex),
            'expect class index: %r', class_index)
        preconds.check_state(
            not self.is_built, 'library %s is built twice', self.target)
        self._class_index = class_index
