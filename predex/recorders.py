"""Recorders of artifacts and metadata that rules produce.

Metadata of a rule are persisted under the rule's own directory in the
bin root so that the next build may read them back and decide whether
it has work to do.
"""

__all__ = [
    'ArtifactRecorder',
    'BuildInfoRecorder',
    'OnDiskBuildInfo',
]

import logging
from collections import OrderedDict
from pathlib import Path

import predex
from predex import preconds
from predex import yaml
from predex.hashes import Sha1HashCode


LOG = logging.getLogger(__name__)


METADATA_FILENAME = 'metadata.yaml'


def get_metadata_path(target, bin_dir=None):
    bin_dir = Path(bin_dir or predex.D['BIN_DIR'])
    return bin_dir / target.base_path / ('.' + target.short_name) / \
        METADATA_FILENAME


class ArtifactRecorder:

    def record_artifact(self, path):
        raise NotImplementedError

    def add_metadata(self, key, value):
        raise NotImplementedError


class BuildInfoRecorder(ArtifactRecorder):

    def __init__(self, target, bin_dir=None):
        self.target = preconds.check_not_none(target, 'expect target')
        self.metadata_path = get_metadata_path(target, bin_dir)
        self._artifacts = OrderedDict()
        self._metadata = OrderedDict()

    @property
    def artifacts(self):
        return list(self._artifacts)

    @property
    def metadata(self):
        return OrderedDict(self._metadata)

    def record_artifact(self, path):
        path = Path(preconds.check_not_none(path, 'expect artifact path'))
        LOG.debug('%s: record artifact: %s', self.target, path)
        self._artifacts[path] = None

    def add_metadata(self, key, value):
        preconds.check_argument(key, 'expect metadata key')
        value = preconds.check_not_none(value, 'expect value of %s', key)
        LOG.debug('%s: add metadata: %s=%s', self.target, key, value)
        self._metadata[key] = str(value)

    def write_metadata_to_disk(self, project_root):
        path = Path(project_root) / self.metadata_path
        path.parent.mkdir(parents=True, exist_ok=True)
        document = OrderedDict([
            ('target', self.target.full_name),
            ('artifacts', self.artifacts),
            ('metadata', self.metadata),
        ])
        with path.open('w') as output:
            yaml.dump(document, output)
        LOG.info('%s: write metadata to %s', self.target, path)
        return path


class OnDiskBuildInfo:
    """Metadata recorded by a previous build, if any."""

    def __init__(self, target, project_root, bin_dir=None):
        self.target = preconds.check_not_none(target, 'expect target')
        path = Path(project_root) / get_metadata_path(target, bin_dir)
        if path.exists():
            with path.open() as input_:
                document = yaml.load(input_) or {}
        else:
            LOG.debug('%s: no metadata at %s', target, path)
            document = {}
        self._artifacts = [Path(p) for p in document.get('artifacts') or ()]
        self._metadata = dict(document.get('metadata') or {})

    @property
    def artifacts(self):
        return list(self._artifacts)

    def get_value(self, key):
        return self._metadata.get(key)

    def get_hash(self, key):
        value = self.get_value(key)
        if value is None:
            return None
        return Sha1HashCode(value)
