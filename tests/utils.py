__all__ = [
    'FakeRunner',
    'RecordingRecorder',
    'make_library',
]

from pathlib import Path

from predex.classnames import ClassIndex, JavaLibrary
from predex.recorders import ArtifactRecorder
from predex.targets import BuildTarget


class RecordingRecorder(ArtifactRecorder):

    def __init__(self, calls=None):
        self.calls = [] if calls is None else calls

    def record_artifact(self, path):
        self.calls.append(('record_artifact', path))

    def add_metadata(self, key, value):
        self.calls.append(('add_metadata', key, value))


class FakeRunner:
    """Stand-in for dx: records commands and writes the --output file."""

    def __init__(self, exit_code=0):
        self.exit_code = exit_code
        self.commands = []

    def __call__(self, cmd, cwd):
        self.commands.append(list(cmd))
        if self.exit_code == 0:
            output = Path(cwd) / cmd[cmd.index('--output') + 1]
            output.write_bytes(b'dex\n')
        return self.exit_code


def make_library(class_names, output_path='out/gen/lib/lib.jar'):
    library = JavaLibrary(BuildTarget('lib', 'lib'), output_path)
    library.set_class_index(ClassIndex.from_class_names(class_names))
    return library
