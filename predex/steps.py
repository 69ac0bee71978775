"""Steps that a rule asks the build to execute.

A rule does not touch the filesystem when it is planned; instead, it
returns a StepSequence, which is executed later, strictly in order, and
halts at the first failed step.
"""

__all__ = [
    'DxOptions',
    'DxStep',
    'ExecutionContext',
    'FilesystemError',
    'MkdirStep',
    'RecordArtifactAndMetadataStep',
    'RmStep',
    'Step',
    'StepFailedException',
    'StepSequence',
    'ToolInvocationError',
    'execute_step',
]

import enum
import logging
import shlex
import shutil
import subprocess
from pathlib import Path

import predex
from predex import preconds


LOG = logging.getLogger(__name__)


class StepFailedException(Exception):

    def __init__(self, step, exit_code, message=None):
        super().__init__(message or '%s failed with exit code %d' % (
            step.describe(), exit_code))
        self.step = step
        self.exit_code = exit_code


class FilesystemError(StepFailedException):
    pass


class ToolInvocationError(StepFailedException):
    pass


def run_command(cmd, cwd):
    """Run a command and return its exit status."""
    LOG.debug('execute: cwd=%s %s', cwd, ' '.join(map(shlex.quote, cmd)))
    return subprocess.run(cmd, cwd=str(cwd)).returncode


class ExecutionContext:
    """What steps may act on: the project root that relative paths are
       resolved against, the recorder of artifacts and metadata, and the
       runner of external tools.
    """

    def __init__(self, project_root, recorder, *, dx=None, runner=None):
        self.project_root = Path(
            preconds.check_not_none(project_root, 'expect project root'))
        self.recorder = preconds.check_not_none(recorder, 'expect recorder')
        self.dx = dx or predex.D['DX']
        self._runner = runner or run_command

    def resolve(self, path):
        return self.project_root / path

    def run_command(self, cmd):
        return self._runner(cmd, self.project_root)


class Step:

    name = None

    def describe(self):
        return self.name

    def execute(self, context):
        """Execute this step and return an exit code (0 is success)."""
        raise NotImplementedError

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self.describe())


class RmStep(Step):

    name = 'rm'

    def __init__(self, path, force=True):
        self.path = Path(path)
        self.force = force

    def describe(self):
        return 'rm %s%s' % ('-rf ' if self.force else '', self.path)

    def execute(self, context):
        path = context.resolve(self.path)
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(str(path))
            else:
                path.unlink()
        except FileNotFoundError:
            if not self.force:
                raise FilesystemError(self, 1, 'no such file: %s' % path)
        except OSError as exc:
            raise FilesystemError(self, 1, 'cannot remove %s: %s' % (
                path, exc)) from exc
        return 0


class MkdirStep(Step):

    name = 'mkdir'

    def __init__(self, path):
        self.path = Path(path)

    def describe(self):
        return 'mkdir -p %s' % self.path

    def execute(self, context):
        path = context.resolve(self.path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(self, 1, 'cannot make directory %s: %s' % (
                path, exc)) from exc
        return 0


class DxOptions(enum.Enum):
    NO_OPTIMIZE = '--no-optimize'
    FORCE_JUMBO = '--force-jumbo'


class DxStep(Step):

    name = 'dx'

    def __init__(self, output_path, inputs, options=()):
        self.output_path = Path(output_path)
        self.inputs = tuple(Path(path) for path in inputs)
        preconds.check_argument(self.inputs, 'expect dx inputs')
        self.options = frozenset(options)

    def make_command(self, dx):
        cmd = [dx, '--dex']
        # Keep command lines stable across runs.
        for option in sorted(self.options, key=lambda o: o.value):
            cmd.append(option.value)
        cmd.extend(['--output', str(self.output_path)])
        cmd.extend(map(str, self.inputs))
        return cmd

    def describe(self):
        return ' '.join(map(shlex.quote, self.make_command('dx')))

    def execute(self, context):
        cmd = self.make_command(context.dx)
        try:
            exit_code = context.run_command(cmd)
        except OSError as exc:
            raise ToolInvocationError(self, 1, 'cannot run %s: %s' % (
                cmd[0], exc)) from exc
        if exit_code != 0:
            raise ToolInvocationError(self, exit_code)
        return 0


class RecordArtifactAndMetadataStep(Step):

    def __init__(self, name, artifacts, metadata):
        self.name = name
        self.artifacts = tuple(Path(path) for path in artifacts)
        self.metadata = tuple(metadata)

    def execute(self, context):
        for path in self.artifacts:
            context.recorder.record_artifact(path)
        for key, value in self.metadata:
            context.recorder.add_metadata(key, value)
        return 0


class StepSequence:
    """Immutable, ordered list of steps."""

    def __init__(self, steps):
        self._steps = tuple(steps)
        for step in self._steps:
            preconds.check_argument(
                isinstance(step, Step), 'expect step: %r', step)

    def __iter__(self):
        return iter(self._steps)

    def __len__(self):
        return len(self._steps)

    def __getitem__(self, index):
        return self._steps[index]

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, list(self._steps))

    def names(self):
        return [step.name for step in self._steps]

    def execute(self, context, before_step=None):
        for step in self._steps:
            if before_step:
                before_step(step)
            execute_step(step, context)


def execute_step(step, context):
    LOG.info('%s', step.describe())
    exit_code = step.execute(context)
    if exit_code != 0:
        raise StepFailedException(step, exit_code)
