"""Rule that dexes a Java library if the library contains class files.

This rule takes a Java library (together with its class index) and runs
dx on the library's output if and only if the class index is not empty.
Because the output is expected to be merged into a final classes.dex
(pre-dexing), dx is always run with --force-jumbo.

Most rules know the (possibly absent) path of their output from their
definition.  This rule does not: whether it writes a .dex file is only
known after the library is built, and since there is no such thing as
an empty .dex file, no meaningful placeholder can be written when there
are no class files to dex.
"""

__all__ = [
    'ABI_KEY_FOR_DEPS_ON_DISK_METADATA',
    'ABI_KEY_ON_DISK_METADATA',
    'NO_OUTPUT',
    'DexProducedFromJavaLibrary',
    'States',
    'is_abi_key_unchanged',
]

import enum
import logging
from pathlib import Path

import predex
from predex import preconds
from predex.steps import (
    DxOptions,
    DxStep,
    MkdirStep,
    RecordArtifactAndMetadataStep,
    RmStep,
    StepSequence,
)


LOG = logging.getLogger(__name__)


ABI_KEY_FOR_DEPS_ON_DISK_METADATA = 'ABI_KEY_FOR_DEPS'
ABI_KEY_ON_DISK_METADATA = 'ABI_KEY'


DEX_JAR_SUFFIX = '.dex.jar'


class Output(enum.Enum):
    NO_OUTPUT = None

    def __bool__(self):
        return False


NO_OUTPUT = Output.NO_OUTPUT


class States(enum.Enum):
    UNPLANNED = 'unplanned'
    PLANNED = 'planned'
    EXECUTING = 'executing'
    SUCCEEDED_WITH_ARTIFACT = 'succeeded-with-artifact'
    SUCCEEDED_WITHOUT_ARTIFACT = 'succeeded-without-artifact'
    METADATA_RECORDED = 'metadata-recorded'
    FAILED = 'failed'


class DexProducedFromJavaLibrary:

    def __init__(self, target, library, gen_dir=None):
        self.target = preconds.check_not_none(target, 'expect build target')
        self.library = preconds.check_not_none(library, 'expect java library')
        self.gen_dir = Path(gen_dir or predex.D['GEN_DIR'])
        self.state = States.UNPLANNED
        self._steps = None
        self._succeeded_state = None

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self.target)

    def get_inputs_to_compare_to_output(self):
        # The ABI key of the library already covers every input.
        return ()

    def path_to_dex(self):
        return (
            self.gen_dir / self.target.base_path /
            (self.target.short_name + DEX_JAR_SUFFIX)
        )

    def has_output(self):
        """True if the library has class files to dex.

           Call this only after the library is built.
        """
        return len(self.library.class_index) > 0

    def path_to_output(self):
        if self.has_output():
            return self.path_to_dex()
        else:
            return NO_OUTPUT

    def get_abi_key_for_deps(self):
        return self.library.class_index.abi_key

    def plan_steps(self, context=None):
        preconds.check_state(
            self.state is States.UNPLANNED,
            '%s is already planned: %s', self.target, self.state)

        path_to_dex = self.path_to_dex()
        steps = [
            RmStep(path_to_dex, force=True),
            MkdirStep(path_to_dex.parent),
        ]

        has_classes_to_dx = self.has_output()
        if has_classes_to_dx:
            # Use --force-jumbo so that this can be merged into a final
            # classes.dex that uses jumbo instructions.
            steps.append(DxStep(
                path_to_dex,
                [self.library.output_path],
                [DxOptions.NO_OPTIMIZE, DxOptions.FORCE_JUMBO],
            ))

        # The ABI key of the deps is also the ABI key of this rule,
        # whether or not dx runs.  A dx-merge step compares it with the
        # ABI keys it has dexed before.
        abi_key = self.get_abi_key_for_deps()
        steps.append(RecordArtifactAndMetadataStep(
            'record_dx_success' if has_classes_to_dx else 'record_empty_dx',
            [path_to_dex] if has_classes_to_dx else (),
            [
                (ABI_KEY_FOR_DEPS_ON_DISK_METADATA, abi_key),
                (ABI_KEY_ON_DISK_METADATA, abi_key),
            ],
        ))

        self._steps = StepSequence(steps)
        if has_classes_to_dx:
            self._succeeded_state = States.SUCCEEDED_WITH_ARTIFACT
        else:
            self._succeeded_state = States.SUCCEEDED_WITHOUT_ARTIFACT
        self.state = States.PLANNED
        LOG.debug('%s: plan: %s', self.target, self._steps.names())
        return self._steps

    def build(self, context):
        """Execute the planned steps; plan them first if not yet."""
        if self.state is States.UNPLANNED:
            self.plan_steps(context)
        preconds.check_state(
            self.state is States.PLANNED,
            '%s cannot be built in state %s', self.target, self.state)

        self.state = States.EXECUTING
        try:
            self._steps.execute(context, before_step=self._before_step)
        except Exception:
            LOG.error('%s: build failed in state %s', self.target, self.state)
            self.state = States.FAILED
            raise
        self.state = States.METADATA_RECORDED
        LOG.info('%s: built: output=%s', self.target, self.path_to_output())

    def _before_step(self, step):
        # The record step is always the last one.
        if step is self._steps[-1]:
            self.state = self._succeeded_state


def is_abi_key_unchanged(rule, on_disk_info):
    """True if the rule's ABI key equals the one recorded on disk by a
       previous build, in which case a dx-merge step has nothing to
       re-dex for this rule.
    """
    previous = on_disk_info.get_hash(ABI_KEY_ON_DISK_METADATA)
    return previous is not None and previous == rule.get_abi_key_for_deps()
