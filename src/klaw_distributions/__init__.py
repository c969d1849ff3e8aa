"""klaw-distributions: Distribution sampling over swappable uniform sources.

Bias-free uniform sampling over integer, character and floating-point ranges
with open/closed interval semantics, Box-Muller normal variates, and
cumulative-weight discrete distributions, each as a one-off sampler and as
an infinite stream that keeps its state across calls.

Flat imports (preferred):
    from klaw_distributions import RandomSource, uniform, dice, normal
    from klaw_distributions import UniformStream, NormalStream, DiscreteStream

Submodule imports (for organization):
    from klaw_distributions.samplers import uniform_int, uniform_float
    from klaw_distributions.discrete import cumulative_weights, search
    from klaw_distributions.sources import UniformSource, DuplicableSource
"""

from klaw_distributions._config import SamplingConfig, SearchPolicy, get_config, init
from klaw_distributions._default import default_source, reset_default_source
from klaw_distributions._logging import configure_logging, get_logger
from klaw_distributions._numeric import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntType,
    Interval,
)
from klaw_distributions.discrete import CumulativeWeights, cumulative_weights, search
from klaw_distributions.errors import (
    DistributionError,
    InvalidRange,
    InvalidWeights,
    NotDuplicable,
    NotDuplicableError,
    Overflow,
    OverflowError,
    RangeError,
    RetryLimit,
    RetryLimitError,
    WeightError,
)
from klaw_distributions.normal import NormalEngine, normal
from klaw_distributions.samplers import (
    dice,
    uniform,
    uniform01,
    uniform_char,
    uniform_float,
    uniform_int,
    uniform_word,
)
from klaw_distributions.sources import DuplicableSource, RandomSource, UniformSource
from klaw_distributions.streams import (
    DiscreteStream,
    DuplicableStream,
    NormalParams,
    NormalStream,
    Stream,
    Uniform01Stream,
    UniformParams,
    UniformStream,
)

__all__ = [
    'INT8',
    'INT16',
    'INT32',
    'INT64',
    'UINT8',
    'UINT16',
    'UINT32',
    'UINT64',
    # Discrete
    'CumulativeWeights',
    # Streams
    'DiscreteStream',
    # Errors
    'DistributionError',
    'DuplicableSource',
    'DuplicableStream',
    # Numeric types
    'IntType',
    'Interval',
    'InvalidRange',
    'InvalidWeights',
    # Normal
    'NormalEngine',
    'NormalParams',
    'NormalStream',
    'NotDuplicable',
    'NotDuplicableError',
    'Overflow',
    'OverflowError',
    # Sources
    'RandomSource',
    'RangeError',
    'RetryLimit',
    'RetryLimitError',
    # Config
    'SamplingConfig',
    'SearchPolicy',
    'Stream',
    'Uniform01Stream',
    'UniformParams',
    'UniformSource',
    'UniformStream',
    'WeightError',
    'configure_logging',
    'cumulative_weights',
    'default_source',
    # Samplers
    'dice',
    'get_config',
    'get_logger',
    'init',
    'normal',
    'reset_default_source',
    'search',
    'uniform',
    'uniform01',
    'uniform_char',
    'uniform_float',
    'uniform_int',
    'uniform_word',
]
