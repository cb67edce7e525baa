"""Seeded linear congruential generator plus draw logs and diagnostics."""

from .random_utils import (
    INCREMENT,
    MODULUS,
    MULTIPLIER,
    SeededGenerator,
    round_half_away,
    scale_state,
    time_seed,
)
from .statistics import (
    SequenceSummary,
    UniformityResult,
    chi_square_uniformity,
    cycle_length,
    describe_result,
    summarize_sequence,
)
from .data_generator import generate_draws, export_to_csv
