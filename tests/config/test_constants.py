from scientific_polarization.config.constants import (
    CONSENSUS_THRESHOLD,
    CORRECT_THRESHOLD,
    DEFAULT_DEGREE_CAP,
    DEFAULT_GRANULARITY,
    DEFAULT_M,
    DEFAULT_N,
    DEFAULT_P,
    DISBELIEF_FLOOR,
    ENTROPY_LEVELS,
    EXPERIMENT_THRESHOLD,
    FLUSH_THRESHOLD,
    M_MAX,
    M_MIN,
    N_MAX,
    N_MIN,
    NO_EVIDENCE,
    P_MAX,
    P_MIN,
    PRIOR_HYPOTHESIS_WEIGHT,
)


def test_defaults_lie_within_parameter_ranges() -> None:
    assert P_MIN <= DEFAULT_P <= P_MAX
    assert N_MIN <= DEFAULT_N <= N_MAX
    assert M_MIN <= DEFAULT_M <= M_MAX


def test_default_degree_cap_is_odd_square() -> None:
    assert DEFAULT_DEGREE_CAP == 9


def test_granularity_is_positive_int() -> None:
    assert isinstance(DEFAULT_GRANULARITY, int) and DEFAULT_GRANULARITY >= 1


def test_thresholds_are_ordered() -> None:
    assert 0.0 < DISBELIEF_FLOOR < EXPERIMENT_THRESHOLD < CONSENSUS_THRESHOLD < 1.0
    assert CORRECT_THRESHOLD == EXPERIMENT_THRESHOLD


def test_prior_hypothesis_weight_is_fixed() -> None:
    assert PRIOR_HYPOTHESIS_WEIGHT == 0.9


def test_no_evidence_sentinel_is_not_a_success_count() -> None:
    assert NO_EVIDENCE < 0


def test_entropy_levels_matches_eight_bit_image() -> None:
    assert ENTROPY_LEVELS == 256


def test_flush_threshold_is_large() -> None:
    assert isinstance(FLUSH_THRESHOLD, int) and FLUSH_THRESHOLD >= 1024
