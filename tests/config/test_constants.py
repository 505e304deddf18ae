from maze_memory.config.constants import (
    DEFAULT_TICK_DELAY_MS,
    FLUSH_THRESHOLD,
    GRID_HEIGHT,
    GRID_WIDTH,
    LEARNING_RATE,
    NUM_STEPS,
    TICK_DELAY_CHOICES_MS,
    VISIT_SATURATION_BASE,
    VISIT_SATURATION_STEP,
    WEIGHT_ZERO_TOLERANCE,
)


def test_grid_dimensions_are_positive_ints() -> None:
    assert isinstance(GRID_WIDTH, int) and GRID_WIDTH > 0
    assert isinstance(GRID_HEIGHT, int) and GRID_HEIGHT > 0


def test_default_delay_is_selectable() -> None:
    assert DEFAULT_TICK_DELAY_MS in TICK_DELAY_CHOICES_MS
    assert all(ms > 0 for ms in TICK_DELAY_CHOICES_MS)


def test_learning_rate_dwarfs_zero_tolerance() -> None:
    assert LEARNING_RATE > 0
    assert WEIGHT_ZERO_TOLERANCE < LEARNING_RATE / 1_000


def test_visit_shading_saturates_within_a_byte() -> None:
    assert 0 < VISIT_SATURATION_BASE <= 255
    assert VISIT_SATURATION_STEP > 0


def test_run_sizes_are_positive() -> None:
    assert NUM_STEPS > 0
    assert FLUSH_THRESHOLD > 0
