"""
Unit tests for grid factorization, selection and layout.
"""
import math

import pytest

from src.features.day_grid.domain.grid import (
    Grid,
    GridMode,
    GridSelector,
    InvalidGridError,
    ScalingMode,
    aspect_score,
    check_dimensions,
    divisor_pairs,
)
from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY
from src.shared.application.validation import ValidationError


# =============================================================================
# Factorization
# =============================================================================

class TestDivisorPairs:

    def test_every_pair_multiplies_to_slot_count(self):
        pairs = divisor_pairs()
        assert pairs
        assert all(cols * rows == SLOTS_PER_DAY for cols, rows in pairs)

    def test_includes_degenerate_single_row_and_column(self):
        pairs = divisor_pairs()
        assert (SLOTS_PER_DAY, 1) in pairs
        assert (1, SLOTS_PER_DAY) in pairs

    def test_both_orientations_and_no_duplicates(self):
        pairs = divisor_pairs()
        assert len(pairs) == len(set(pairs))
        for cols, rows in pairs:
            assert (rows, cols) in pairs

    def test_count_matches_divisor_count(self):
        # 86400 = 2^7 * 3^3 * 5^2 -> 8 * 4 * 3 divisors
        assert len(divisor_pairs()) == 96


class TestCheckDimensions:

    def test_valid_pair_is_returned(self):
        assert check_dimensions(360, 240) == (360, 240)

    def test_product_mismatch_rejected(self):
        with pytest.raises(InvalidGridError) as exc_info:
            check_dimensions(240, 361)
        assert "86400" in str(exc_info.value)

    @pytest.mark.parametrize("cols,rows", [(0, 86400), (-360, -240), (360.0, 240), (True, 86400), (None, 240)])
    def test_bad_dimensions_rejected(self, cols, rows):
        with pytest.raises(InvalidGridError):
            check_dimensions(cols, rows)

    def test_invalid_grid_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            check_dimensions(100, 100)

    def test_grid_construction_validates(self):
        with pytest.raises(InvalidGridError):
            Grid(cols=100, rows=100, cell_w=1, cell_h=1)


# =============================================================================
# Shape selection
# =============================================================================

class TestChooseShape:

    def test_1920x1080_picks_closest_ratio(self):
        selector = GridSelector()
        cols, rows = selector.choose_shape(1920, 1080)

        best = min(aspect_score(c, r, 1920, 1080) for c, r in divisor_pairs())
        assert cols * rows == SLOTS_PER_DAY
        assert math.isclose(aspect_score(cols, rows, 1920, 1080), best, abs_tol=1e-9)
        # 384x225 and 400x216 are equally close to 16:9
        assert (cols, rows) in {(384, 225), (400, 216)}

    def test_3_by_2_viewport_is_exact(self):
        assert GridSelector().choose_shape(1200, 800) == (360, 240)

    def test_portrait_viewport_picks_portrait_grid(self):
        cols, rows = GridSelector().choose_shape(1080, 1920)
        assert rows > cols

    def test_zero_viewport_uses_default_ratio(self):
        assert GridSelector().choose_shape(0, 0) == (360, 240)

    def test_deterministic(self):
        selector = GridSelector()
        assert selector.choose_shape(800, 600) == selector.choose_shape(800, 600)


# =============================================================================
# Layout policies
# =============================================================================

class TestLayout:

    def test_contain_integer_cells_centered(self):
        grid = GridSelector().layout(360, 240, 800, 600, ScalingMode.CONTAIN)
        assert grid.scaling is ScalingMode.CONTAIN
        assert (grid.cell_w, grid.cell_h) == (2.0, 2.0)
        assert (grid.offset_x, grid.offset_y) == (40.0, 60.0)
        assert grid.pixel_width <= 800 and grid.pixel_height <= 600

    def test_cover_crops_with_negative_offsets(self):
        grid = GridSelector().layout(360, 240, 800, 600, ScalingMode.COVER)
        assert (grid.cell_w, grid.cell_h) == (3.0, 3.0)
        assert (grid.offset_x, grid.offset_y) == (-140.0, -60.0)
        assert grid.pixel_width >= 800 and grid.pixel_height >= 600

    def test_stretch_fills_viewport_exactly(self):
        grid = GridSelector().layout(360, 240, 800, 600, ScalingMode.STRETCH)
        assert grid.offset_x == 0 and grid.offset_y == 0
        assert math.isclose(grid.pixel_width, 800)
        assert math.isclose(grid.pixel_height, 600)
        assert grid.cell_w != grid.cell_h

    def test_auto_contains_when_cells_fit(self):
        grid = GridSelector().layout(360, 240, 800, 600, ScalingMode.AUTO)
        assert grid.scaling is ScalingMode.CONTAIN

    def test_auto_stretches_when_cells_do_not_fit(self):
        grid = GridSelector().layout(360, 240, 200, 100, ScalingMode.AUTO)
        assert grid.scaling is ScalingMode.STRETCH
        assert math.isclose(grid.pixel_width, 200)

    def test_contain_never_below_one_pixel(self):
        grid = GridSelector().layout(360, 240, 100, 50, ScalingMode.CONTAIN)
        assert grid.cell_w == 1.0
        assert grid.offset_x == 0 and grid.offset_y == 0

    def test_pixel_budget_shrinks_cells(self):
        selector = GridSelector(pixel_budget=SLOTS_PER_DAY * 4)
        grid = selector.layout(360, 240, 3600, 2400, ScalingMode.CONTAIN)
        assert grid.cell_w == 2.0
        assert grid.device_pixel_ratio == 1.0

    def test_device_pixel_ratio_kept_within_budget(self):
        grid = GridSelector().layout(360, 240, 800, 600, ScalingMode.CONTAIN, device_pixel_ratio=2.0)
        assert grid.device_pixel_ratio == 2.0

    def test_device_pixel_ratio_clamped(self):
        selector = GridSelector()
        assert selector.layout(360, 240, 800, 600, device_pixel_ratio=5.0).device_pixel_ratio == 3.0
        assert selector.layout(360, 240, 800, 600, device_pixel_ratio=0.5).device_pixel_ratio == 1.0

    def test_device_pixel_ratio_capped_by_viewport_store(self):
        selector = GridSelector(pixel_budget=12_000_000)
        grid = selector.layout(360, 240, 2000, 1500, ScalingMode.CONTAIN, device_pixel_ratio=3.0)
        dpr = grid.device_pixel_ratio
        assert 1.0 < dpr < 2.0
        assert math.ceil(2000 * dpr) * math.ceil(1500 * dpr) <= 12_000_000

    def test_device_pixel_ratio_cap_never_below_one(self):
        selector = GridSelector(pixel_budget=1000)
        grid = selector.layout(360, 240, 800, 600, ScalingMode.STRETCH, device_pixel_ratio=2.0)
        assert grid.device_pixel_ratio == 1.0

    def test_layout_mode_aliases(self):
        assert ScalingMode.from_setting("fit") is ScalingMode.CONTAIN
        assert ScalingMode.from_setting("fill") is ScalingMode.COVER
        assert ScalingMode.from_setting("Stretch") is ScalingMode.STRETCH
        assert ScalingMode.from_setting(ScalingMode.AUTO) is ScalingMode.AUTO
        with pytest.raises(ValueError):
            ScalingMode.from_setting("zoom")


class TestSelect:

    def test_auto_grid_mode(self):
        grid = GridSelector().select(1200, 800)
        assert (grid.cols, grid.rows) == (360, 240)

    def test_custom_grid_mode(self):
        grid = GridSelector().select(800, 600, grid_mode=GridMode.CUSTOM, custom=(480, 180))
        assert (grid.cols, grid.rows) == (480, 180)

    def test_custom_grid_rejected(self):
        with pytest.raises(InvalidGridError):
            GridSelector().select(800, 600, grid_mode=GridMode.CUSTOM, custom=(240, 361))

    def test_custom_mode_without_shape_rejected(self):
        with pytest.raises(InvalidGridError):
            GridSelector().select(800, 600, grid_mode=GridMode.CUSTOM)


# =============================================================================
# Geometry
# =============================================================================

class TestGridGeometry:

    @pytest.fixture
    def contain_grid(self):
        return GridSelector().layout(360, 240, 800, 600, ScalingMode.CONTAIN)

    def test_cell_rect(self, contain_grid):
        assert contain_grid.cell_rect(0) == (40.0, 60.0, 2.0, 2.0)
        assert contain_grid.cell_rect(361) == (42.0, 62.0, 2.0, 2.0)

    def test_cell_rect_with_gap(self, contain_grid):
        assert contain_grid.cell_rect(0, gap=True) == (40.0, 60.0, 1.0, 1.0)

    def test_row_run_rect(self, contain_grid):
        assert contain_grid.row_run_rect(1, 2, 4) == (44.0, 62.0, 6.0, 2.0)

    def test_draws_gaps_needs_two_pixels(self, contain_grid):
        assert contain_grid.draws_gaps(True)
        assert not contain_grid.draws_gaps(False)
        small = GridSelector().layout(360, 240, 300, 200, ScalingMode.STRETCH)
        assert not small.draws_gaps(True)

    def test_cell_at_inside(self, contain_grid):
        assert contain_grid.cell_at(40, 60) == 0
        assert contain_grid.cell_at(50.5, 62.5) == 365
        assert contain_grid.cell_at(40 + 720 - 0.5, 60 + 480 - 0.5) == SLOTS_PER_DAY - 1

    def test_cell_at_letterbox_is_none(self, contain_grid):
        assert contain_grid.cell_at(39, 60) is None
        assert contain_grid.cell_at(40, 59) is None
        assert contain_grid.cell_at(760, 100) is None
        assert contain_grid.cell_at(100, 540) is None

    def test_cell_at_outside_viewport_is_none(self, contain_grid):
        assert contain_grid.cell_at(800, 300) is None
        assert contain_grid.cell_at(-1, 300) is None

    def test_cell_at_cover_accounts_for_crop(self):
        grid = GridSelector().layout(360, 240, 800, 600, ScalingMode.COVER)
        assert grid.cell_at(0, 0) == 20 * 360 + 46

    def test_cell_at_stretch_rectangular_cells(self):
        grid = GridSelector().layout(360, 240, 720, 960, ScalingMode.STRETCH)
        assert (grid.cell_w, grid.cell_h) == (2.0, 4.0)
        assert grid.cell_at(3, 5) == 360 + 1
