import numpy as np
import pytest

from colour_reduce.bw.dither import (
    FS_DENOMINATOR,
    FS_WEIGHTS,
    diffuse_channel,
    dither,
)
from colour_reduce.bw.threshold import threshold
from colour_reduce.errors import ValidationError

from _images import solid


def _colours(rgb):
    return {tuple(int(c) for c in px) for px in rgb.reshape(-1, 3)}


def test_mid_grey_produces_both_black_and_white():
    src = solid(8, 8, (127, 127, 127))

    out = dither(src)

    assert _colours(out) == {(0, 0, 0), (255, 255, 255)}
    # Plain thresholding of the same input is all black.
    assert _colours(threshold(src)) == {(0, 0, 0)}


def test_mid_grey_two_by_two_is_checkerboard():
    out = dither(solid(2, 2, (127, 127, 127)))

    assert out[..., 0].tolist() == [[0, 255], [255, 0]]


def test_weights_sum_to_one():
    assert sum(num for _dx, _dy, num in FS_WEIGHTS) == FS_DENOMINATOR == 16


def test_neighbour_offsets():
    assert [(dx, dy) for dx, dy, _n in FS_WEIGHTS] == [(1, 0), (-1, 1), (0, 1), (1, 1)]
    assert [n for _dx, _dy, n in FS_WEIGHTS] == [7, 3, 5, 1]


def test_one_by_one_does_not_crash():
    out = dither(solid(1, 1, (200, 10, 90)))
    assert out.shape == (1, 1, 3)
    assert out[0, 0].tolist() == [0, 0, 0]


def test_single_row_and_column(gradient_rgb):
    row = gradient_rgb[:1]
    col = gradient_rgb[:, :1]
    assert dither(row).shape == row.shape
    assert dither(col).shape == col.shape


def test_empty_raster():
    rgb = np.zeros((0, 0, 3), dtype=np.uint8)
    assert dither(rgb).shape == (0, 0, 3)


def test_output_is_black_or_white_and_same_shape(gradient_rgb):
    out = dither(gradient_rgb)

    assert out.shape == gradient_rgb.shape
    assert out.dtype == np.uint8
    assert _colours(out) <= {(0, 0, 0), (255, 255, 255)}


def test_solid_black_and_white_unchanged():
    assert np.all(dither(solid(4, 3, (0, 0, 0))) == 0)
    assert np.all(dither(solid(4, 3, (255, 255, 255))) == 255)


def test_preserves_average_tone():
    out = dither(solid(32, 32, (64, 64, 64)))
    white_share = float(np.mean(out[..., 0] == 255))
    assert 0.15 < white_share < 0.35


def test_deterministic(gradient_rgb):
    assert np.array_equal(dither(gradient_rgb), dither(gradient_rgb))


def test_input_is_not_modified(gradient_rgb):
    before = gradient_rgb.copy()
    dither(gradient_rgb)
    assert np.array_equal(gradient_rgb, before)


def test_average_boundary():
    # average exactly 128.0 stays black; a hair above goes white
    assert dither(solid(1, 1, (128, 128, 128)))[0, 0].tolist() == [0, 0, 0]
    assert dither(solid(1, 1, (129, 128, 128)))[0, 0].tolist() == [255, 255, 255]


class TestDiffuseChannel:
    def test_truncates_rather_than_rounds(self):
        # 100 + 10 * 7 / 16 = 104.375 -> 104 ; 100 + 15 * 7 / 16 = 106.5625 -> 106
        assert diffuse_channel(100, 10, 7, "clamp") == 104
        assert diffuse_channel(100, 15, 7, "clamp") == 106
        # negative error truncates toward zero: 100 - 4.375 = 95.625 -> 95
        assert diffuse_channel(100, -10, 7, "clamp") == 95

    def test_clamp_saturates(self):
        assert diffuse_channel(255, 255, 7, "clamp") == 255
        assert diffuse_channel(0, -255, 7, "clamp") == 0

    def test_wrap_keeps_low_byte(self):
        # 255 + 111.5625 -> 366 -> 110
        assert diffuse_channel(255, 255, 7, "wrap") == 110
        # 0 - 111.5625 -> -111 -> 145
        assert diffuse_channel(0, -255, 7, "wrap") == 145


class TestOverflowPolicy:
    def test_clamp_and_wrap_diverge(self):
        # Pure red goes black and pushes +111 red into its right neighbour.
        src = np.array([[[255, 0, 0], [255, 200, 0]]], dtype=np.uint8)

        clamped = dither(src, overflow="clamp")
        wrapped = dither(src, overflow="wrap")

        # clamp: (255,200,0) averages 151.7 -> white
        assert clamped[0, 1].tolist() == [255, 255, 255]
        # wrap: (110,200,0) averages 103.3 -> black
        assert wrapped[0, 1].tolist() == [0, 0, 0]

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            dither(solid(2, 2, (10, 10, 10)), overflow="saturate")  # type: ignore[arg-type]


def _reference_dither(rgb, overflow):
    """Straight per-pixel Floyd–Steinberg on an int64 array, for comparison."""
    H, W, _ = rgb.shape
    work = rgb.astype(np.int64)
    for y in range(H):
        for x in range(W):
            p = work[y, x].copy()
            new = np.array([255, 255, 255]) if p.sum() / 3.0 > 128.0 else np.zeros(3)
            work[y, x] = new
            err = p - new
            for dx, dy, num in ((1, 0, 7), (-1, 1, 3), (0, 1, 5), (1, 1, 1)):
                nx, ny = x + dx, y + dy
                if 0 <= nx < W and ny < H:
                    for c in range(3):
                        v = int(work[ny, nx, c] + err[c] * num / 16)
                        if overflow == "wrap":
                            work[ny, nx, c] = v % 256
                        else:
                            work[ny, nx, c] = min(max(v, 0), 255)
    return work.astype(np.uint8)


@pytest.mark.parametrize("overflow", ["clamp", "wrap"])
def test_matches_per_pixel_reference(gradient_rgb, overflow):
    noisy = gradient_rgb.copy()
    noisy[::3, ::2] = (255, 10, 0)

    assert np.array_equal(dither(noisy, overflow), _reference_dither(noisy, overflow))


def test_list_buffer_shapes_round_trip():
    for shape in [(0, 0, 3), (0, 5, 3), (5, 0, 3), (3, 1, 3)]:
        out = dither(np.full(shape, 200, dtype=np.uint8))
        assert out.shape == shape
        assert out.dtype == np.uint8
