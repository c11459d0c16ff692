"""Tests for the pixel store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch
import pytest
from seam_carver.pixels import PixelStore
from seam_carver.errors import InvalidInputError, InvalidSeamError, OutOfRangeError


def make_indexed_image(H, W):
    """Red channel holds 10 * row + col so every pixel is distinguishable."""
    image = torch.zeros(3, H, W)
    image[0] = torch.arange(H).unsqueeze(1) * 10 + torch.arange(W).unsqueeze(0)
    return image


class TestConstruction:
    def test_dimensions(self):
        store = PixelStore(torch.zeros(3, 4, 7))
        assert store.width == 7
        assert store.height == 4

    def test_stores_float64_copy(self):
        image = torch.zeros(3, 2, 2, dtype=torch.uint8)
        store = PixelStore(image)
        assert store.data.dtype == torch.float64
        store.set(0, 0, (1, 2, 3))
        assert image[:, 0, 0].tolist() == [0, 0, 0]

    def test_accepts_numpy(self):
        store = PixelStore(np.zeros((3, 2, 5), dtype=np.uint8))
        assert (store.width, store.height) == (5, 2)

    def test_rejects_none(self):
        with pytest.raises(InvalidInputError):
            PixelStore(None)

    @pytest.mark.parametrize("shape", [(3, 0, 4), (3, 4, 0)])
    def test_rejects_empty(self, shape):
        with pytest.raises(InvalidInputError):
            PixelStore(torch.zeros(shape))

    @pytest.mark.parametrize("shape", [(4, 4), (1, 4, 4), (4, 4, 3)])
    def test_rejects_non_rgb(self, shape):
        with pytest.raises(InvalidInputError):
            PixelStore(torch.zeros(shape))


class TestGetSet:
    def test_get_uses_x_column_y_row(self):
        store = PixelStore(make_indexed_image(3, 4))
        assert store.get(3, 1) == (13.0, 0.0, 0.0)

    def test_set_then_get(self):
        store = PixelStore(torch.zeros(3, 3, 3))
        store.set(2, 1, (10, 20, 30))
        assert store.get(2, 1) == (10.0, 20.0, 30.0)
        assert store.get(1, 2) == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_out_of_range(self, x, y):
        store = PixelStore(torch.zeros(3, 3, 4))
        with pytest.raises(OutOfRangeError):
            store.get(x, y)
        with pytest.raises(OutOfRangeError):
            store.set(x, y, (0, 0, 0))

    def test_out_of_range_is_index_error(self):
        store = PixelStore(torch.zeros(3, 3, 3))
        with pytest.raises(IndexError):
            store.get(3, 3)

    @pytest.mark.parametrize("x, y", [(1.5, 0), (0, 0.5), ("1", 0)])
    def test_non_integer_coordinates(self, x, y):
        store = PixelStore(torch.zeros(3, 3, 3))
        with pytest.raises(OutOfRangeError):
            store.get(x, y)
        with pytest.raises(OutOfRangeError):
            store.set(x, y, (0, 0, 0))

    def test_integer_like_coordinates(self):
        store = PixelStore(make_indexed_image(3, 4))
        assert store.get(np.int64(2), torch.tensor(1)) == (12.0, 0.0, 0.0)

    def test_set_rejects_bad_color(self):
        store = PixelStore(torch.zeros(3, 3, 3))
        with pytest.raises(InvalidInputError):
            store.set(0, 0, (1, 2))


class TestRemoval:
    def test_remove_column_shifts_left(self):
        store = PixelStore(make_indexed_image(3, 4))
        store.remove_column([1, 2, 1])

        assert (store.width, store.height) == (3, 3)
        assert store.data[0].tolist() == [
            [0.0, 2.0, 3.0],
            [10.0, 11.0, 13.0],
            [20.0, 22.0, 23.0],
        ]

    def test_remove_row_shifts_up(self):
        store = PixelStore(make_indexed_image(4, 3))
        store.remove_row([1, 2, 1])

        assert (store.width, store.height) == (3, 3)
        assert store.data[0].tolist() == [
            [0.0, 1.0, 2.0],
            [20.0, 11.0, 22.0],
            [30.0, 31.0, 32.0],
        ]

    def test_remove_returns_validated_seam(self):
        store = PixelStore(make_indexed_image(3, 4))
        seam = store.remove_column([1.0, 2.0, 1.0])
        assert seam.dtype == torch.long
        assert seam.tolist() == [1, 2, 1]

    def test_remove_column_fractional_seam(self):
        store = PixelStore(make_indexed_image(3, 4))
        with pytest.raises(InvalidSeamError):
            store.remove_column([0.5, 1.0, 1.0])
        assert store.width == 4

    def test_remove_column_wrong_length(self):
        store = PixelStore(torch.zeros(3, 3, 4))
        with pytest.raises(InvalidSeamError):
            store.remove_column([0, 0])
        assert store.width == 4

    def test_remove_row_from_single_row(self):
        store = PixelStore(torch.zeros(3, 1, 4))
        with pytest.raises(InvalidSeamError):
            store.remove_row([0, 0, 0, 0])
        assert store.height == 1
