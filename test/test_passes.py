import numpy as np
import pytest
import torch

from torchedt.passes import axis_min_pass, column_pass, nearest_foreground


def lane(bits):
    return torch.tensor([[bits]], dtype=torch.bool)


@pytest.mark.parametrize(
    "bits, expected_d1, expected_d2",
    [
        pytest.param([0, 0, 1, 0, 0], [2, 1, 0, 5, 5], [5, 5, 0, 1, 2], id="Middle"),
        pytest.param([1, 0, 0, 0], [0, 4, 4, 4], [0, 1, 2, 3], id="Column Zero"),
        pytest.param([0, 0, 0, 1], [3, 2, 1, 0], [4, 4, 4, 0], id="Last Column"),
        pytest.param([0, 0, 0], [3, 3, 3], [3, 3, 3], id="Empty"),
        pytest.param([1, 0, 0, 1], [0, 2, 1, 0], [0, 1, 2, 0], id="Both Ends"),
    ],
)
def test_nearest_foreground(bits, expected_d1, expected_d2):
    d1, d2 = nearest_foreground(lane(bits))

    assert d1[0, 0].tolist() == expected_d1
    assert d2[0, 0].tolist() == expected_d2


def test_nearest_foreground_along_bands():
    mask = torch.zeros((4, 1, 1), dtype=torch.bool)
    mask[1] = True

    d1, d2 = nearest_foreground(mask, dim=0)

    assert d1.flatten().tolist() == [1, 0, 4, 4]
    assert d2.flatten().tolist() == [4, 0, 1, 2]


def test_column_pass():
    mask = torch.tensor(
        [[[0, 1, 0, 0, 0], [0, 0, 0, 0, 0]]],
        dtype=torch.bool,
    )

    field = column_pass(mask, sentinel=30.0)

    assert field.dtype == torch.float64
    assert field[0, 0].tolist() == [1.0, 0.0, 1.0, 4.0, 9.0]
    assert field[0, 1].tolist() == [30.0] * 5


def test_row_pass_uses_neighbouring_rows():
    mask = torch.zeros((1, 4, 3), dtype=torch.bool)
    mask[0, 0, 2] = True
    sentinel = 1.0 + 16.0 + 9.0

    field = axis_min_pass(column_pass(mask, sentinel), mask, dim=1, sentinel=sentinel)

    expected = [
        [4.0, 1.0, 0.0],
        [5.0, 2.0, 1.0],
        [8.0, 5.0, 4.0],
        [13.0, 10.0, 9.0],
    ]
    assert field[0].tolist() == expected


def test_axis_min_pass_does_not_modify_input():
    mask = torch.zeros((3, 3, 3), dtype=torch.bool)
    mask[0, 0, 0] = True
    field = column_pass(mask, 27.0)
    before = field.clone()

    axis_min_pass(field, mask, dim=1, sentinel=27.0)

    assert torch.equal(field, before)


def test_axis_min_pass_window_contains_minimiser():
    # a large value next to a small one: the window of the large value reaches it
    mask = torch.zeros((6, 1, 1), dtype=torch.bool)
    field = torch.tensor([9.0, 0.0, 16.0, 25.0, 36.0, 49.0], dtype=torch.float64).view(6, 1, 1)
    mask[1] = True

    out = axis_min_pass(field, mask, dim=0, sentinel=100.0)

    assert out.flatten().tolist() == [1.0, 0.0, 1.0, 4.0, 9.0, 16.0]


def test_axis_min_pass_keeps_foreground_zero():
    mask = torch.ones((2, 2, 2), dtype=torch.bool)
    field = torch.zeros((2, 2, 2), dtype=torch.float64)

    out = axis_min_pass(field, mask, dim=0, sentinel=12.0)

    assert torch.all(out == 0)


def test_passes_match_brute_force(brute_force):
    rng = np.random.default_rng(7)
    mask_np = rng.random((5, 6, 7)) < 0.05
    mask_np[4, 5, 6] = True
    mask = torch.from_numpy(mask_np)
    sentinel = float(5 * 5 + 6 * 6 + 7 * 7)

    field = column_pass(mask, sentinel)
    field = axis_min_pass(field, mask, dim=1, sentinel=sentinel)
    field = axis_min_pass(field, mask, dim=0, sentinel=sentinel)

    np.testing.assert_array_equal(field.numpy(), brute_force(mask_np))
