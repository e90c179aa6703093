import random

import pytest

from wowstudio.rect_pack import MAX_COORD, Heuristic, PackRect, RectPacker


def _overlaps(a, b):
    return a.x < b.x + b.w and b.x < a.x + a.w and a.y < b.y + b.h and b.y < a.y + a.h


def _check_layout(rects, width, height):
    packed = [r for r in rects if r.was_packed and r.w and r.h]
    for r in packed:
        assert 0 <= r.x and r.x + r.w <= width
        assert 0 <= r.y and r.y + r.h <= height
    for i, a in enumerate(packed):
        for b in packed[i + 1 :]:
            assert not _overlaps(a, b)


def _random_rects(seed, count, max_side):
    rng = random.Random(seed)
    return [PackRect(i, rng.randint(1, max_side), rng.randint(1, max_side)) for i in range(count)]


@pytest.mark.parametrize("heuristic", [Heuristic.SKYLINE_BL_SORT_HEIGHT, Heuristic.SKYLINE_BF_SORT_HEIGHT])
@pytest.mark.parametrize("allow_oom", [False, True])
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_random_rects_do_not_overlap(heuristic, allow_oom, seed):
    packer = RectPacker(256, 256)
    packer.setup_allow_out_of_mem(allow_oom)
    packer.setup_heuristic(heuristic)
    rects = _random_rects(seed, 60, 40)
    result = packer.pack_rects(rects)
    _check_layout(rects, 256, 256)
    assert result == all(r.was_packed for r in rects)


def test_all_fit_in_large_target():
    packer = RectPacker(1024, 1024)
    rects = _random_rects(7, 20, 30)
    assert packer.pack_rects(rects) is True
    assert all(r.was_packed for r in rects)
    _check_layout(rects, 1024, 1024)


def test_original_order_is_kept():
    packer = RectPacker(128, 128)
    rects = [PackRect(i, 5 + i, 3 * (i + 1)) for i in range(8)]
    packer.pack_rects(rects)
    assert [r.id for r in rects] == list(range(8))


def test_first_rect_goes_to_origin():
    packer = RectPacker(100, 100)
    rects = [PackRect(0, 10, 10)]
    assert packer.pack_rects(rects)
    assert (rects[0].x, rects[0].y) == (0, 0)


def test_tallest_rect_is_placed_first():
    packer = RectPacker(100, 100)
    packer.setup_allow_out_of_mem(True)
    short = PackRect(0, 10, 5)
    tall = PackRect(1, 10, 50)
    packer.pack_rects([short, tall])
    assert (tall.x, tall.y) == (0, 0)
    assert short.x == tall.w and short.y == 0


def test_too_large_rect_is_not_packed():
    packer = RectPacker(50, 50)
    big = PackRect(0, 60, 10)
    small = PackRect(1, 10, 10)
    assert packer.pack_rects([big, small]) is False
    assert big.was_packed is False
    assert (big.x, big.y) == (MAX_COORD, MAX_COORD)
    assert small.was_packed is True


def test_empty_rect_needs_no_space():
    packer = RectPacker(10, 10)
    empty = PackRect(0, 0, 5)
    assert packer.pack_rects([empty]) is True
    assert (empty.x, empty.y, empty.was_packed) == (0, 0, True)


def test_target_fills_up():
    packer = RectPacker(20, 20)
    rects = [PackRect(i, 10, 10) for i in range(5)]
    assert packer.pack_rects(rects) is False
    assert sum(r.was_packed for r in rects) == 4
    _check_layout(rects, 20, 20)


def test_running_out_of_nodes():
    packer = RectPacker(10, 10, num_nodes=1)
    packer.setup_allow_out_of_mem(True)
    rects = [PackRect(i, 1, 1) for i in range(3)]
    assert packer.pack_rects(rects) is False
    assert sum(r.was_packed for r in rects) == 1


def test_packing_continues_across_calls():
    packer = RectPacker(64, 64)
    first = _random_rects(11, 10, 16)
    second = _random_rects(12, 10, 16)
    packer.pack_rects(first)
    packer.pack_rects(second)
    _check_layout(first + second, 64, 64)


def test_alignment_quantises_widths():
    packer = RectPacker(100, 100, num_nodes=10)
    assert packer.align == 10
    packer.setup_allow_out_of_mem(True)
    assert packer.align == 1


def test_invalid_heuristic_raises():
    packer = RectPacker(10, 10)
    with pytest.raises(ValueError):
        packer.setup_heuristic(5)


def test_zero_nodes_raises():
    with pytest.raises(ValueError):
        RectPacker(10, 10, num_nodes=0)