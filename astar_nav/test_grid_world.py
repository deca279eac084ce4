import numpy as np
import pytest
from grid_world import OBSTACLE, TRAVERSABLE, GridWorld


def test_empty_world_is_all_traversable():
    world = GridWorld.empty(4)
    assert world.size == 4
    assert (world.get_grid() == TRAVERSABLE).all()
    assert world.get_occupancy_grid().sum() == 0


def test_non_square_grid_rejected():
    with pytest.raises(ValueError):
        GridWorld(np.full((2, 3), TRAVERSABLE))


def test_bounds_and_open_cells():
    world = GridWorld.from_rows([".#", ".."])
    assert world.is_within_bounds((0, 0))
    assert world.is_within_bounds((1, 1))
    assert not world.is_within_bounds((-1, 0))
    assert not world.is_within_bounds((0, 2))

    assert world.is_open((0, 0))
    assert not world.is_open((0, 1))
    assert not world.is_open((2, 0))
    assert world.is_obstacle((0, 1))
    assert not world.is_obstacle((5, 5))
    assert world.classify((0, 1)) == OBSTACLE
    assert world.classify((1, 0)) == TRAVERSABLE


def test_neighbors_order_north_south_west_east():
    world = GridWorld.empty(3)
    assert world.neighbors((1, 1)) == [(0, 1), (2, 1), (1, 0), (1, 2)]
    # Corners only keep in-bounds cells, order preserved.
    assert world.neighbors((0, 0)) == [(1, 0), (0, 1)]
    assert world.neighbors((2, 2)) == [(1, 2), (2, 1)]


def test_neighbors_include_obstacles():
    world = GridWorld.from_rows([".#", ".."])
    assert (0, 1) in world.neighbors((0, 0))


def test_mark_step_and_path_steps():
    world = GridWorld.empty(3)
    world.mark_step((0, 0), 2)
    world.mark_step((0, 1), 1)
    assert world.classify((0, 0)) == 2
    assert world.path_steps() == {(0, 0): 2, (0, 1): 1}
    assert not world.is_open((0, 0))

    world.clear_path()
    assert world.path_steps() == {}
    assert world.is_open((0, 0))


def test_mark_step_refuses_obstacles_and_bad_ordinals():
    world = GridWorld.from_rows(["#.", ".."])
    with pytest.raises(ValueError):
        world.mark_step((0, 0), 1)
    with pytest.raises(ValueError):
        world.mark_step((0, 1), 0)
    assert world.classify((0, 0)) == OBSTACLE
    assert world.classify((0, 1)) == TRAVERSABLE


def test_out_of_bounds_cells_do_not_wrap_around():
    world = GridWorld.from_rows(["...", "...", "#.."])
    with pytest.raises(IndexError):
        world.classify((-1, 0))
    with pytest.raises(IndexError):
        world.classify((0, 3))

    before = world.get_grid()
    for cell in [(-1, 0), (0, -1), (3, 3)]:
        with pytest.raises(IndexError):
            world.mark_step(cell, 1)
    assert np.array_equal(world.get_grid(), before)
    assert world.path_steps() == {}


def test_get_grid_is_a_copy():
    world = GridWorld.empty(2)
    grid = world.get_grid()
    grid[0, 0] = OBSTACLE
    assert world.classify((0, 0)) == TRAVERSABLE


def test_random_world_places_twenty_percent_obstacles():
    world = GridWorld.random_world(size=10, obstacle_ratio=0.2, seed=0)
    assert world.get_occupancy_grid().sum() == 20
    assert world.is_open((0, 0))


def test_random_world_keeps_custom_start_free():
    for seed in range(20):
        world = GridWorld.random_world(
            size=5, obstacle_ratio=0.9, seed=seed, start=(2, 3)
        )
        assert world.is_open((2, 3))
        assert world.get_occupancy_grid().sum() == 22


def test_random_world_is_reproducible_with_seed():
    a = GridWorld.random_world(size=8, seed=42)
    b = GridWorld.random_world(size=8, seed=42)
    assert np.array_equal(a.get_grid(), b.get_grid())


@pytest.mark.parametrize("ratio", [-0.1, 1.0, 1.5])
def test_random_world_rejects_bad_ratio(ratio):
    with pytest.raises(ValueError):
        GridWorld.random_world(size=5, obstacle_ratio=ratio)


def test_random_world_rejects_start_outside_map():
    with pytest.raises(ValueError):
        GridWorld.random_world(size=3, start=(3, 0))


def test_sample_free_cell():
    world = GridWorld.from_rows(["##", "#."])
    rng = np.random.RandomState(0)
    assert world.sample_free_cell(rng) == (1, 1)


def test_sample_free_cell_gives_up():
    world = GridWorld.from_rows(["##", "##"])
    with pytest.raises(RuntimeError):
        world.sample_free_cell(max_tries=10)
