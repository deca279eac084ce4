# demo_visualize_world.py
import matplotlib.pyplot as plt
import numpy as np
from grid_planner import plan_route
from grid_world import GridWorld
from visualize_world import render_grid, show_path_on_grid


def main() -> None:
    world = GridWorld.random_world(size=20, obstacle_ratio=0.25, seed=1)
    rng = np.random.RandomState(1)

    start = world.sample_free_cell(rng)
    goal = world.sample_free_cell(rng)

    route = plan_route(world, start, goal)
    if route is None:
        print("No path found.")
        return

    print(render_grid(world, show_steps=True))
    show_path_on_grid(world, route, label="A* Path")
    plt.show()


if __name__ == "__main__":
    main()
