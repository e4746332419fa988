from allpaths import (
    Grid,
    OrientedGrid,
    TurnCosts,
    best_terminal,
    count_shortcuts,
    find_first_blocking_obstacle,
    reconstruct,
    search,
)
from allpaths.mazes import generate_maze

if __name__ == "__main__":
    maze = generate_maze(31, 31, seed=3)
    goal = (30, 30)

    space = OrientedGrid(maze, TurnCosts(forward=1, turn=1000))
    explored = search(space.start_node((0, 0)), space)
    end = best_terminal(explored, space.at_position(goal))
    if end is not None:
        node, cost = end
        tiles = reconstruct(explored, node, shortest_only=False)
        print(f"oriented: cost={cost}, tiles on some best path={len(tiles)}")

    track = search((0, 0), maze)
    print(f"shortcuts of length <= 2 saving >= 10: {count_shortcuts(track, 2, 10)}")

    falling = [(x, 5) for x in range(10)]
    index = find_first_blocking_obstacle(
        falling, Grid(10, 10).with_obstacles, start=(0, 0), goal=(9, 9)
    )
    print(f"first blocking obstacle: {index} at {falling[index]}")
