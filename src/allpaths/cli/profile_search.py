import argparse
import cProfile
import io
import pstats

from allpaths.feasibility import IncrementalFeasibilitySearch
from allpaths.scenarios import scenario_falling_obstacles
from allpaths.search import SearchParams


def main(argv: list[str] | None = None) -> int | None:
    p = argparse.ArgumentParser(description="cProfile a falling-obstacle feasibility search")
    p.add_argument("--size", type=int, default=71)
    p.add_argument("--count", type=int, default=3000)
    p.add_argument("--policy", type=str, default="heap", choices=["heap", "fifo"])
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args(argv)

    sc = scenario_falling_obstacles(args.size, args.size, args.count, seed=args.seed)
    finder = IncrementalFeasibilitySearch(
        sc.obstacles,
        sc.space.with_obstacles,
        start=sc.start,
        goal=sc.meta["goal"],
        params=SearchParams(policy=args.policy),
    )
    pr = cProfile.Profile()
    pr.enable()
    index = finder.run()
    pr.disable()
    s = io.StringIO()
    pstats.Stats(pr, stream=s).sort_stats("tottime").print_stats(30)
    print(f"first blocking obstacle: {index} after {len(finder.history)} probes")
    print(s.getvalue())
    return index


if __name__ == "__main__":
    main()
