import argparse

from allpaths.cli.benchmark import run_one
from allpaths.grid import TurnCosts
from allpaths.logging import configure_root
from allpaths.scenarios import scenario_oriented_maze

KEYS = ["policy", "cost", "best_tiles", "expansions", "corrections", "tie_merges", "runtime_ms"]


def main(argv: list[str] | None = None) -> list[dict]:
    p = argparse.ArgumentParser(description="Oriented maze under both frontier policies")
    p.add_argument("--width", type=int, default=31)
    p.add_argument("--height", type=int, default=31)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--forward", type=int, default=1)
    p.add_argument("--turn", type=int, default=1000)
    p.add_argument("--log-level", type=str, default="WARNING")
    args = p.parse_args(argv)
    configure_root(args.log_level.upper())
    sc = scenario_oriented_maze(
        args.width, args.height, seed=args.seed, costs=TurnCosts(args.forward, args.turn)
    )
    rows = [run_one(sc, policy) for policy in ("heap", "fifo")]
    print(",".join(KEYS))
    for row in rows:
        print(",".join(str(row[k]) for k in KEYS))
    return rows


if __name__ == "__main__":
    main()
