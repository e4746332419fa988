import argparse
from datetime import datetime
import os
from typing import Any

from allpaths.logging import configure_root
from allpaths.reconstruct import reconstruct
from allpaths.scenarios import Scenario, default_scenarios
from allpaths.search import POLICIES, LabelCorrectingSearch, SearchParams, best_terminal

KEYS = [
    "scenario",
    "kind",
    "policy",
    "cost",
    "best_tiles",
    "expansions",
    "generated",
    "corrections",
    "tie_merges",
    "stale",
    "runtime_ms",
]


def run_one(sc: Scenario, policy: str) -> dict[str, Any]:
    eng = LabelCorrectingSearch(sc.start, sc.space, params=SearchParams(policy=policy))
    explored = eng.run()
    end = best_terminal(explored, sc.is_goal)
    st = eng.stats
    return {
        "scenario": sc.name,
        "kind": sc.meta["kind"],
        "policy": policy,
        "cost": (end[1] if end else None),
        "best_tiles": (len(reconstruct(explored, end[0], False)) if end else None),
        "expansions": st.expansions,
        "generated": st.generated,
        "corrections": st.corrections,
        "tie_merges": st.tie_merges,
        "stale": st.stale,
        "runtime_ms": round(st.runtime_ms, 3),
    }


def main(argv: list[str] | None = None) -> str:
    p = argparse.ArgumentParser(description="Frontier policy benchmark over grid scenarios")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--policies", type=str, default=",".join(POLICIES))
    p.add_argument("--out", type=str, default=None)
    p.add_argument("--log-level", type=str, default="INFO")
    p.add_argument("--json-logs", action="store_true")
    args = p.parse_args(argv)
    logger = configure_root(args.log_level.upper(), json=args.json_logs)

    policies = [tok.strip() for tok in args.policies.split(",") if tok.strip()]
    lines = [",".join(KEYS)]
    for sc in default_scenarios(seed=args.seed):
        for policy in policies:
            row = run_one(sc, policy)
            logger.info("%s/%s cost=%s", sc.name, policy, row["cost"])
            lines.append(",".join(str(row[k]) for k in KEYS))

    out_path = args.out or os.path.join(
        "results", f"benchmark_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    )
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
    print(out_path)
    return out_path


if __name__ == "__main__":
    main()
