import argparse
import csv
import importlib
import os
from typing import Any


def pyplot() -> Any:
    """matplotlib.pyplot, imported on first use so the CSV helpers work without it."""
    try:
        return importlib.import_module("matplotlib.pyplot")
    except ImportError as exc:
        raise RuntimeError("matplotlib is required to plot results") from exc


def load_rows(path: str) -> list[dict[str, str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return [dict(row) for row in csv.DictReader(f)]


def as_float(value: str | None) -> float:
    if value in (None, "", "None"):
        return 0.0
    return float(value)


def main(argv: list[str] | None = None) -> list[str]:
    p = argparse.ArgumentParser(description="Plot benchmark CSV: runtime vs corrections by policy")
    p.add_argument("csv", help="CSV file from benchmark")
    args = p.parse_args(argv)
    rows = load_rows(args.csv)
    plt = pyplot()
    written = []
    for sc in sorted(set(r["scenario"] for r in rows)):
        sub = [r for r in rows if r["scenario"] == sc]
        plt.figure()
        x = [as_float(r["corrections"]) for r in sub]
        y = [as_float(r["runtime_ms"]) for r in sub]
        plt.scatter(x, y)
        for xi, yi, r in zip(x, y, sub):
            plt.annotate(r["policy"], (xi, yi))
        plt.xlabel("Corrections")
        plt.ylabel("Runtime (ms)")
        plt.title(sc)
        out_png = f"{os.path.splitext(args.csv)[0]}_{sc}.png"
        plt.savefig(out_png, bbox_inches="tight")
        plt.close()
        print(out_png)
        written.append(out_png)
    return written


if __name__ == "__main__":
    main()
