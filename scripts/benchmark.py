import argparse
import gc
import operator
import os
import time
from typing import Any, Callable

import pandas as pd

from persistent_list import (
    PersistentList,
    at,
    concat,
    cons,
    equals,
    filter_,
    fold_left,
    from_iterable,
    from_range,
    head,
    length,
    map_,
    reduce_left,
    reverse,
    tail,
)

# Each operation pairs the timed function with a setup that builds its arguments
# from the benchmark list before the clock starts.
Operation = tuple[Callable[..., Any], Callable[[PersistentList[int]], tuple]]

OPERATIONS: dict[str, Operation] = {
    "cons": (cons, lambda list_: (0, list_)),
    "head": (head, lambda list_: (list_,)),
    "tail": (tail, lambda list_: (list_,)),
    "at": (at, lambda list_: (list_, length(list_) - 1)),
    "length": (length, lambda list_: (list_,)),
    "reverse": (reverse, lambda list_: (list_,)),
    "map": (map_, lambda list_: (list_, lambda x: x * 2)),
    "filter": (filter_, lambda list_: (list_, lambda x: x % 3 == 0)),
    "reduce_left": (reduce_left, lambda list_: (list_, operator.add)),
    "fold_left": (fold_left, lambda list_: (list_, 0, operator.add)),
    "concat": (concat, lambda list_: (list_, list_)),
    "equals": (equals, lambda list_: (list_, from_iterable(list(list_)))),
}


def time_operation(function: Callable[..., Any], arguments: tuple) -> float:
    """Time a single call in nanoseconds, or nan if the call fails."""
    gc_was_enabled = gc.isenabled()
    gc.disable()
    try:
        start_time = time.perf_counter_ns()
        function(*arguments)
        end_time = time.perf_counter_ns()
    except Exception:
        return float("nan")
    finally:
        if gc_was_enabled:
            gc.enable()
    return float(end_time - start_time)


def run_benchmarks(
    operations: dict[str, Operation], lengths: list[int], samples: int
) -> pd.DataFrame:
    rows = []
    for length_ in lengths:
        list_ = from_range(1, length_)
        for name, (function, setup) in operations.items():
            arguments = setup(list_)
            for sample in range(samples):
                rows.append(
                    {
                        "operation": name,
                        "length": length_,
                        "sample": sample,
                        "duration": time_operation(function, arguments),
                    }
                )
    return pd.DataFrame(rows, columns=["operation", "length", "sample", "duration"])


def save_results(df: pd.DataFrame, directory: str, title: str) -> None:
    os.makedirs(directory, exist_ok=True)
    df.to_csv(os.path.join(directory, "log.tsv"), sep="\t", index=False)
    with open(os.path.join(directory, "title.txt"), "w") as f:
        f.write(title + "\n")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("output_directory")
    parser.add_argument(
        "--lengths", "-l", nargs="+", type=int, default=[1, 10, 100, 1000, 10000]
    )
    parser.add_argument("--samples", "-n", type=int, default=10)
    parser.add_argument(
        "--operations", "-O", nargs="+", choices=sorted(OPERATIONS), default=None
    )
    parser.add_argument("--title", "-t", default="persistent_list")
    return parser.parse_args()


def main(args: argparse.Namespace):
    operations = OPERATIONS
    if args.operations is not None:
        operations = {name: OPERATIONS[name] for name in args.operations}

    df = run_benchmarks(operations, args.lengths, args.samples)
    save_results(df, args.output_directory, args.title)
    print(args.output_directory)


if __name__ == "__main__":
    args = parse_args()
    main(args)
