import argparse
import os.path

import pandas as pd
from clean_outliers import load_data, main, remove_outliers, remove_outliers_iteration


def write_log(directory, rows) -> None:
    pd.DataFrame(rows).to_csv(os.path.join(directory, "log.tsv"), sep="\t", index=False)


def make_df() -> pd.DataFrame:
    rows = [
        {"operation": "cons", "length": 10, "sample": i, "duration": 10.0} for i in range(9)
    ]
    rows.append({"operation": "cons", "length": 10, "sample": 9, "duration": 1000.0})
    rows += [
        {"operation": "reverse", "length": 10, "sample": i, "duration": 50.0} for i in range(3)
    ]
    return pd.DataFrame(rows)


def test_load_data_drops_failures(tmp_path):
    write_log(
        tmp_path,
        [
            {"operation": "head", "length": 0, "sample": 0, "duration": float("nan")},
            {"operation": "head", "length": 1, "sample": 0, "duration": 20.0},
        ],
    )
    df = load_data(str(tmp_path))
    target_df = pd.DataFrame([{"operation": "head", "length": 1, "sample": 0, "duration": 20.0}])
    pd.testing.assert_frame_equal(df, target_df)


def test_remove_outliers_iteration():
    df = remove_outliers_iteration(make_df(), threshold=2.5)
    assert len(df) == 12
    assert df.duration.max() == 50.0


def test_remove_outliers_keeps_constant_groups():
    df = remove_outliers(make_df(), threshold=2.5)
    assert (df.loc[df.operation == "reverse"].duration == 50.0).all()
    assert len(df.loc[df.operation == "reverse"]) == 3


def test_remove_outliers_high_threshold():
    df = remove_outliers(make_df(), threshold=10.0)
    pd.testing.assert_frame_equal(df, make_df())


def test_main(tmp_path):
    write_log(tmp_path, make_df().to_dict("records"))
    main(argparse.Namespace(log_directory=str(tmp_path), z_threshold=2.5))

    df = pd.read_csv(os.path.join(tmp_path, "clean_log.tsv"), sep="\t", index_col=False)
    assert len(df) == 12
    assert 1000.0 not in set(df.duration)
