import argparse
import json

import pandas as pd
from sklearn import linear_model


def load_data(filename: str) -> pd.DataFrame:
    df = pd.read_csv(filename, sep="\t", index_col=False)
    df.drop(["sample"], inplace=True, axis=1)
    return df.dropna(how="any", axis=0, ignore_index=True)


def fit(df: pd.DataFrame) -> dict[str, float]:
    """Fit `duration = per_element * length + _constant` with non-negative coefficients."""
    reg = linear_model.LinearRegression(positive=True)
    reg.fit(df[["length"]].values, df["duration"].values)

    return {"per_element": float(reg.coef_[0]), "_constant": float(reg.intercept_)}


def fit_operations(df: pd.DataFrame) -> dict[str, dict[str, float]]:
    return {operation: fit(group) for operation, group in df.groupby("operation", sort=True)}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("log_filename")
    return parser.parse_args()


def main(args: argparse.Namespace):
    filename = args.log_filename
    df = load_data(filename)
    coefficients = fit_operations(df)
    print(json.dumps(coefficients, indent=4, sort_keys=True))


if __name__ == "__main__":
    args = parse_args()
    main(args)
