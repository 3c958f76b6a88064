import argparse
import os.path
import warnings

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import plotly.io as pio

pio.defaults.mathjax = None


def convert_float_or_nan(x: str) -> float:
    try:
        return float(x)
    except ValueError:
        return float("nan")


def load_directory(directory: str) -> pd.DataFrame:
    log_filename = os.path.join(directory, "log.tsv")
    title_filename = os.path.join(directory, "title.txt")

    df = pd.read_csv(
        log_filename, sep="\t", index_col=False, converters={"duration": convert_float_or_nan}
    )

    with open(title_filename) as f:
        title = f.read().strip()
    df["title"] = title

    return df[["operation", "length", "duration", "title"]]


def merge_logs(*logs: pd.DataFrame) -> pd.DataFrame:
    return pd.concat(logs, ignore_index=True)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Median duration per run, operation and length, ignoring failed samples."""
    summary = df.groupby(["title", "operation", "length"], sort=True).duration.median()
    return summary.reset_index()


def plot(data: pd.DataFrame) -> go.Figure:
    fig = px.line(
        data,
        x="length",
        y="duration",
        color="operation",
        line_dash="title",
        markers=True,
        log_x=True,
        log_y=True,
        title="Persistent List Operation Cost by Length",
        labels={
            "length": "List Length",
            "duration": "Median Duration (ns)",
            "operation": "Operation",
            "title": "Run",
        },
    )
    fig.update_layout(legend_title_text="Operation, Run")
    return fig


def save_plot(fig: go.Figure, filepath: str) -> str:
    if not filepath.endswith(".pdf"):
        filepath += ".pdf"
    fig.write_image(file=filepath, height=1080, width=1920, format="pdf")
    return filepath


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("directories", nargs="+")
    parser.add_argument("--output-filename", "-o", required=False)
    parser.add_argument("--show-web-version", "-w", action="store_true")
    return parser.parse_args()


def main(args: argparse.Namespace):
    directories = args.directories
    show_web_version = args.show_web_version
    output_filename = args.output_filename

    if output_filename is None and not show_web_version:
        warnings.warn(
            "--output-filename and --show-web-version are False - this script will produce no output"
        )

    data = summarize(merge_logs(*(load_directory(directory) for directory in directories)))

    fig = plot(data)
    if show_web_version:
        fig.show()
    if output_filename is not None:
        filepath = save_plot(fig, output_filename)
        print(filepath)


if __name__ == "__main__":
    args = parse_args()
    main(args)
