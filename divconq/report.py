import warnings
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure
from scipy.optimize import curve_fit

from divconq.metrics import CSV_HEADER
from divconq.output import log, timer

METRICS = ("time_ns", "comparisons", "depth", "allocations")


def log_n(x):
    x = np.asarray(x, dtype=np.float64)
    result = np.zeros_like(x)
    np.log(x, where=(x > 0), out=result)
    return result


@dataclass
class Model:
    """A growth model y = a * f(n) + b."""

    name: str
    func: Callable
    param_count: int

    def __str__(self):
        return self.name


model_constant = Model("O(1)", lambda n, a: np.ones(np.shape(n)) * a, 1)
model_log_n = Model("O(log(n))", lambda n, a, b: a * log_n(n) + b, 2)
model_linear_n = Model("O(n)", lambda n, a, b: a * np.asarray(n) + b, 2)
model_n_log_n = Model(
    "O(n*log(n))", lambda n, a, b: a * np.asarray(n) * log_n(n) + b, 2
)
model_n_squared = Model("O(n**2)", lambda n, a, b: a * np.asarray(n) ** 2 + b, 2)

models = [model_constant, model_log_n, model_linear_n, model_n_log_n, model_n_squared]


class FittedModel:
    def __init__(self, model: Model, params: np.ndarray, n: np.ndarray, y: np.ndarray):
        self.model = model
        self.params = params
        self.n = n
        self.y = y

    def predict(self, n: np.ndarray | None = None):
        if n is None:
            n = self.n
        return self.model.func(n, *self.params)

    def aic(self) -> float:
        rss = float(np.sum((self.y - self.predict()) ** 2))
        n_points = len(self.y)
        if n_points < 2:
            return np.inf
        if rss == 0:
            return -np.inf
        return 2 * len(self.params) + n_points * np.log(rss / n_points)

    def __str__(self):
        return self.model.name

    def __repr__(self):
        return str(self)


def fit_model(n, y, model: Model) -> Tuple[FittedModel | None, List[str]]:
    n = np.asarray(n, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    try:
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            params, _ = curve_fit(
                model.func, n, y, p0=[1.0] * model.param_count, maxfev=10000
            )
            if w:
                return None, sorted({f"fit_model {model.name}: {wm.message}" for wm in w})
        return FittedModel(model, params, n, y), []
    except (RuntimeError, ValueError, TypeError) as e:
        return None, [f"fit_model {model.name}: {e}"]


def fit_models(n, y) -> Tuple[List[FittedModel], List[str]]:
    """Fit every model and order the successful fits by increasing AIC."""
    results = [fit_model(n, y, model) for model in models]
    fits = [f for f, _ in results if f is not None]
    messages = [message for _, ms in results for message in ms]
    return sorted(fits, key=lambda f: f.aic()), messages


def load_metrics(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    missing = [c for c in CSV_HEADER if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing columns: {', '.join(missing)}")
    return df


def best_fits(df: pd.DataFrame, metric: str) -> Dict[str, FittedModel | None]:
    """Best growth model of `metric` against n, per algorithm."""
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric}.  Should be one of {METRICS}")
    result = {}
    for algorithm, group in df.groupby("algorithm", sort=True):
        with timer(f"Fitting {metric} for {algorithm}"):
            if group["n"].nunique() < 3:
                log(f"{algorithm}: not enough distinct sizes to fit {metric}")
                result[algorithm] = None
                continue
            fits, messages = fit_models(group["n"].to_numpy(), group[metric].to_numpy())
            for message in messages:
                log(message)
            result[algorithm] = fits[0] if fits else None
    return result


def summarize(df: pd.DataFrame, metric: str) -> Dict[str, str]:
    return {
        algorithm: str(fit) if fit is not None else "insufficient data"
        for algorithm, fit in best_fits(df, metric).items()
    }


def plot_metrics(df: pd.DataFrame, metric: str, path: str) -> str:
    """
    One panel per algorithm: measured `metric` against n with the best
    fitting growth model drawn over it.  Saves to `path` and returns it.
    """
    fits = best_fits(df, metric)
    sns.set_style("whitegrid")
    sns.set_palette("tab10")
    fig = Figure(figsize=(4 * max(len(fits), 1), 4), layout="constrained")
    axes = fig.subplots(1, max(len(fits), 1), squeeze=False)[0]

    for index, (ax, (algorithm, fit)) in enumerate(zip(axes, fits.items())):
        group = df[df["algorithm"] == algorithm]
        color = f"C{index}"
        sns.scatterplot(
            x=group["n"], y=group[metric], ax=ax, color=color, alpha=0.7, label="Data"
        )
        if fit is not None:
            ns = np.sort(np.unique(fit.n))
            sns.lineplot(
                x=ns, y=fit.predict(ns), ax=ax, color=color, linewidth=2, label=f"Best fit: {fit}"
            )
        ax.set_xlabel("Input Size (n)")
        ax.set_ylabel(metric)
        ax.set_title(algorithm, fontsize=12)
        ax.legend()

    fig.savefig(path)
    return path
