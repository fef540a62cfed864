import typer
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, List, Sequence
from tqdm import tqdm
from loguru import logger
from prettytable import PrettyTable

from nbodybench.backends import BACKENDS, get_backend
from nbodybench.config import ConfigError, load_config
from nbodybench.frontends import headless
from nbodybench.helpers import XorShift64, generate_bodies
from nbodybench.log import setup_logging

FIELDS = ['backend', 'case', 'planets', 'timesteps', 'run', 'time']
DEFAULT_CASES = ['case1:100:50', 'case2:5:20000', 'case3:100:500']

app = typer.Typer(add_completion=False)


@dataclass
class Case:
    name: str
    planets: int
    timesteps: int

    @classmethod
    def parse(cls, text: str) -> 'Case':
        try:
            name, planets, timesteps = text.split(':')
            case = cls(name, int(planets), int(timesteps))
        except ValueError:
            raise ValueError(f'Invalid case {text!r}, expected NAME:BODIES:TIMESTEPS')
        if case.planets <= 0 or case.timesteps < 0:
            raise ValueError(f'Invalid case {text!r}, bodies must be positive and timesteps non-negative')
        return case

    @property
    def label(self) -> str:
        return f"{self.name}\n({self.planets} bodies,\n{self.timesteps} steps)"


def run_benchmark(cases: Sequence[Case], backends: Sequence[str], runs: int, config: dict,
                  workers: int | None = None, progress: bool = True) -> pd.DataFrame:
    """Time every (case, backend, run) combination, each from a freshly seeded stream."""
    rows = []
    with tqdm(total=len(cases) * len(backends) * runs, disable=not progress, desc='Benchmark') as bar:
        for case in cases:
            logger.info(f'Running {case.name} ({case.planets} bodies, {case.timesteps} steps)')
            for backend_name in backends:
                with get_backend(backend_name, config, workers=workers) as engine:
                    frontend = headless.Frontend(backend=engine)
                    for run in range(1, runs + 1):
                        bodies = generate_bodies(case.planets, XorShift64(config['seed']))
                        result = frontend.simulate(bodies, case.timesteps)
                        logger.debug(f'{backend_name} {case.name} run {run}: {result.elapsed:.6f} s')
                        rows.append([backend_name, case.name, case.planets, case.timesteps, run, result.elapsed])
                        bar.update(1)
    return pd.DataFrame(rows, columns=FIELDS)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per case and backend run time statistics; std is the sample std."""
    return (df.groupby(['case', 'backend'], sort=False)['time']
              .agg(['mean', 'std', 'min', 'max'])
              .reset_index())


def speedups(df: pd.DataFrame, baseline: str) -> Dict[str, Dict[str, float]]:
    result = {}
    for case, case_df in df.groupby('case', sort=False):
        means = case_df.groupby('backend', sort=False)['time'].mean()
        if baseline not in means.index:
            continue
        result[case] = {
            backend_name: means[baseline] / mean
            for backend_name, mean in means.items() if backend_name != baseline
        }
    return result


def plot_results(cases: Sequence[Case], backends: Sequence[str], df: pd.DataFrame, plots_dir: Path) -> List[Path]:
    plots_dir.mkdir(parents=True, exist_ok=True)
    sns.set_style("whitegrid")
    palette = sns.color_palette("husl", len(backends))
    labels = [case.label for case in cases]
    stats = summarize(df)
    x = np.arange(len(cases))
    bar_width = 0.8 / len(backends)

    plt.figure(figsize=(12, 6))
    for i, backend_name in enumerate(backends):
        branch_data = stats[stats['backend'] == backend_name].set_index('case')
        branch_data = branch_data.reindex([case.name for case in cases])
        plt.bar(x + i * bar_width, branch_data['mean'], bar_width, label=backend_name,
                yerr=branch_data['std'].fillna(0.0), capsize=5, color=palette[i])
    plt.xlabel('Test Cases')
    plt.ylabel('Runtime (seconds)')
    plt.title('Runtime Comparison Across Test Cases')
    plt.xticks(x + bar_width * (len(backends) - 1) / 2, labels)
    plt.legend()
    plt.tight_layout()
    comparison = plots_dir / 'runtime_comparison.png'
    plt.savefig(comparison)
    plt.close()

    plt.figure(figsize=(12, 6))
    sns.boxplot(data=df, x='case', y='time', hue='backend', order=[case.name for case in cases],
                hue_order=list(backends), palette=palette)
    plt.xticks(range(len(cases)), labels, rotation=45)
    plt.xlabel('Test Cases')
    plt.ylabel('Runtime (seconds)')
    plt.title('Runtime Distribution by Test Case')
    plt.tight_layout()
    distribution = plots_dir / 'runtime_distribution.png'
    plt.savefig(distribution)
    plt.close()

    return [comparison, distribution]


def print_summary(df: pd.DataFrame, baseline: str) -> None:
    ratios = speedups(df, baseline)
    if ratios:
        print("\nSpeedup Analysis:")
        print("================")
        for case, per_backend in ratios.items():
            print(f"\nCase: {case}")
            for backend_name, speedup in per_backend.items():
                print(f"{backend_name} speedup: {speedup:.2f}x")

    print("\nSummary Statistics:")
    print("==================")
    stats = summarize(df)
    for case, case_stats in stats.groupby('case', sort=False):
        print(f"\nCase: {case}")
        table = PrettyTable()
        table.field_names = ["Backend", "Mean", "Std", "Min", "Max"]
        table.align = "l"
        for row in case_stats.itertuples(index=False):
            table.add_row([row.backend, f"{row.mean:.6f}", f"{row.std:.6f}", f"{row.min:.6f}", f"{row.max:.6f}"])
        print(table)


@app.command()
def benchmark(
    backend_names: List[str] = typer.Option(list(BACKENDS), '--backend', '-b', help='Backends to compare'),
    case_specs: List[str] = typer.Option(DEFAULT_CASES, '--case', '-c', help='NAME:BODIES:TIMESTEPS'),
    runs: int = typer.Option(3, min=1, help='Runs per configuration'),
    output_dir: Path = typer.Option(Path('benchmark_results'), '--output-dir', '-o'),
    baseline: str = typer.Option('cpu', help='Backend the speedups are relative to'),
    workers: int | None = typer.Option(None, help='Worker processes for the parallel backend'),
    config_file: Path | None = typer.Option(None, '--config', help='JSON constants file'),
    verbose: bool = typer.Option(False, '--verbose', '-v'),
):
    """Compare backend runtimes over a set of cases and plot the results."""
    setup_logging(verbose)

    try:
        cases = [Case.parse(spec) for spec in case_specs]
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint='--case')
    for name in backend_names:
        if name not in BACKENDS:
            raise typer.BadParameter(f'Unknown backend {name!r}', param_hint='--backend')

    try:
        config = load_config(config_file)
    except (ConfigError, OSError) as e:
        typer.echo(f'Invalid configuration: {e}', err=True)
        raise typer.Exit(code=1)

    print("Benchmark Configuration:")
    print("=======================")
    print(f"Backends: {' '.join(backend_names)}")
    print("Test Cases:")
    for case in cases:
        print(f"  {case.name}: {case.planets} bodies, {case.timesteps} timesteps")
    print(f"Runs per configuration: {runs}")
    print(f"Total runs: {len(cases) * len(backend_names) * runs}")

    df = run_benchmark(cases, backend_names, runs, config, workers=workers)

    output_dir.mkdir(parents=True, exist_ok=True)
    results = output_dir / 'results.csv'
    df.to_csv(results, index=False)
    plots = plot_results(cases, backend_names, df, output_dir / 'plots')
    print_summary(df, baseline)

    print(f"\nBenchmark complete! Results saved in {results}")
    print("Plots saved as:")
    for plot in plots:
        print(f"  - {plot}")


def main():
    app(prog_name='nbodybench-benchmark')


if __name__ == "__main__":
    main()
