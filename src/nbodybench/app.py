import typer
from pathlib import Path
from loguru import logger
from prettytable import PrettyTable

from nbodybench.backends import BACKENDS, get_backend
from nbodybench.config import ConfigError, load_config
from nbodybench.frontends import headless
from nbodybench.helpers import XorShift64, generate_bodies
from nbodybench.log import setup_logging

USAGE = 'Usage: nbodybench <nplanets> <timesteps>'

app = typer.Typer(add_completion=False)


def usage_error(reason: str | None = None):
    if reason:
        print(reason)
    print(USAGE)
    raise typer.Exit(code=1)


def print_parameters(config: dict, nplanets: int, timesteps: int, backend_name: str):
    table = PrettyTable()
    table.field_names = ["Parameter", "Value", "Unit"]
    table.align = "l"
    table.add_row(["Gravitational constant (G, not applied)", f"{config['G']}", "-"])
    table.add_row(["Time step (dt)", f"{config['dt']}", "-"])
    table.add_row(["Softening", f"{config['softening']}", "-"])
    table.add_row(["Seed", f"{config['seed']}", "-"])
    table.add_row(["Bodies", f"{nplanets}", "-"])
    table.add_row(["Simulation steps", f"{timesteps}", "-"])
    print("\nSimulation Parameters:")
    print(table)

    table = PrettyTable()
    table.field_names = ["Backend", "Frontend"]
    table.align = "l"
    table.add_row([f"{backend_name}", "headless"])
    print("\nSimulation Pipeline:")
    print(table)


@app.command()
def run(
    nplanets: int | None = typer.Argument(None, help='Number of bodies'),
    timesteps: int | None = typer.Argument(None, help='Number of time steps'),
    backend_name: str = typer.Option('cpu', '--backend', '-b', help=f'One of {", ".join(BACKENDS)}'),
    workers: int | None = typer.Option(None, help='Worker processes for the parallel backend'),
    config_file: Path | None = typer.Option(None, '--config', help='JSON constants file'),
    dt: float | None = typer.Option(None, help='Override the time step'),
    progress: bool = typer.Option(False, '--progress', help='Show a progress bar on stderr'),
    verbose: bool = typer.Option(False, '--verbose', '-v'),
):
    """Simulate NPLANETS random bodies for TIMESTEPS steps and report the timing."""
    setup_logging(verbose)

    if nplanets is None or timesteps is None:
        usage_error()
    if nplanets <= 0:
        usage_error(f'nplanets must be positive, got {nplanets}')
    if timesteps < 0:
        usage_error(f'timesteps must be non-negative, got {timesteps}')

    try:
        config = load_config(config_file, dt=dt)
    except (ConfigError, OSError) as e:
        typer.echo(f'Invalid configuration: {e}', err=True)
        raise typer.Exit(code=1)

    if backend_name not in BACKENDS:
        raise typer.BadParameter(f'Unknown backend {backend_name!r}, expected one of {", ".join(BACKENDS)}',
                                 param_hint='--backend')
    if workers is not None and workers < 1:
        raise typer.BadParameter(f'workers must be positive, got {workers}', param_hint='--workers')
    engine = get_backend(backend_name, config, workers=workers)

    if verbose:
        print_parameters(config, nplanets, timesteps, backend_name)

    bodies = generate_bodies(nplanets, XorShift64(config['seed']))
    logger.info('Starting simulation')
    with engine:
        result = headless.Frontend(backend=engine, progress=progress).simulate(bodies, timesteps)

    x, y = result.final_position
    print(f"Total time to run simulation {result.elapsed:0.6f} seconds, final location {x:f} {y:f}")


def main():
    app(prog_name='nbodybench')


if __name__ == "__main__":
    main()
