from nbodybench.backends.backend import Backend

BACKENDS = ('cpu', 'numpy', 'parallel')


def get_backend(name: str, config: dict, workers: int | None = None) -> Backend:
    if name == 'cpu':
        from nbodybench.backends import cpu
        return cpu.Backend(config=config)
    elif name == 'numpy':
        from nbodybench.backends import vectorized
        return vectorized.Backend(config=config)
    elif name == 'parallel':
        from nbodybench.backends import parallel
        return parallel.Backend(config=config, workers=workers)
    raise ValueError(f'Unknown backend {name!r}, expected one of {", ".join(BACKENDS)}')
