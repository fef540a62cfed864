from nbodybench.backends.parallel.parallel_backend import Backend
