from nbodybench.backends.vectorized.vectorized_backend import Backend, pack, unpack, kick
