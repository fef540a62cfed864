from nbodybench.backends.cpu.cpu_backend import Backend
