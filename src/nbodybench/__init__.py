from nbodybench.helpers import Body, XorShift64, generate_bodies
from nbodybench.backends import Backend, get_backend
from nbodybench.frontends import Frontend, SimulationResult

__version__ = '0.1.0'
