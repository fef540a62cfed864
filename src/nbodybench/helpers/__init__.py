from nbodybench.helpers.body import Body
from nbodybench.helpers.rng import XorShift64, DEFAULT_SEED
from nbodybench.helpers.initial_conditions import generate_bodies
