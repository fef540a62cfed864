from nbodybench.frontends.frontend import Frontend, SimulationResult
