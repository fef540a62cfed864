from nbodybench.frontends.headless.headless_frontend import Frontend
