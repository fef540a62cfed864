from nbodybench.app import main

main()
