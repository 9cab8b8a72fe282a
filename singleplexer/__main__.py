from singleplexer.main import main

main()
