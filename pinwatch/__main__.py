from pinwatch.cli import main

main()
