from flatport.cli import main

main()
