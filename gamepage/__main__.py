from gamepage.main import main

main()
