from sodium.adapters.textual.app import main

main()
