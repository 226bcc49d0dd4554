from hoarder_relay.serve import main

main()
