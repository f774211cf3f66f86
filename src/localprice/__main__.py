from localprice.app import main

main()
