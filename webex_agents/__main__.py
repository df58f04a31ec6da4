from webex_agents.app import main

main()
