from bankroll_sim.ui.cli import main

if __name__ == "__main__":
    main()
