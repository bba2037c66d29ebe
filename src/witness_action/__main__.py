"""Allow ``python -m witness_action``."""

from witness_action.cli.main import main

if __name__ == "__main__":
    main()
