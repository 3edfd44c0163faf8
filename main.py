"""Root Entry Point.

Lets the monitor run from a checkout with `python main.py`.
It imports from the pokewatch package.
"""

from pokewatch.main import main

if __name__ == "__main__":
    main()
