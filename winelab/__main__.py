"""Allow `python -m winelab`."""
from winelab.cli import main

if __name__ == "__main__":
    main()
