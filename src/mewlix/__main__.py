"""Run the Mewlix command line interface with `python -m mewlix`."""

from mewlix.cli import main

if __name__ == "__main__":
    main()
